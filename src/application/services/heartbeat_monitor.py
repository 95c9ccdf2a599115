"""Stream liveness watchdog.

Some failures never surface as an error or a close: an intermediary can
silently drop a long-lived connection. The only symptom is that the
server's periodic frames stop arriving. The monitor records when the
stream was last seen alive and, checked every ``check_interval``
seconds, calls ``on_timeout`` once ``timeout`` seconds pass without a
frame. The window then restarts.
"""

import asyncio
import time
from collections.abc import Callable

from src.domain.protocols import LoggerProtocol


class HeartbeatMonitor:
    """Last-seen clock plus a periodic check task.

    Attributes:
        timeout: Silence (seconds) after which the stream is presumed dead.
        check_interval: Seconds between checks; shorter than ``timeout``.
    """

    def __init__(
        self,
        *,
        timeout: float,
        check_interval: float,
        logger: LoggerProtocol,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if check_interval >= timeout:
            raise ValueError("check_interval must be shorter than timeout")
        self.timeout = timeout
        self.check_interval = check_interval
        self._logger = logger
        self._clock = clock
        self._last_seen: float | None = None
        self._on_timeout: Callable[[], None] | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def last_seen(self) -> float | None:
        """Clock reading of the last touch, or None before the first one."""
        return self._last_seen

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def touch(self) -> None:
        """Record now as the last moment the stream was seen alive."""
        self._last_seen = self._clock()

    def silence(self) -> float:
        """Seconds since the last touch (0.0 before the first one)."""
        if self._last_seen is None:
            return 0.0
        return self._clock() - self._last_seen

    def check(self) -> bool:
        """Compare the silence against the timeout once.

        Returns:
            True if the timeout elapsed and ``on_timeout`` was invoked.
        """
        silence = self.silence()
        if self._last_seen is None or silence <= self.timeout:
            return False

        self._logger.warning(
            "sse_heartbeat_timeout",
            silence_seconds=round(silence, 3),
            timeout_seconds=self.timeout,
        )
        self.touch()
        if self._on_timeout is not None:
            self._on_timeout()
        return True

    def start(self, on_timeout: Callable[[], None]) -> None:
        """Start the periodic check, restarting the window.

        Args:
            on_timeout: Called (synchronously) when the stream went silent.
        """
        self._on_timeout = on_timeout
        self.touch()
        if self.is_running:
            return
        self._task = asyncio.create_task(self._watch(), name="sse-heartbeat")
        self._logger.debug(
            "sse_heartbeat_started",
            timeout_seconds=self.timeout,
            check_interval_seconds=self.check_interval,
        )

    def stop(self) -> None:
        """Cancel the periodic check (idempotent)."""
        if self._task is not None:
            self._task.cancel()
            self._task = None
            self._logger.debug("sse_heartbeat_stopped")
        self._on_timeout = None

    async def _watch(self) -> None:
        while True:
            await asyncio.sleep(self.check_interval)
            try:
                self.check()
            except Exception as e:
                self._logger.error("sse_heartbeat_check_failed", error=e)
