"""Forced logout handler with a deduplication window.

Several independent failure paths can decide the session is over at
nearly the same moment (a failed reissue, a second rejection). Only the
first call within ``dedupe_seconds`` signs the user out; later calls in
the window are dropped.

Flow:
    1. Drop the call if a logout ran within the window.
    2. Invoke the host's sign-out callable with the reason.
    3. Publish SessionForcedLogout on the event bus.
"""

import inspect
import time
from collections.abc import Awaitable, Callable

from src.domain.events import SessionForcedLogout
from src.domain.protocols import EventBusProtocol, LoggerProtocol

SignOut = Callable[[str], Awaitable[None] | None]


class DedupingLogoutHandler:
    """LogoutHandlerProtocol wrapping the host's sign-out callable.

    Attributes:
        _sign_out: Host callable ending the session (sync or async).
        _event_bus: Bus receiving SessionForcedLogout.
        _logger: Structured logger.
        _dedupe_seconds: Window in which repeat calls are dropped.
        _clock: Monotonic clock (injectable for tests).
        _last_logout_at: Clock reading of the last accepted call.
    """

    def __init__(
        self,
        *,
        sign_out: SignOut,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
        dedupe_seconds: float = 3.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._sign_out = sign_out
        self._event_bus = event_bus
        self._logger = logger
        self._dedupe_seconds = dedupe_seconds
        self._clock = clock
        self._last_logout_at: float | None = None

    async def force_logout(self, reason: str) -> None:
        """Sign the user out unless a logout ran within the window.

        Args:
            reason: Message shown to the user.
        """
        now = self._clock()
        if (
            self._last_logout_at is not None
            and now - self._last_logout_at < self._dedupe_seconds
        ):
            self._logger.debug(
                "forced_logout_deduplicated",
                seconds_since_last=round(now - self._last_logout_at, 3),
            )
            return
        self._last_logout_at = now

        self._logger.warning("forced_logout", reason=reason)
        outcome = self._sign_out(reason)
        if inspect.isawaitable(outcome):
            await outcome

        await self._event_bus.publish(SessionForcedLogout(reason=reason))
