"""Unit tests for ConnectionManager.

Tests cover:
- Open → frames → notification broadcast (scenario A)
- Rejected credential → refresh → single reopen with the new credential (B)
- Refresh failure → single forced logout, no further attempts (C)
- Heartbeat silence → immediate reconnect, window restarts (D)
- Visibility restore while connected → exactly one reopen (E)
- Transient failures, clean closes, teardown, pre-flight expiry

Architecture:
- Fake transport and sessions driven by asyncio queues
- Real TokenRefreshCoordinator, EventDispatcher and HeartbeatMonitor
  (fake clock, so the watchdog only fires when check() is called)
"""

import asyncio
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.application.services import (
    ConnectionManager,
    EventDispatcher,
    HeartbeatMonitor,
    TokenRefreshCoordinator,
)
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.enums import ConnectionStatus
from src.domain.errors import (
    StreamAuthorizationError,
    StreamInterruptedError,
    StreamUnavailableError,
    TokenRefreshError,
)
from src.domain.events import (
    NotificationReceived,
    StreamConnected,
    StreamDisconnected,
)
from src.domain.state_machine import ReconnectPolicy
from src.domain.value_objects import StreamFrame
from src.infrastructure.session import InMemorySessionStore
from tests.conftest import create_credentials

RECONNECT_DELAY = 0.02
REOPEN_DELAY = 0.005
LOGOUT_REASON = "Your session has expired. Please sign in again."

# =============================================================================
# Test Doubles
# =============================================================================


def unauthorized() -> StreamAuthorizationError:
    return StreamAuthorizationError(
        code=ErrorCode.STREAM_AUTHORIZATION_REJECTED,
        message="Notification stream rejected the access credential",
        status_code=401,
    )


def unavailable() -> StreamUnavailableError:
    return StreamUnavailableError(
        code=ErrorCode.STREAM_UNAVAILABLE,
        message="Notification stream returned status 503",
        status_code=503,
    )


class FakeSession:
    """Stream session fed by the test through a queue."""

    def __init__(self) -> None:
        self._queue: asyncio.Queue = asyncio.Queue()
        self.closed = False

    def push(self, frame: StreamFrame) -> None:
        self._queue.put_nowait(frame)

    def end(self) -> None:
        self._queue.put_nowait(None)

    def fail(self) -> None:
        self._queue.put_nowait(
            StreamInterruptedError(
                StreamUnavailableError(
                    code=ErrorCode.STREAM_INTERRUPTED,
                    message="Notification stream interrupted: ReadError",
                )
            )
        )

    async def frames(self):
        while True:
            item = await self._queue.get()
            if item is None:
                return
            if isinstance(item, Exception):
                raise item
            yield item

    async def aclose(self) -> None:
        self.closed = True


class FakeTransport:
    """Stream transport returning scripted outcomes (default: success)."""

    def __init__(self, outcomes=None) -> None:
        self.outcomes = list(outcomes or [])
        self.tokens: list[str] = []
        self.sessions: list[FakeSession] = []
        self.gate: asyncio.Event | None = None
        self.cancelled = 0

    async def open(self, access_token: str):
        self.tokens.append(access_token)
        try:
            if self.gate is not None:
                await self.gate.wait()
            await asyncio.sleep(0)
        except asyncio.CancelledError:
            self.cancelled += 1
            raise
        outcome = self.outcomes.pop(0) if self.outcomes else None
        if outcome is not None:
            return Failure(error=outcome)
        session = FakeSession()
        self.sessions.append(session)
        return Success(value=session)

    @property
    def live_sessions(self) -> list[FakeSession]:
        return [s for s in self.sessions if not s.closed]


class RecordingEventBus:
    def __init__(self) -> None:
        self.events: list = []

    def subscribe(self, event_type, handler) -> None:
        pass

    def unsubscribe(self, event_type, handler) -> None:
        pass

    async def publish(self, event) -> None:
        self.events.append(event)

    def of_type(self, event_type) -> list:
        return [e for e in self.events if isinstance(e, event_type)]


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class Harness:
    """A ConnectionManager wired to doubles."""

    def __init__(self, *, outcomes=None, reissue_result=None, expiry_buffer=timedelta(0)):
        self.transport = FakeTransport(outcomes)
        self.credentials = create_credentials()
        self.store = InMemorySessionStore(self.credentials)
        self.reissue_client = MagicMock()
        self.reissue_client.reissue = AsyncMock(
            return_value=reissue_result
            or Success(value=create_credentials(access_token="access-token-2"))
        )
        self.event_bus = RecordingEventBus()
        self.display = MagicMock()
        self.logout_handler = MagicMock()
        self.logout_handler.force_logout = AsyncMock()
        self.clock = FakeClock()
        self.heartbeat = HeartbeatMonitor(
            timeout=60.0, check_interval=10.0, logger=MagicMock(), clock=self.clock
        )
        self.manager = ConnectionManager(
            transport=self.transport,
            refresh_coordinator=TokenRefreshCoordinator(
                session_store=self.store,
                reissue_client=self.reissue_client,
                logger=MagicMock(),
            ),
            dispatcher=EventDispatcher(
                display=self.display, event_bus=self.event_bus, logger=MagicMock()
            ),
            heartbeat=self.heartbeat,
            logout_handler=self.logout_handler,
            event_bus=self.event_bus,
            logger=MagicMock(),
            policy=ReconnectPolicy(
                reconnect_delay=RECONNECT_DELAY,
                reopen_delay=REOPEN_DELAY,
                logout_reason=LOGOUT_REASON,
            ),
            expiry_buffer=expiry_buffer,
        )


async def settle(rounds: int = 20) -> None:
    """Let scheduled tasks run."""
    for _ in range(rounds):
        await asyncio.sleep(0)


async def wait_for_delay(delay: float) -> None:
    await asyncio.sleep(delay * 3)
    await settle()


@pytest.fixture
async def harness():
    h = Harness()
    yield h
    await h.manager.aclose()


# =============================================================================
# Tests
# =============================================================================


@pytest.mark.unit
class TestOpen:
    """Test opening and receiving."""

    async def test_open_connects_and_emits_connected_once(self, harness):
        harness.manager.open(harness.credentials)
        await settle()

        assert harness.manager.status == ConnectionStatus.OPEN
        assert harness.manager.is_connected is True
        assert harness.transport.tokens == ["access-token-1"]
        assert len(harness.event_bus.of_type(StreamConnected)) == 1

    async def test_open_while_connecting_is_noop(self, harness):
        harness.manager.open(harness.credentials)
        harness.manager.open(harness.credentials)
        harness.manager.open()
        await settle()

        assert harness.transport.tokens == ["access-token-1"]
        assert len(harness.transport.live_sessions) == 1

    async def test_notification_frame_is_broadcast(self, harness):
        """Scenario A."""
        harness.manager.open(harness.credentials)
        await settle()
        harness.clock.now = 5.0

        harness.transport.sessions[0].push(
            StreamFrame(
                event="notification",
                data='{"id": 1, "type": "point-earned", "message": "+10 points"}',
            )
        )
        await settle()

        received = harness.event_bus.of_type(NotificationReceived)
        assert len(received) == 1
        assert received[0].notification.id == 1
        assert received[0].notification.message == "+10 points"
        harness.display.show.assert_called_once_with(received[0].notification)
        assert harness.heartbeat.last_seen == 5.0

    async def test_frames_are_dispatched_in_arrival_order(self, harness):
        harness.manager.open(harness.credentials)
        await settle()

        session = harness.transport.sessions[0]
        for notification_id in (1, 2, 3):
            session.push(
                StreamFrame(
                    event="notification",
                    data=f'{{"id": {notification_id}, "type": "point-earned", "message": "m"}}',
                )
            )
        await settle()

        received = harness.event_bus.of_type(NotificationReceived)
        assert [event.notification.id for event in received] == [1, 2, 3]
        assert harness.display.show.call_count == 3

    async def test_heartbeat_frame_touches_clock_only(self, harness):
        harness.manager.open(harness.credentials)
        await settle()
        harness.clock.now = 30.0

        harness.transport.sessions[0].push(StreamFrame(is_comment=True))
        await settle()

        assert harness.heartbeat.last_seen == 30.0
        assert harness.event_bus.of_type(NotificationReceived) == []

    async def test_malformed_frame_changes_nothing(self, harness):
        harness.manager.open(harness.credentials)
        await settle()
        before = harness.manager.connection

        harness.transport.sessions[0].push(StreamFrame(event="notification", data="{oops"))
        await settle()

        assert harness.manager.connection == before
        harness.display.show.assert_not_called()
        assert harness.event_bus.of_type(NotificationReceived) == []


@pytest.mark.unit
class TestCredentialRefresh:
    """Test the authorization rejection paths."""

    async def test_rejection_refreshes_and_reopens_once_with_new_credential(self):
        """Scenario B."""
        h = Harness(outcomes=[unauthorized()])
        try:
            h.manager.open(h.credentials)
            await settle()
            await wait_for_delay(REOPEN_DELAY)

            h.reissue_client.reissue.assert_awaited_once()
            assert h.transport.tokens == ["access-token-1", "access-token-2"]
            assert h.manager.status == ConnectionStatus.OPEN
            assert h.manager.credentials.access_token == "access-token-2"
            assert h.store.get_credentials().access_token == "access-token-2"
            assert len(h.event_bus.of_type(StreamConnected)) == 1
            h.logout_handler.force_logout.assert_not_awaited()
        finally:
            await h.manager.aclose()

    async def test_refresh_failure_forces_single_logout(self):
        """Scenario C."""
        h = Harness(
            outcomes=[unauthorized()],
            reissue_result=Failure(
                error=TokenRefreshError(
                    code=ErrorCode.TOKEN_REFRESH_REJECTED,
                    message="Refresh credential was rejected",
                    status_code=401,
                )
            ),
        )
        try:
            h.manager.open(h.credentials)
            await settle()

            assert h.manager.status == ConnectionStatus.FATAL
            h.logout_handler.force_logout.assert_awaited_once_with(LOGOUT_REASON)

            h.manager.open()
            h.manager.restart()
            await wait_for_delay(RECONNECT_DELAY)

            assert h.transport.tokens == ["access-token-1"]
            h.logout_handler.force_logout.assert_awaited_once()
        finally:
            await h.manager.aclose()

    async def test_rejection_after_refresh_is_fatal(self):
        h = Harness(outcomes=[unauthorized(), unauthorized()])
        try:
            h.manager.open(h.credentials)
            await settle()
            await wait_for_delay(REOPEN_DELAY)

            assert h.transport.tokens == ["access-token-1", "access-token-2"]
            assert h.manager.status == ConnectionStatus.FATAL
            h.reissue_client.reissue.assert_awaited_once()
            h.logout_handler.force_logout.assert_awaited_once_with(LOGOUT_REASON)
        finally:
            await h.manager.aclose()

    async def test_expired_credential_is_refreshed_before_presenting(self):
        h = Harness()
        try:
            h.manager.open(create_credentials(expires_in=timedelta(seconds=-1)))
            await settle()
            await wait_for_delay(REOPEN_DELAY)

            assert h.transport.tokens == ["access-token-2"]
            assert h.manager.status == ConnectionStatus.OPEN
        finally:
            await h.manager.aclose()

    async def test_credential_within_expiry_buffer_is_refreshed(self):
        h = Harness(expiry_buffer=timedelta(minutes=2))
        try:
            h.manager.open(create_credentials(expires_in=timedelta(minutes=1)))
            await settle()
            await wait_for_delay(REOPEN_DELAY)

            assert h.transport.tokens == ["access-token-2"]
        finally:
            await h.manager.aclose()

    async def test_refreshed_credential_within_expiry_buffer_is_presented(self):
        h = Harness(
            outcomes=[unauthorized()],
            reissue_result=Success(
                value=create_credentials(
                    access_token="access-token-2", expires_in=timedelta(seconds=60)
                )
            ),
            expiry_buffer=timedelta(minutes=2),
        )
        try:
            h.manager.open(h.credentials)
            await settle()
            await wait_for_delay(REOPEN_DELAY)

            assert h.transport.tokens == ["access-token-1", "access-token-2"]
            assert h.manager.status == ConnectionStatus.OPEN
            h.reissue_client.reissue.assert_awaited_once()
            h.logout_handler.force_logout.assert_not_awaited()
        finally:
            await h.manager.aclose()

    async def test_rejection_after_refresh_and_transport_failure_refreshes_again(self):
        h = Harness(outcomes=[unauthorized(), unavailable(), unauthorized()])
        try:
            h.manager.open(h.credentials)
            await settle()
            await wait_for_delay(REOPEN_DELAY)
            await wait_for_delay(RECONNECT_DELAY)
            await wait_for_delay(REOPEN_DELAY)

            assert h.transport.tokens == [
                "access-token-1",
                "access-token-2",
                "access-token-2",
                "access-token-2",
            ]
            assert h.reissue_client.reissue.await_count == 2
            assert h.manager.status == ConnectionStatus.OPEN
            h.logout_handler.force_logout.assert_not_awaited()
        finally:
            await h.manager.aclose()

    async def test_logout_handler_failure_is_contained(self):
        h = Harness(
            outcomes=[unauthorized()],
            reissue_result=Failure(
                error=TokenRefreshError(
                    code=ErrorCode.TOKEN_REFRESH_FAILED,
                    message="Token reissue request timed out",
                )
            ),
        )
        h.logout_handler.force_logout.side_effect = RuntimeError("router unavailable")
        try:
            h.manager.open(h.credentials)
            await settle()

            h.logout_handler.force_logout.assert_awaited_once()
            assert h.manager.status == ConnectionStatus.FATAL
        finally:
            await h.manager.aclose()


@pytest.mark.unit
class TestReconnect:
    """Test recovery from transport failures."""

    async def test_transient_failures_eventually_reopen(self):
        h = Harness(outcomes=[unavailable(), unavailable(), unavailable()])
        try:
            h.manager.open(h.credentials)
            for _ in range(4):
                await wait_for_delay(RECONNECT_DELAY)
                assert len(h.transport.live_sessions) <= 1

            assert h.manager.status == ConnectionStatus.OPEN
            assert len(h.transport.tokens) == 4
            assert len(h.event_bus.of_type(StreamConnected)) == 1
        finally:
            await h.manager.aclose()

    async def test_clean_close_reconnects_after_delay(self, harness):
        harness.manager.open(harness.credentials)
        await settle()
        first = harness.transport.sessions[0]

        first.end()
        await settle()

        assert first.closed is True
        assert harness.manager.status == ConnectionStatus.RECONNECT_SCHEDULED
        assert harness.event_bus.of_type(StreamDisconnected)[0].reason == "stream_closed"

        await wait_for_delay(RECONNECT_DELAY)

        assert harness.manager.status == ConnectionStatus.OPEN
        assert len(harness.transport.sessions) == 2
        assert len(harness.transport.live_sessions) == 1

    async def test_interrupted_stream_reconnects(self, harness):
        harness.manager.open(harness.credentials)
        await settle()

        harness.transport.sessions[0].fail()
        await settle()
        await wait_for_delay(RECONNECT_DELAY)

        assert harness.manager.status == ConnectionStatus.OPEN
        assert len(harness.transport.sessions) == 2
        assert harness.event_bus.of_type(StreamDisconnected)[0].reason == "stream_interrupted"

    async def test_heartbeat_silence_forces_immediate_reconnect(self, harness):
        """Scenario D."""
        harness.manager.open(harness.credentials)
        await settle()
        first = harness.transport.sessions[0]

        harness.clock.now = 70.0
        assert harness.heartbeat.check() is True
        await settle()

        assert first.closed is True
        assert len(harness.transport.sessions) == 2
        assert harness.manager.status == ConnectionStatus.OPEN
        assert harness.heartbeat.last_seen == 70.0
        harness.clock.now = 125.0
        assert harness.heartbeat.check() is False

    async def test_restart_while_connected_reopens_once(self, harness):
        """Scenario E."""
        harness.manager.open(harness.credentials)
        await settle()

        harness.manager.restart()
        harness.manager.restart()
        await settle()

        assert len(harness.transport.tokens) == 2
        assert len(harness.transport.live_sessions) == 1
        assert harness.manager.status == ConnectionStatus.OPEN


@pytest.mark.unit
class TestTeardown:
    """Test teardown()."""

    async def test_teardown_cancels_pending_reconnect(self):
        h = Harness(outcomes=[unavailable()])
        try:
            h.manager.open(h.credentials)
            await settle()
            assert h.manager.status == ConnectionStatus.RECONNECT_SCHEDULED

            h.manager.teardown()
            await wait_for_delay(RECONNECT_DELAY)

            assert h.transport.tokens == ["access-token-1"]
            assert h.manager.status == ConnectionStatus.IDLE
        finally:
            await h.manager.aclose()

    async def test_teardown_aborts_in_flight_open(self, harness):
        harness.transport.gate = asyncio.Event()
        harness.manager.open(harness.credentials)
        await settle()

        harness.manager.teardown()
        await settle()

        assert harness.transport.cancelled == 1
        assert harness.transport.sessions == []

    async def test_teardown_closes_open_stream(self, harness):
        harness.manager.open(harness.credentials)
        await settle()

        harness.manager.teardown()
        await settle()

        assert harness.transport.sessions[0].closed is True
        assert harness.manager.is_connected is False
        assert harness.heartbeat.is_running is False
        assert harness.event_bus.of_type(StreamDisconnected)[-1].reason == "teardown"

    async def test_teardown_is_idempotent(self, harness):
        harness.manager.teardown()
        harness.manager.teardown()
        await settle()

        assert harness.manager.status == ConnectionStatus.IDLE
        assert harness.transport.tokens == []
