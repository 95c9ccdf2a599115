"""Connection manager for the notification stream.

Owns the single active stream of one authenticated identity. Every input
(a host request, a transport outcome, a timer) becomes a StreamSignal;
the pure ``transition`` function decides the next StreamConnection and
the effects, and this class executes those effects.

Flow:
    1. open(credentials) → Activated → OpenStream(attempt)
    2. The stream task opens the transport with the cached credential
    3. Success → Opened, then FrameReceived per frame (dispatched in order)
    4. 401/403 → AuthorizationRejected → StartRefresh → RefreshSucceeded
       → short delay → OpenStream with the new credential
    5. Other failures or a clean close → fixed-delay reconnect
    6. Refresh failure, or a rejection right after a refresh → ForceLogout

Concurrency:
    Signals are handled synchronously on the event loop: a transition and
    its effects run without an intervening await, so guard flags are
    checked and set atomically. Aborting a stream cancels the task that
    owns it, which closes the HTTP response.
"""

import asyncio
from collections.abc import Coroutine
from datetime import timedelta
from typing import Any

from src.application.services.event_dispatcher import EventDispatcher
from src.application.services.heartbeat_monitor import HeartbeatMonitor
from src.application.services.token_refresh_coordinator import TokenRefreshCoordinator
from src.core.result import Failure, Success
from src.domain.entities import StreamConnection
from src.domain.enums import ConnectionStatus
from src.domain.errors import StreamAuthorizationError, StreamInterruptedError
from src.domain.events import StreamConnected, StreamDisconnected
from src.domain.protocols import (
    EventBusProtocol,
    LoggerProtocol,
    LogoutHandlerProtocol,
    StreamTransportProtocol,
)
from src.domain.state_machine import (
    AbortStream,
    Activated,
    AuthorizationRejected,
    CancelReconnect,
    DispatchFrame,
    EmitConnected,
    EmitDisconnected,
    ForceLogout,
    FrameReceived,
    HeartbeatTimedOut,
    OpenRequested,
    Opened,
    OpenStream,
    ReconnectDue,
    ReconnectPolicy,
    RefreshFailed,
    RefreshSucceeded,
    ScheduleReconnect,
    StartHeartbeat,
    StartRefresh,
    StopHeartbeat,
    StreamClosed,
    StreamEffect,
    StreamSignal,
    TeardownRequested,
    TouchHeartbeat,
    TransportFailed,
    VisibilityRestored,
    transition,
)
from src.domain.value_objects import CredentialPair


class ConnectionManager:
    """Executes the stream state machine for one identity.

    Dependencies (injected via constructor):
        - StreamTransportProtocol: Opens the HTTP event stream
        - TokenRefreshCoordinator: Single-flight credential reissue
        - EventDispatcher: Routes frames to the sinks
        - HeartbeatMonitor: Liveness watchdog
        - LogoutHandlerProtocol: Ends the session on fatal failures
        - EventBusProtocol: Receives StreamConnected / StreamDisconnected
        - LoggerProtocol: Structured logging

    Attributes:
        policy: Reconnect delays and the forced logout message.
        expiry_buffer: A credential expiring within this window is refreshed
            before it is presented.
    """

    def __init__(
        self,
        *,
        transport: StreamTransportProtocol,
        refresh_coordinator: TokenRefreshCoordinator,
        dispatcher: EventDispatcher,
        heartbeat: HeartbeatMonitor,
        logout_handler: LogoutHandlerProtocol,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
        policy: ReconnectPolicy,
        expiry_buffer: timedelta = timedelta(0),
    ) -> None:
        self._transport = transport
        self._refresh_coordinator = refresh_coordinator
        self._dispatcher = dispatcher
        self._heartbeat = heartbeat
        self._logout_handler = logout_handler
        self._event_bus = event_bus
        self._logger = logger
        self.policy = policy
        self.expiry_buffer = expiry_buffer

        self._connection = StreamConnection()
        self._credentials: CredentialPair | None = None
        self._stream_task: asyncio.Task[None] | None = None
        self._refresh_task: asyncio.Task[None] | None = None
        self._reconnect_handle: asyncio.TimerHandle | None = None
        self._background: set[asyncio.Task[None]] = set()

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    @property
    def connection(self) -> StreamConnection:
        """Current state snapshot."""
        return self._connection

    @property
    def status(self) -> ConnectionStatus:
        return self._connection.status

    @property
    def is_connected(self) -> bool:
        return self._connection.is_open

    @property
    def credentials(self) -> CredentialPair | None:
        """Credential the next open will present."""
        return self._credentials

    def open(self, credentials: CredentialPair | None = None) -> None:
        """Keep a stream alive for the identity owning ``credentials``.

        With credentials, (re)activates the manager: should_reconnect is
        set and a stream is opened unless an attempt is already in
        progress. Without credentials, reopens with the cached credential
        if the manager is active and idle.

        Args:
            credentials: Current pair from the session store.
        """
        if credentials is not None:
            self._credentials = credentials
            self._handle(Activated())
        else:
            self._handle(OpenRequested())

    def restart(self) -> None:
        """Tear the current stream down and reopen it unless busy."""
        self._handle(VisibilityRestored())

    def teardown(self) -> None:
        """Abort everything and clear every guard (idempotent)."""
        self._handle(TeardownRequested())
        if self._refresh_task is not None:
            self._refresh_task.cancel()
            self._refresh_task = None

    async def aclose(self) -> None:
        """Tear down and wait for cancelled tasks and pending events."""
        stream_task = self._stream_task
        self.teardown()
        pending = [task for task in (stream_task, *self._background) if task is not None]
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    # -------------------------------------------------------------------------
    # State machine driver
    # -------------------------------------------------------------------------

    def _handle(self, signal: StreamSignal) -> list[StreamEffect]:
        previous = self._connection
        self._connection, effects = transition(previous, signal, self.policy)

        if self._connection.status != previous.status:
            self._logger.debug(
                "sse_state_changed",
                signal=type(signal).__name__,
                previous_status=previous.status.value,
                status=self._connection.status.value,
                attempt=self._connection.attempt,
            )

        for effect in effects:
            self._execute(effect)
        return effects

    def _execute(self, effect: StreamEffect) -> None:
        match effect:
            case OpenStream(attempt=attempt):
                self._stream_task = asyncio.create_task(
                    self._run_stream(attempt), name=f"sse-stream-{attempt}"
                )
            case AbortStream():
                self._abort_stream()
            case ScheduleReconnect(delay=delay):
                self._logger.info("sse_reconnect_scheduled", delay_seconds=delay)
                loop = asyncio.get_running_loop()
                self._reconnect_handle = loop.call_later(delay, self._reconnect_due)
            case CancelReconnect():
                if self._reconnect_handle is not None:
                    self._reconnect_handle.cancel()
                    self._reconnect_handle = None
            case StartRefresh():
                self._refresh_task = asyncio.create_task(
                    self._run_refresh(), name="sse-refresh"
                )
            case StartHeartbeat():
                self._heartbeat.start(self._heartbeat_timed_out)
            case StopHeartbeat():
                self._heartbeat.stop()
            case TouchHeartbeat():
                self._heartbeat.touch()
            case EmitConnected(attempt=attempt):
                self._logger.info("sse_connected", attempt=attempt)
                self._spawn(self._event_bus.publish(StreamConnected(attempt=attempt)))
            case EmitDisconnected(reason=reason):
                self._logger.info("sse_disconnected", reason=reason)
                self._spawn(self._event_bus.publish(StreamDisconnected(reason=reason)))
            case ForceLogout(reason=reason):
                self._spawn(self._force_logout(reason))

    def _abort_stream(self) -> None:
        task = self._stream_task
        self._stream_task = None
        # A stream task aborting itself just returns.
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()

    def _reconnect_due(self) -> None:
        self._reconnect_handle = None
        self._handle(ReconnectDue())

    def _heartbeat_timed_out(self) -> None:
        self._handle(HeartbeatTimedOut())

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.create_task(coro)
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    # -------------------------------------------------------------------------
    # Tasks
    # -------------------------------------------------------------------------

    async def _run_stream(self, attempt: int) -> None:
        credentials = self._credentials
        # A just-refreshed credential is always presented; only the server
        # may reject it.
        if credentials is None or (
            not self._connection.after_refresh
            and credentials.is_expiring_soon(threshold=self.expiry_buffer)
        ):
            self._logger.info("sse_credential_expired", attempt=attempt)
            self._handle(AuthorizationRejected(attempt=attempt))
            return

        self._logger.info("sse_connecting", attempt=attempt)
        result = await self._transport.open(credentials.access_token)

        match result:
            case Failure(error=StreamAuthorizationError() as error):
                self._logger.warning(
                    "sse_authorization_rejected",
                    attempt=attempt,
                    **error.log_context(),
                )
                self._handle(AuthorizationRejected(attempt=attempt))
                return
            case Failure(error=error):
                self._logger.warning(
                    "sse_connection_failed",
                    attempt=attempt,
                    **error.log_context(),
                )
                self._handle(TransportFailed(attempt=attempt, reason=error.code.value))
                return
            case Success(value=session):
                pass

        try:
            self._handle(Opened(attempt=attempt))
            if self._connection.attempt != attempt:
                return
            async for frame in session.frames():
                effects = self._handle(FrameReceived(attempt=attempt, frame=frame))
                for effect in effects:
                    if isinstance(effect, DispatchFrame):
                        await self._dispatcher.dispatch(effect.frame)
                if self._connection.attempt != attempt:
                    return
        except StreamInterruptedError as e:
            self._logger.warning(
                "sse_stream_interrupted",
                attempt=attempt,
                **e.error.log_context(),
            )
            self._handle(TransportFailed(attempt=attempt, reason=e.error.code.value))
        else:
            self._logger.info("sse_stream_closed", attempt=attempt)
            self._handle(StreamClosed(attempt=attempt))
        finally:
            await session.aclose()

    async def _run_refresh(self) -> None:
        match await self._refresh_coordinator.refresh():
            case Success(value=credentials):
                self._credentials = credentials
                self._handle(RefreshSucceeded())
            case Failure(error=error):
                self._handle(RefreshFailed(reason=error.code.value))

    async def _force_logout(self, reason: str) -> None:
        self._logger.error("sse_forced_logout", reason=reason)
        try:
            await self._logout_handler.force_logout(reason)
        except Exception as e:
            self._logger.error("sse_forced_logout_failed", error=e)
