"""Pure transition function for the notification stream.

``transition(connection, signal, policy)`` returns the next
StreamConnection and the ordered effects to execute. It performs no I/O
and reads no clock, so every reconnect rule is testable as a table of
(state, signal) → (state, effects).

Rules:
    - Every open aborts the previous stream first and starts a new attempt.
    - Opening while a connect or refresh is in flight is a no-op.
    - Signals tagged with an old attempt are ignored.
    - A rejected credential is reissued once; a rejection right after a
      reissue, or a failed reissue, is fatal.
    - Fatal forces should_reconnect off and issues exactly one logout.
    - Transport failures and clean closes reconnect after a fixed delay
      while should_reconnect holds.
    - Heartbeat timeout and tab visibility reopen immediately unless a
      connect or refresh is in flight.
    - Teardown cancels everything and clears every guard.
"""

from dataclasses import dataclass

from src.domain.entities import StreamConnection
from src.domain.enums import ConnectionStatus
from src.domain.state_machine.effects import (
    AbortStream,
    CancelReconnect,
    DispatchFrame,
    EmitConnected,
    EmitDisconnected,
    ForceLogout,
    OpenStream,
    ScheduleReconnect,
    StartHeartbeat,
    StartRefresh,
    StopHeartbeat,
    StreamEffect,
    TouchHeartbeat,
)
from src.domain.state_machine.signals import (
    Activated,
    AuthorizationRejected,
    FrameReceived,
    HeartbeatTimedOut,
    OpenRequested,
    Opened,
    ReconnectDue,
    RefreshFailed,
    RefreshSucceeded,
    StreamClosed,
    StreamSignal,
    TeardownRequested,
    TransportFailed,
    VisibilityRestored,
)

type Transition = tuple[StreamConnection, list[StreamEffect]]


@dataclass(frozen=True, kw_only=True, slots=True)
class ReconnectPolicy:
    """Timing and messaging inputs of the state machine.

    Attributes:
        reconnect_delay: Fixed delay after a transport failure (seconds).
        reopen_delay: Short yield before reopening after a reissue (seconds).
        logout_reason: Message carried by ForceLogout.
    """

    reconnect_delay: float
    reopen_delay: float
    logout_reason: str


def transition(
    connection: StreamConnection,
    signal: StreamSignal,
    policy: ReconnectPolicy,
) -> Transition:
    """Compute the next state and effects for a signal.

    Args:
        connection: Current snapshot.
        signal: Input to apply.
        policy: Delays and logout message.

    Returns:
        Tuple of (new snapshot, effects in execution order).
    """
    match signal:
        case Activated():
            return _activate(connection)
        case OpenRequested():
            return _request_open(connection, reason="open_requested")
        case Opened(attempt=attempt):
            return _opened(connection, attempt)
        case FrameReceived(attempt=attempt, frame=frame):
            if attempt != connection.attempt or not connection.is_open:
                return connection, []
            return connection, [TouchHeartbeat(), DispatchFrame(frame=frame)]
        case AuthorizationRejected(attempt=attempt):
            return _authorization_rejected(connection, attempt, policy)
        case RefreshSucceeded():
            return _refresh_succeeded(connection, policy)
        case RefreshFailed():
            if not connection.refreshing:
                return connection, []
            return _fatal(connection.evolve(refreshing=False), policy)
        case TransportFailed(attempt=attempt, reason=reason):
            return _connection_lost(connection, attempt, reason, policy)
        case StreamClosed(attempt=attempt):
            return _connection_lost(connection, attempt, "stream_closed", policy)
        case ReconnectDue():
            return _reconnect_due(connection)
        case HeartbeatTimedOut():
            return _heartbeat_timed_out(connection)
        case VisibilityRestored():
            if not connection.can_reconnect or connection.is_busy:
                return connection, []
            return _begin_open(connection, reason="visibility_restored")
        case TeardownRequested():
            return _teardown(connection)
    return connection, []


def _begin_open(connection: StreamConnection, *, reason: str) -> Transition:
    attempt = connection.attempt + 1
    effects: list[StreamEffect] = []
    if connection.is_open:
        effects.append(EmitDisconnected(reason=reason))
    effects += [CancelReconnect(), AbortStream(), OpenStream(attempt=attempt)]
    return (
        connection.evolve(
            status=ConnectionStatus.CONNECTING,
            connecting=True,
            reconnect_scheduled=False,
            attempt=attempt,
        ),
        effects,
    )


def _activate(connection: StreamConnection) -> Transition:
    status = connection.status
    if status == ConnectionStatus.FATAL:
        status = ConnectionStatus.IDLE
    activated = connection.evolve(
        status=status,
        should_reconnect=True,
        logging_out=False,
        after_refresh=False,
    )
    opened, effects = _request_open(activated, reason="authenticated")
    return opened, [StartHeartbeat(), *effects]


def _request_open(connection: StreamConnection, *, reason: str) -> Transition:
    if not connection.can_reconnect or connection.is_busy:
        return connection, []
    return _begin_open(connection, reason=reason)


def _opened(connection: StreamConnection, attempt: int) -> Transition:
    if attempt != connection.attempt or not connection.connecting:
        return connection, []
    return (
        connection.evolve(
            status=ConnectionStatus.OPEN,
            connecting=False,
            after_refresh=False,
        ),
        [TouchHeartbeat(), EmitConnected(attempt=attempt)],
    )


def _authorization_rejected(
    connection: StreamConnection,
    attempt: int,
    policy: ReconnectPolicy,
) -> Transition:
    if attempt != connection.attempt:
        return connection, []

    settled = connection.evolve(connecting=False)

    # Another refresh already covers this credential.
    if connection.refreshing:
        return settled, [AbortStream()]

    if not settled.can_reconnect:
        if settled.status != ConnectionStatus.FATAL:
            settled = settled.evolve(status=ConnectionStatus.IDLE)
        return settled, [AbortStream()]

    if connection.after_refresh:
        return _fatal(settled, policy)

    return (
        settled.evolve(status=ConnectionStatus.REFRESHING_CREDENTIAL, refreshing=True),
        [AbortStream(), StartRefresh()],
    )


def _refresh_succeeded(connection: StreamConnection, policy: ReconnectPolicy) -> Transition:
    if not connection.refreshing:
        return connection, []

    settled = connection.evolve(refreshing=False)
    if not settled.can_reconnect:
        return settled.evolve(status=ConnectionStatus.IDLE), []

    return (
        settled.evolve(
            status=ConnectionStatus.RECONNECT_SCHEDULED,
            reconnect_scheduled=True,
            after_refresh=True,
        ),
        [CancelReconnect(), ScheduleReconnect(delay=policy.reopen_delay)],
    )


def _fatal(connection: StreamConnection, policy: ReconnectPolicy) -> Transition:
    effects: list[StreamEffect] = []
    if connection.is_open:
        effects.append(EmitDisconnected(reason="fatal"))
    effects += [CancelReconnect(), AbortStream(), StopHeartbeat()]
    if not connection.logging_out:
        effects.append(ForceLogout(reason=policy.logout_reason))
    return (
        connection.evolve(
            status=ConnectionStatus.FATAL,
            should_reconnect=False,
            connecting=False,
            refreshing=False,
            reconnect_scheduled=False,
            logging_out=True,
            attempt=connection.attempt + 1,
        ),
        effects,
    )


def _connection_lost(
    connection: StreamConnection,
    attempt: int,
    reason: str,
    policy: ReconnectPolicy,
) -> Transition:
    if attempt != connection.attempt or connection.refreshing:
        return connection, []

    effects: list[StreamEffect] = []
    if connection.is_open:
        effects.append(EmitDisconnected(reason=reason))

    # The refreshed credential has now been presented; a later rejection
    # is a fresh one and gets its own refresh.
    settled = connection.evolve(connecting=False, after_refresh=False)
    if not settled.can_reconnect:
        if settled.status != ConnectionStatus.FATAL:
            settled = settled.evolve(status=ConnectionStatus.IDLE)
        return settled, effects

    effects += [CancelReconnect(), ScheduleReconnect(delay=policy.reconnect_delay)]
    return (
        settled.evolve(status=ConnectionStatus.RECONNECT_SCHEDULED, reconnect_scheduled=True),
        effects,
    )


def _reconnect_due(connection: StreamConnection) -> Transition:
    if not connection.reconnect_scheduled:
        return connection, []

    settled = connection.evolve(reconnect_scheduled=False)
    if not settled.can_reconnect:
        if settled.status != ConnectionStatus.FATAL:
            settled = settled.evolve(status=ConnectionStatus.IDLE)
        return settled, []
    if settled.is_busy:
        return settled, []
    return _begin_open(settled, reason="reconnect")


def _heartbeat_timed_out(connection: StreamConnection) -> Transition:
    if not connection.can_reconnect or connection.is_busy:
        return connection, []
    if connection.status not in (ConnectionStatus.OPEN, ConnectionStatus.RECONNECT_SCHEDULED):
        return connection, []
    reopened, effects = _begin_open(connection, reason="heartbeat_timeout")
    return reopened, [*effects, TouchHeartbeat()]


def _teardown(connection: StreamConnection) -> Transition:
    effects: list[StreamEffect] = []
    if connection.is_open:
        effects.append(EmitDisconnected(reason="teardown"))
    effects += [CancelReconnect(), AbortStream(), StopHeartbeat()]
    return connection.reset(), effects
