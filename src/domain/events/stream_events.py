"""Notification stream domain events.

Published on the event bus by the stream client:

    NotificationReceived  - a valid envelope arrived (durable broadcast)
    StreamConnected       - a stream was opened (the "connected" signal)
    StreamDisconnected    - an open stream was lost; a reconnect may follow
    SessionForcedLogout   - the session was ended after a fatal failure

Handlers must tolerate duplicates: delivery across reconnects is
best-effort and no deduplication is performed.
"""

from dataclasses import dataclass

from src.domain.events.base_event import DomainEvent
from src.domain.value_objects import NotificationEnvelope


@dataclass(frozen=True, kw_only=True, slots=True)
class NotificationReceived(DomainEvent):
    """A notification was received from the stream.

    Attributes:
        notification: The decoded envelope.
    """

    notification: NotificationEnvelope


@dataclass(frozen=True, kw_only=True, slots=True)
class StreamConnected(DomainEvent):
    """The notification stream was opened.

    Attributes:
        attempt: Generation of the stream that opened.
    """

    attempt: int


@dataclass(frozen=True, kw_only=True, slots=True)
class StreamDisconnected(DomainEvent):
    """An open notification stream was lost.

    Attributes:
        reason: Why the stream ended (stream_closed, heartbeat_timeout, ...).
    """

    reason: str


@dataclass(frozen=True, kw_only=True, slots=True)
class SessionForcedLogout(DomainEvent):
    """The authenticated session was ended by the stream client.

    Attributes:
        reason: Message shown to the user.
    """

    reason: str
