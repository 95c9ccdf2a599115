"""Base domain event class.

Domain events represent "things that happened" to the notification
stream and are always named in past tense (NotificationReceived,
StreamConnected, SessionForcedLogout). They are broadcast on the event
bus so independent parts of the host application (a badge counter, a
connection indicator) can react without knowing about the stream.

Architecture:
    - Frozen dataclass (immutable after creation)
    - Auto-generated event_id (UUID v7, time ordered)
    - occurred_at timestamp (UTC)

Usage:
    >>> @dataclass(frozen=True, kw_only=True, slots=True)
    >>> class StreamConnected(DomainEvent):
    ...     attempt: int
    >>>
    >>> event = StreamConnected(attempt=1)
    >>> print(event.event_id)  # Auto-generated UUID
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from uuid_extensions import uuid7


@dataclass(frozen=True, kw_only=True, slots=True)
class DomainEvent:
    """Base class for all domain events.

    All domain events MUST:
        1. Inherit from this base class
        2. Use past tense naming
        3. Be frozen dataclasses with kw_only=True

    Attributes:
        event_id: Unique identifier for this event instance (UUID v7).
        occurred_at: Timestamp when the event occurred (UTC).
    """

    event_id: UUID = field(default_factory=uuid7)
    """Unique identifier for this event instance.

    UUID v7 so identifiers sort in emission order.
    """

    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    """Timestamp when the event occurred (UTC timezone)."""
