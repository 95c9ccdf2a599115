"""EventBusProtocol: application-wide broadcast port.

The stream client publishes four events here:

    NotificationReceived   a valid notification arrived (after display)
    StreamConnected        the stream opened
    StreamDisconnected     an open stream was lost or torn down
    SessionForcedLogout    the session was ended by the client

Independent parts of the host (badge counter, connection indicator)
subscribe without a reference to the stream.

Usage:
    >>> async def bump_badge(event: NotificationReceived) -> None:
    ...     badge.increment()
    >>> get_event_bus().subscribe(NotificationReceived, bump_badge)
"""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from src.domain.events.base_event import DomainEvent

EventHandler = Callable[[Any], Awaitable[None]]
"""Async callable receiving one event."""


class EventBusProtocol(Protocol):
    """Pub/sub keyed by exact event class.

    Implementations are fail-open: a failing handler is neither seen by
    the publisher nor allowed to stop the other handlers.
    """

    def subscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> None: ...

    def unsubscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> None:
        """Remove a registration (no-op when absent)."""
        ...

    async def publish(self, event: DomainEvent) -> None:
        """Deliver ``event`` to its handlers; never raises handler errors."""
        ...
