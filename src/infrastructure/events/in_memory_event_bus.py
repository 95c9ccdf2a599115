"""In-memory event bus.

Application-wide broadcast for stream events. The stream client publishes
NotificationReceived, StreamConnected, StreamDisconnected and
SessionForcedLogout here; host code (badge counters, connection
indicators, audit hooks) subscribes without knowing about the stream.

Behavior:
    - Handlers are matched on the exact event class.
    - Handlers of one event run concurrently.
    - Fail-open: a failing handler is logged and never reaches the
      publisher or the other handlers.

Usage:
    >>> bus = InMemoryEventBus(logger=get_logger())
    >>> bus.subscribe(NotificationReceived, bump_badge)
    >>> await bus.publish(NotificationReceived(notification=envelope))
"""

import asyncio
from collections import defaultdict

from src.domain.events.base_event import DomainEvent
from src.domain.protocols.event_bus_protocol import EventHandler
from src.domain.protocols.logger_protocol import LoggerProtocol


class InMemoryEventBus:
    """Dictionary-backed pub/sub for a single event loop (not thread-safe)."""

    def __init__(self, logger: LoggerProtocol) -> None:
        self._subscribers: defaultdict[type[DomainEvent], list[EventHandler]] = defaultdict(
            list
        )
        self._logger = logger

    def subscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> None:
        """Register ``handler`` for ``event_type``.

        Registering the same handler twice delivers each event twice.
        """
        self._subscribers[event_type].append(handler)

    def unsubscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> None:
        """Drop one registration of ``handler`` (no-op when absent)."""
        handlers = self._subscribers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def subscriber_count(self, event_type: type[DomainEvent]) -> int:
        return len(self._subscribers.get(event_type, []))

    async def publish(self, event: DomainEvent) -> None:
        """Deliver ``event`` to every handler of its class.

        Returns once all handlers have finished or failed.
        """
        handlers = tuple(self._subscribers.get(type(event), ()))
        if not handlers:
            return

        self._logger.debug(
            "event_publishing",
            event_type=type(event).__name__,
            event_id=str(event.event_id),
            handler_count=len(handlers),
        )
        await asyncio.gather(*(self._deliver(handler, event) for handler in handlers))

    async def _deliver(self, handler: EventHandler, event: DomainEvent) -> None:
        try:
            await handler(event)
        except Exception as e:
            self._logger.warning(
                "event_handler_failed",
                event_type=type(event).__name__,
                event_id=str(event.event_id),
                handler_name=getattr(handler, "__name__", repr(handler)),
                error_type=type(e).__name__,
                error_message=str(e),
            )
