"""Infrastructure dependency factories.

Application-scoped singletons for shared infrastructure:
- Logging (console, JSON in testing/ci)
- Event bus (in-memory)
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from src.core.config import get_settings

if TYPE_CHECKING:
    from src.domain.protocols.event_bus_protocol import EventBusProtocol
    from src.domain.protocols.logger_protocol import LoggerProtocol


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development/production: ConsoleAdapter (human-readable)
    - testing/ci: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    settings = get_settings()
    return ConsoleAdapter(
        use_json=settings.environment.uses_json_logs,
        level=settings.log_level,
        app_name=settings.app_name,
    )


@lru_cache()
def get_event_bus() -> "EventBusProtocol":
    """Get event bus singleton (app-scoped).

    The bus is the application-wide broadcast for NotificationReceived,
    StreamConnected, StreamDisconnected and SessionForcedLogout. Host code
    subscribes its own handlers.

    Returns:
        Event bus implementing EventBusProtocol.

    Usage:
        event_bus = get_event_bus()
        event_bus.subscribe(NotificationReceived, bump_badge)
    """
    from src.infrastructure.events.in_memory_event_bus import InMemoryEventBus

    return InMemoryEventBus(logger=get_logger())
