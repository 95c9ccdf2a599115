"""Container module - Centralized dependency injection.

    from src.core.container import get_logger, get_event_bus
    from src.core.container import build_notification_stream

The container is organized into modules:
- infrastructure: Application-scoped singletons (logging, event bus)
- stream: Per-host notification stream wiring
"""

from src.core.container.infrastructure import get_event_bus, get_logger
from src.core.container.stream import build_notification_stream

__all__ = [
    "build_notification_stream",
    "get_event_bus",
    "get_logger",
]
