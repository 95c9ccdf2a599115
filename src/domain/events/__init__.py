"""Domain events package.

Usage:
    from src.domain.events import NotificationReceived, StreamConnected
"""

from src.domain.events.base_event import DomainEvent
from src.domain.events.stream_events import (
    NotificationReceived,
    SessionForcedLogout,
    StreamConnected,
    StreamDisconnected,
)

__all__ = [
    "DomainEvent",
    "NotificationReceived",
    "SessionForcedLogout",
    "StreamConnected",
    "StreamDisconnected",
]
