"""Domain protocols (ports).

Infrastructure adapters implement these structurally (no inheritance).

Usage:
    from src.domain.protocols import StreamTransportProtocol, SessionStoreProtocol
"""

from src.domain.protocols.event_bus_protocol import EventBusProtocol, EventHandler
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.logout_handler_protocol import LogoutHandlerProtocol
from src.domain.protocols.notification_display_protocol import (
    NotificationDisplayProtocol,
)
from src.domain.protocols.session_store_protocol import SessionStoreProtocol
from src.domain.protocols.stream_transport_protocol import (
    StreamSession,
    StreamTransportProtocol,
)
from src.domain.protocols.token_reissue_protocol import TokenReissueProtocol

__all__ = [
    "EventBusProtocol",
    "EventHandler",
    "LoggerProtocol",
    "LogoutHandlerProtocol",
    "NotificationDisplayProtocol",
    "SessionStoreProtocol",
    "StreamSession",
    "StreamTransportProtocol",
    "TokenReissueProtocol",
]
