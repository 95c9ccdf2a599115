"""Domain enums package.

Usage:
    from src.domain.enums import ConnectionStatus, NotificationType
"""

from src.domain.enums.connection_status import ConnectionStatus
from src.domain.enums.notification_type import NotificationType

__all__ = [
    "ConnectionStatus",
    "NotificationType",
]
