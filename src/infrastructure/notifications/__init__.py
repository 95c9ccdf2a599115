"""Notification display adapters."""

from src.infrastructure.notifications.logging_notification_display import (
    LoggingNotificationDisplay,
    resolve_notification_link,
)

__all__ = [
    "LoggingNotificationDisplay",
    "resolve_notification_link",
]
