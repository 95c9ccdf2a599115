"""Notification display protocol (port).

The transient display (a toast) for received notifications. Icon
selection and click routing belong to the implementation.
"""

from typing import Protocol

from src.domain.value_objects import NotificationEnvelope


class NotificationDisplayProtocol(Protocol):
    """Shows one notification to the user."""

    def show(self, notification: NotificationEnvelope) -> None:
        """Display the notification. Must not block."""
        ...
