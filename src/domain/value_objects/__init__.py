"""Domain value objects.

Usage:
    from src.domain.value_objects import CredentialPair, NotificationEnvelope, StreamFrame
"""

from src.domain.value_objects.credential_pair import CredentialPair
from src.domain.value_objects.notification_envelope import (
    NotificationEnvelope,
    parse_notification,
)
from src.domain.value_objects.stream_frame import StreamFrame

__all__ = [
    "CredentialPair",
    "NotificationEnvelope",
    "StreamFrame",
    "parse_notification",
]
