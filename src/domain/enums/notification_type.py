"""Notification categories carried by the stream.

The server owns this enumeration and may add categories over time;
unrecognised values map to UNKNOWN instead of being rejected so a newer
server never breaks an older client.
"""

from enum import StrEnum


class NotificationType(StrEnum):
    """Closed set of notification categories known to this client."""

    ARTICLE_REPORTED = "ARTICLE_REPORTED"
    COMMENT_REPORTED = "COMMENT_REPORTED"
    CHALLENGE_ACHIEVED = "CHALLENGE_ACHIEVED"
    POINT_EARNED = "POINT_EARNED"
    SYSTEM = "SYSTEM"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_wire(cls, value: str) -> "NotificationType":
        """Map a wire value to a category, falling back to UNKNOWN.

        Accepts the canonical upper-snake form as well as kebab/lower
        spellings (``point-earned``).

        Args:
            value: Category string from the notification payload.

        Returns:
            NotificationType: Matching category or UNKNOWN.
        """
        normalized = value.strip().upper().replace("-", "_")
        try:
            return cls(normalized)
        except ValueError:
            return cls.UNKNOWN

    @property
    def is_report(self) -> bool:
        """Whether this notification concerns reported content."""
        return self in (NotificationType.ARTICLE_REPORTED, NotificationType.COMMENT_REPORTED)
