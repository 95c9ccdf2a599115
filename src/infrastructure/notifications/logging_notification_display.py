"""Default notification display.

Logs each notification together with the route a click should open. A
UI host replaces this with a real toast implementation; the link
resolution is shared.
"""

from src.domain.enums import NotificationType
from src.domain.protocols import LoggerProtocol
from src.domain.value_objects import NotificationEnvelope

NOTIFICATION_CENTER_PATH = "/notification"
REPORT_DETAIL_PATH = "/admin/reports/{reference_id}"
CHALLENGE_PATH = "/challenge"
POINTS_PATH = "/user/points"


def resolve_notification_link(notification: NotificationEnvelope) -> str:
    """Return the in-app route for a notification.

    Reported content opens the report detail page, achievements open the
    challenge page and point awards open the points page. Anything else,
    or a notification without a reference, opens the notification center.

    Args:
        notification: Decoded envelope.

    Returns:
        Absolute in-app path.
    """
    if notification.reference_id is None:
        return NOTIFICATION_CENTER_PATH

    if notification.type.is_report:
        return REPORT_DETAIL_PATH.format(reference_id=notification.reference_id)

    match notification.type:
        case NotificationType.CHALLENGE_ACHIEVED:
            return CHALLENGE_PATH
        case NotificationType.POINT_EARNED:
            return POINTS_PATH
        case _:
            return NOTIFICATION_CENTER_PATH


class LoggingNotificationDisplay:
    """NotificationDisplayProtocol that writes to the structured log."""

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    def show(self, notification: NotificationEnvelope) -> None:
        self._logger.info(
            "notification_displayed",
            notification_id=str(notification.id),
            notification_type=notification.type.value,
            message=notification.message,
            link=resolve_notification_link(notification),
        )
