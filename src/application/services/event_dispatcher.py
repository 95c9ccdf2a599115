"""Inbound frame routing.

Each frame is classified as heartbeat or payload. Payloads are validated
and decoded; a malformed payload is logged and discarded and never
affects the connection. Valid notifications go, in arrival order, to the
transient display and then to the application-wide event bus.
"""

from src.core.constants import FRAME_DATA_LOG_MAX_LENGTH
from src.core.result import Failure, Success
from src.domain.events import NotificationReceived
from src.domain.protocols import (
    EventBusProtocol,
    LoggerProtocol,
    NotificationDisplayProtocol,
)
from src.domain.value_objects import NotificationEnvelope, StreamFrame, parse_notification


class EventDispatcher:
    """Classifies frames and forwards valid notifications to both sinks."""

    def __init__(
        self,
        *,
        display: NotificationDisplayProtocol,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._display = display
        self._event_bus = event_bus
        self._logger = logger

    async def dispatch(self, frame: StreamFrame) -> NotificationEnvelope | None:
        """Route one frame.

        Args:
            frame: Parsed stream frame.

        Returns:
            The forwarded notification, or None for heartbeats, foreign
            events and discarded payloads.
        """
        if frame.is_heartbeat:
            self._logger.debug("sse_heartbeat_received", frame_id=frame.id)
            return None

        if not frame.is_notification:
            self._logger.debug("sse_frame_ignored", event=frame.event, frame_id=frame.id)
            return None

        match parse_notification(frame.data):
            case Failure(error=error):
                self._logger.warning(
                    "notification_discarded",
                    data=frame.data[:FRAME_DATA_LOG_MAX_LENGTH],
                    **error.log_context(),
                )
                return None
            case Success(value=notification):
                pass

        self._logger.info(
            "notification_received",
            notification_id=str(notification.id),
            notification_type=notification.type.value,
        )

        # Display failures must not stop the broadcast.
        try:
            self._display.show(notification)
        except Exception as e:
            self._logger.error(
                "notification_display_failed",
                error=e,
                notification_id=str(notification.id),
            )

        await self._event_bus.publish(NotificationReceived(notification=notification))
        return notification
