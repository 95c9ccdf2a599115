"""Notification envelope carried by a stream frame.

Wire format (JSON, camelCase):
    {"id": 1, "type": "POINT_EARNED", "message": "+10 points", "referenceId": 42}

``id``, ``type`` and ``message`` are required; ``referenceId`` is an
optional opaque pointer used only for routing after a click.
"""

import json
from dataclasses import dataclass
from typing import Any

from src.core.constants import FRAME_DATA_LOG_MAX_LENGTH
from src.core.enums import ErrorCode
from src.core.errors import ValidationError
from src.core.result import Failure, Result, Success
from src.domain.enums import NotificationType


@dataclass(frozen=True, kw_only=True, slots=True)
class NotificationEnvelope:
    """Decoded notification.

    Attributes:
        id: Opaque server identifier (not used for deduplication).
        type: Notification category.
        message: Display text.
        reference_id: Optional opaque pointer to the related resource.
        raw_type: Category string exactly as received.
    """

    id: str | int
    type: NotificationType
    message: str
    reference_id: str | int | None = None
    raw_type: str = ""


def _invalid(message: str, *, field: str | None, data: str) -> Failure[ValidationError]:
    return Failure(
        error=ValidationError(
            code=ErrorCode.NOTIFICATION_INVALID,
            message=message,
            field=field,
            details={"data": data[:FRAME_DATA_LOG_MAX_LENGTH]},
        )
    )


def parse_notification(data: str) -> Result[NotificationEnvelope, ValidationError]:
    """Validate and decode a notification payload.

    Structure is checked before any field is read, so malformed input
    never raises.

    Args:
        data: Raw frame payload.

    Returns:
        Success(NotificationEnvelope): Payload is a valid envelope.
        Failure(ValidationError): FRAME_MALFORMED when the payload is not a
            JSON object, NOTIFICATION_INVALID when a required field is
            missing or mistyped.
    """
    try:
        payload: Any = json.loads(data)
    except ValueError as e:
        return Failure(
            error=ValidationError(
                code=ErrorCode.FRAME_MALFORMED,
                message=f"Notification payload is not valid JSON: {e}",
                details={"data": data[:FRAME_DATA_LOG_MAX_LENGTH]},
            )
        )

    if not isinstance(payload, dict):
        return Failure(
            error=ValidationError(
                code=ErrorCode.FRAME_MALFORMED,
                message=f"Notification payload must be an object, got {type(payload).__name__}",
                details={"data": data[:FRAME_DATA_LOG_MAX_LENGTH]},
            )
        )

    notification_id = payload.get("id")
    if notification_id is None or isinstance(notification_id, (bool, dict, list)):
        return _invalid("Notification is missing 'id'", field="id", data=data)

    raw_type = payload.get("type")
    if not isinstance(raw_type, str) or not raw_type.strip():
        return _invalid("Notification is missing 'type'", field="type", data=data)

    message = payload.get("message")
    if not isinstance(message, str):
        return _invalid("Notification is missing 'message'", field="message", data=data)

    reference_id = payload.get("referenceId")
    if isinstance(reference_id, (bool, dict, list)):
        reference_id = None

    return Success(
        value=NotificationEnvelope(
            id=notification_id,
            type=NotificationType.from_wire(raw_type),
            message=message,
            reference_id=reference_id,
            raw_type=raw_type,
        )
    )
