"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.

Categories:
- Stream errors (STREAM_*)
- Token refresh errors (TOKEN_REFRESH_*, CREDENTIALS_*)
- Inbound payload errors (FRAME_*, NOTIFICATION_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable).

    Error codes follow ENTITY_ACTION_REASON naming convention.
    """

    # Stream errors
    STREAM_UNAVAILABLE = "stream_unavailable"
    STREAM_AUTHORIZATION_REJECTED = "stream_authorization_rejected"
    STREAM_INTERRUPTED = "stream_interrupted"

    # Token refresh errors
    CREDENTIALS_MISSING = "credentials_missing"
    TOKEN_REFRESH_FAILED = "token_refresh_failed"
    TOKEN_REFRESH_REJECTED = "token_refresh_rejected"
    TOKEN_REFRESH_INVALID_RESPONSE = "token_refresh_invalid_response"

    # Inbound payload errors
    FRAME_MALFORMED = "frame_malformed"
    NOTIFICATION_INVALID = "notification_invalid"
