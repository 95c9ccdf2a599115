"""Centralized constants for internal implementation details.

This module contains constants that are protocol or implementation
details, NOT environment-specific configuration. For tunable settings
(delays, timeouts, endpoint paths), use `src/core/config.py` instead.

Categories:
- Prefixes and headers: HTTP header names and values
- SSE protocol: Event names and keywords
- Limits: Truncation and safety limits

Example:
    >>> from src.core.constants import BEARER_PREFIX
    >>> headers = {"Authorization": f"{BEARER_PREFIX}{access_token}"}
"""

# =============================================================================
# Prefixes and Headers
# =============================================================================

BEARER_PREFIX: str = "Bearer "
"""HTTP Authorization header prefix for Bearer tokens."""

EVENT_STREAM_MEDIA_TYPE: str = "text/event-stream"
"""Media type requested from the notification stream endpoint."""

REFRESH_TOKEN_HEADER: str = "X-Refresh-Token"
"""Header carrying the refresh credential on token reissue."""

ACCESS_TOKEN_HEADER: str = "X-Access-Token"
"""Header carrying the (possibly expired) access credential on token reissue."""


# =============================================================================
# SSE Protocol
# =============================================================================

NOTIFICATION_EVENT: str = "notification"
"""Event tag of frames carrying a notification envelope."""

HEARTBEAT_KEYWORD: str = "heartbeat"
"""Event tag or data payload of server keep-alive frames."""

AUTHORIZATION_REJECTED_STATUSES: frozenset[int] = frozenset({401, 403})
"""HTTP statuses meaning the presented credential was rejected."""

JWT_EXP_MILLISECONDS_THRESHOLD: int = 10_000_000_000
"""`exp` claims above this value are milliseconds, not seconds."""


# =============================================================================
# Response Limits
# =============================================================================

RESPONSE_BODY_MAX_LENGTH: int = 500
"""Maximum response body characters kept in error details."""

FRAME_DATA_LOG_MAX_LENGTH: int = 200
"""Maximum frame payload characters included in malformed-frame logs."""
