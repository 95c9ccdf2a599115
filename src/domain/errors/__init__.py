"""Domain errors package.

Exports all domain-level error classes for convenient importing.

Usage:
    from src.domain.errors import StreamError, StreamAuthorizationError
    from src.domain.errors import TokenRefreshError
"""

from src.domain.errors.stream_error import (
    StreamAuthorizationError,
    StreamError,
    StreamInterruptedError,
    StreamUnavailableError,
)
from src.domain.errors.token_refresh_error import TokenRefreshError

__all__ = [
    # Stream errors
    "StreamError",
    "StreamAuthorizationError",
    "StreamUnavailableError",
    "StreamInterruptedError",
    # Credential errors
    "TokenRefreshError",
]
