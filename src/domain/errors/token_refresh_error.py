"""Token refresh error types.

Every refresh failure is terminal for the current credential pair: the
caller escalates to forced logout and the refresh is never retried.
"""

from dataclasses import dataclass
from typing import Any

from src.core.errors import AuthenticationError, DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class TokenRefreshError(AuthenticationError):
    """Credential reissue failed (network, rejection or malformed response).

    Attributes:
        code: Domain ErrorCode (TOKEN_REFRESH_*, CREDENTIALS_MISSING).
        message: Human-readable message.
        status_code: HTTP status returned by the reissue endpoint, if any.
        details: Additional context.
    """

    status_code: int | None = None

    def log_context(self) -> dict[str, Any]:
        context = DomainError.log_context(self)
        context["status_code"] = self.status_code
        return context
