"""Common error classes used across all layers.

Error Types:
- ValidationError: Input validation failures (malformed payloads)
- AuthenticationError: Credential missing, expired or rejected

Usage:
    from src.core.errors import ValidationError
    from src.core.enums import ErrorCode
    from src.core.result import Failure

    return Failure(error=ValidationError(
        code=ErrorCode.NOTIFICATION_INVALID,
        message="Notification is missing 'message'",
        field="message",
    ))
"""

from dataclasses import dataclass
from typing import Any

from src.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        code: ErrorCode enum.
        message: Human-readable message.
        field: Field name that failed validation.
        details: Additional context.
    """

    field: str | None = None

    def log_context(self) -> dict[str, Any]:
        context = DomainError.log_context(self)
        context["field"] = self.field
        return context


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """Authentication failure (credential missing, expired or rejected).

    Attributes:
        code: ErrorCode enum.
        message: Human-readable message.
        details: Additional context.
    """

    pass
