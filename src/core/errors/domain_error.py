"""Base error for expected failures.

Expected failures (a rejected credential, an unreachable stream, a
malformed notification) are returned inside ``Failure`` rather than
raised, so every reconnect decision is an explicit branch on a value.

Subclasses are frozen, slotted, keyword-only dataclasses that add fields
(``status_code``, ``field``) and extend ``log_context`` with them.

Usage:
    match await transport.open(access_token):
        case Failure(error=error):
            logger.warning("sse_connection_failed", **error.log_context())
"""

from dataclasses import dataclass
from typing import Any

from src.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Expected failure carried as data (not an Exception).

    Attributes:
        code: Machine-readable error code.
        message: Human-readable message.
        details: Optional context for debugging.
    """

    code: ErrorCode
    message: str
    details: dict[str, Any] | None = None

    def log_context(self) -> dict[str, Any]:
        """Structured logging fields describing this error."""
        return {"error_code": self.code.value, "error_message": self.message}

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"
