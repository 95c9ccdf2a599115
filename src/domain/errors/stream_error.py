"""Stream error types for the transport protocol contract.

These errors define the failure cases a stream transport can return when
opening the notification stream.

Architecture:
- Domain layer errors (part of StreamTransportProtocol contract)
- Inherit from DomainError (core layer)
- Used in Result types (railway-oriented programming)

Usage:
    from src.domain.errors import StreamAuthorizationError

    match await transport.open(access_token):
        case Failure(error=StreamAuthorizationError()):
            # credential rejected → refresh
        case Failure(error=error):
            # transient → delayed reconnect
"""

from dataclasses import dataclass
from typing import Any

from src.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class StreamError(DomainError):
    """Base notification stream error.

    Attributes:
        code: Domain ErrorCode.
        message: Human-readable message.
        status_code: HTTP status returned by the server, if any.
        details: Additional context.
    """

    status_code: int | None = None

    def log_context(self) -> dict[str, Any]:
        context = DomainError.log_context(self)
        context["status_code"] = self.status_code
        return context


@dataclass(frozen=True, slots=True, kw_only=True)
class StreamAuthorizationError(StreamError):
    """The server rejected the presented access credential (401/403).

    Recovery: exchange the refresh credential for a new pair once.
    """

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class StreamUnavailableError(StreamError):
    """The stream could not be opened or was cut off.

    Raised when:
    - Connection refused, DNS failure, timeout
    - Server returns a non-2xx status other than 401/403
    - The connection drops mid-stream

    Recovery: fixed-delay reconnect.

    Attributes:
        is_transient: Whether a retry is expected to succeed.
    """

    is_transient: bool = True


class StreamInterruptedError(Exception):
    """Raised by a stream session when reading fails mid-stream.

    Reading frames is an async iteration, so failures there surface as an
    exception carrying the domain error rather than as a Result.

    Attributes:
        error: The StreamUnavailableError describing the interruption.
    """

    def __init__(self, error: StreamUnavailableError) -> None:
        super().__init__(str(error))
        self.error = error
