"""LoggerProtocol: structured logging port.

Every component receives a logger bound to its name
(``component="connection_manager"``) and logs snake_case event names
with key-value context. Event names are grouped by prefix:

    sse_*            stream lifecycle (connecting, connected, reconnect
                     scheduled, heartbeat timeout, forced logout)
    token_refresh_*  credential reissue
    notification_*   frame dispatch and display
    event_*          event bus delivery

Levels:
    DEBUG     per-frame diagnostics and state changes
    INFO      lifecycle milestones
    WARNING   recoverable failures (transport error, malformed frame)
    ERROR     fatal failures (refresh failed, forced logout)
    CRITICAL  failures of the client itself

Token values are never passed as context.
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Structured logger (message + key-value context)."""

    def debug(self, message: str, /, **context: Any) -> None: ...

    def info(self, message: str, /, **context: Any) -> None: ...

    def warning(self, message: str, /, **context: Any) -> None: ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error.

        Args:
            message: Event name.
            error: Optional exception; implementations add error_type and
                error_message fields.
            **context: Structured fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical failure; ``error`` is handled as in error()."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return a new logger carrying ``context`` on every entry.

        The receiver is left unchanged.
        """
        ...

    def with_context(self, **context: Any) -> LoggerProtocol:
        """Alias for bind()."""
        ...
