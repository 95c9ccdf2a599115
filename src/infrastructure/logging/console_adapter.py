"""Console logging adapter.

Writes structured stream-client logs to stdout through structlog.
- Development: colored key/value renderer
- Testing/CI: one JSON object per line

Credential values never reach the output: ``redact_credentials`` runs
before the renderer and masks any context key that names a token or an
Authorization header, however deeply it is nested.

The adapter satisfies LoggerProtocol structurally (no inheritance).
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog

REDACTED = "***"

_SENSITIVE_KEYS = frozenset(
    {
        "access_token",
        "refresh_token",
        "accesstoken",
        "refreshtoken",
        "authorization",
        "x-access-token",
        "x-refresh-token",
        "token",
    }
)


def _mask(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            key: REDACTED if str(key).lower() in _SENSITIVE_KEYS else _mask(item)
            for key, item in value.items()
        }
    return value


def redact_credentials(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor masking credential values in the event dict."""
    for key in list(event_dict):
        if key.lower() in _SENSITIVE_KEYS:
            event_dict[key] = REDACTED
        else:
            event_dict[key] = _mask(event_dict[key])
    return event_dict


class ConsoleAdapter:
    """stdout logger used by every stream component.

    Args:
        use_json: Render JSON lines (testing/CI) instead of colored text.
        level: Minimum level name; unknown names fall back to INFO.
        app_name: When set, bound as ``app`` on every entry.
    """

    def __init__(
        self,
        *,
        use_json: bool = False,
        level: str = "INFO",
        app_name: str | None = None,
    ) -> None:
        renderer: structlog.types.Processor = (
            structlog.processors.JSONRenderer()
            if use_json
            else structlog.dev.ConsoleRenderer(colors=True)
        )
        min_level = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)

        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso", utc=True),
                redact_credentials,
                renderer,
            ],
            wrapper_class=structlog.make_filtering_bound_logger(min_level),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
            cache_logger_on_first_use=True,
        )

        logger = structlog.get_logger()
        self._logger = logger.bind(app=app_name) if app_name else logger

    @staticmethod
    def _with_error(context: dict[str, Any], error: Exception | None) -> dict[str, Any]:
        if error is not None:
            context["error_type"] = type(error).__name__
            context["error_message"] = str(error)
        return context

    def debug(self, message: str, /, **context: Any) -> None:
        self._logger.debug(message, **context)

    def info(self, message: str, /, **context: Any) -> None:
        self._logger.info(message, **context)

    def warning(self, message: str, /, **context: Any) -> None:
        self._logger.warning(message, **context)

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error; ``error`` is expanded into error_type / error_message."""
        self._logger.error(message, **self._with_error(context, error))

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical failure; ``error`` is expanded like in error()."""
        self._logger.critical(message, **self._with_error(context, error))

    def bind(self, **context: Any) -> ConsoleAdapter:
        """Return a new adapter whose entries all carry ``context``.

        Components bind ``component=<name>`` once at construction.
        """
        bound = ConsoleAdapter.__new__(ConsoleAdapter)
        bound._logger = self._logger.bind(**context)
        return bound

    def with_context(self, **context: Any) -> ConsoleAdapter:
        """Alias for bind()."""
        return self.bind(**context)
