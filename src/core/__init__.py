"""Shared kernel of the notification stream client.

- result: Success / Failure railway types
- errors, enums: DomainError family and ErrorCode
- config: pydantic-settings Settings
- container: composition root (the only module here importing other layers)
"""

from src.core.enums import ErrorCode
from src.core.errors import AuthenticationError, DomainError, ValidationError
from src.core.result import Failure, Result, Success

__all__ = [
    "AuthenticationError",
    "DomainError",
    "ErrorCode",
    "Failure",
    "Result",
    "Success",
    "ValidationError",
]
