"""Core error dataclasses returned inside ``Failure``.

Usage:
    from src.core.errors import DomainError, ValidationError
"""

from src.core.errors.common_errors import AuthenticationError, ValidationError
from src.core.errors.domain_error import DomainError

__all__ = [
    "AuthenticationError",
    "DomainError",
    "ValidationError",
]
