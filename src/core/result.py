"""Result types for railway-oriented programming.

Expected failures (a rejected credential, an unreachable stream endpoint,
a malformed notification) travel as values instead of exceptions. This
keeps the reconnect decisions explicit and testable.

Usage:
    async def reissue(credentials: CredentialPair) -> Result[CredentialPair, TokenRefreshError]:
        if response.status_code == 401:
            return Failure(error=TokenRefreshError(...))
        return Success(value=new_credentials)

    match await reissue(credentials):
        case Success(value=pair):
            session_store.save_credentials(pair)
        case Failure(error=error):
            logger.warning("token_refresh_failed", error_code=error.code.value)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Operation completed; ``value`` holds its output."""

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Operation failed in an expected way; ``error`` is a DomainError."""

    error: E


type Result[T, E] = Success[T] | Failure[E]
