"""Access token expiry extraction.

Reads the ``exp`` claim of a JWT access token WITHOUT verifying its
signature. The client never trusts the claim for authorization; it only
uses it to avoid presenting a token the server will certainly reject.

Some issuers emit ``exp`` in milliseconds; values above
JWT_EXP_MILLISECONDS_THRESHOLD are treated as such.
"""

from datetime import UTC, datetime, timedelta

import jwt
from jwt.exceptions import InvalidTokenError

from src.core.constants import JWT_EXP_MILLISECONDS_THRESHOLD
from src.domain.value_objects import CredentialPair


def read_token_expiry(token: str) -> datetime | None:
    """Return the token's expiry, or None if it carries no usable ``exp``.

    Args:
        token: Encoded JWT.

    Returns:
        Timezone-aware expiry, or None for non-JWT tokens and missing or
        non-numeric claims.
    """
    try:
        claims = jwt.decode(
            token,
            options={"verify_signature": False, "verify_exp": False},
        )
    except InvalidTokenError:
        return None

    exp = claims.get("exp")
    if isinstance(exp, str):
        try:
            exp = float(exp)
        except ValueError:
            return None
    if not isinstance(exp, (int, float)) or isinstance(exp, bool):
        return None

    seconds = exp / 1000 if exp > JWT_EXP_MILLISECONDS_THRESHOLD else exp
    try:
        return datetime.fromtimestamp(seconds, tz=UTC)
    except (OverflowError, OSError, ValueError):
        return None


def credentials_from_tokens(
    access_token: str,
    refresh_token: str,
    *,
    default_ttl_seconds: int = 1800,
    now: datetime | None = None,
) -> CredentialPair:
    """Build a CredentialPair, deriving the expiry from the access token.

    Args:
        access_token: Bearer token (JWT or opaque).
        refresh_token: Refresh token.
        default_ttl_seconds: Lifetime assumed when the token has no ``exp``.
        now: Reference time for the fallback (defaults to current UTC time).

    Returns:
        CredentialPair with the derived expiry.
    """
    expires_at = read_token_expiry(access_token)
    if expires_at is None:
        expires_at = (now or datetime.now(UTC)) + timedelta(seconds=default_ttl_seconds)
    return CredentialPair(
        access_token=access_token,
        refresh_token=refresh_token,
        access_token_expires_at=expires_at,
    )
