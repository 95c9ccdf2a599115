"""Access/refresh credential pair value object.

The session store owns the credential pair; the stream client holds a
read reference and replaces it only with the result of a successful
reissue.

Usage:
    from src.domain.value_objects import CredentialPair

    credentials = CredentialPair(
        access_token=access,
        refresh_token=refresh,
        access_token_expires_at=datetime.now(UTC) + timedelta(minutes=30),
    )

    if credentials.is_expired():
        # Reissue before opening the stream
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta


@dataclass(frozen=True)
class CredentialPair:
    """Bearer credential pair for one authenticated identity.

    Attributes:
        access_token: Short-lived bearer token presented to the stream.
        refresh_token: Long-lived token exchanged for a new pair.
        access_token_expires_at: When the access token stops being accepted.

    Security:
        Token values are excluded from repr/str so the pair can appear
        in log context safely.
    """

    access_token: str
    refresh_token: str
    access_token_expires_at: datetime

    def __post_init__(self) -> None:
        """Validate credentials after initialization.

        Raises:
            ValueError: If a token is empty or the expiry is naive.
        """
        if not self.access_token:
            raise ValueError("access_token cannot be empty")
        if not self.refresh_token:
            raise ValueError("refresh_token cannot be empty")
        if self.access_token_expires_at.tzinfo is None:
            raise ValueError("access_token_expires_at must be timezone-aware")

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check if the access token has expired.

        Args:
            now: Reference time (defaults to current UTC time).

        Returns:
            bool: True if the access token is past its expiry.
        """
        current = now or datetime.now(UTC)
        return current >= self.access_token_expires_at

    def is_expiring_soon(
        self,
        threshold: timedelta = timedelta(minutes=2),
        now: datetime | None = None,
    ) -> bool:
        """Check if the access token expires within threshold.

        Args:
            threshold: Time window to check. Defaults to 2 minutes.
            now: Reference time (defaults to current UTC time).

        Returns:
            bool: True if the access token expires within threshold.
        """
        current = now or datetime.now(UTC)
        return current >= self.access_token_expires_at - threshold

    def __repr__(self) -> str:
        """Return repr for debugging without token values."""
        return (
            f"CredentialPair("
            f"access_token_expires_at={self.access_token_expires_at.isoformat()}, "
            f"access_token=<{len(self.access_token)} chars>, "
            f"refresh_token=<{len(self.refresh_token)} chars>)"
        )

    __str__ = __repr__
