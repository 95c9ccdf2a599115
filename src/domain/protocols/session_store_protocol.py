"""Session store protocol (port).

The session store is owned by the host application and holds the
credential pair of the signed-in identity. The stream client reads the
current pair before every open and writes back only a successfully
reissued pair.
"""

from typing import Protocol

from src.domain.value_objects import CredentialPair


class SessionStoreProtocol(Protocol):
    """Read/write access to the current credential pair."""

    def get_credentials(self) -> CredentialPair | None:
        """Return the current credential pair, or None when signed out."""
        ...

    def save_credentials(self, credentials: CredentialPair) -> None:
        """Replace the current credential pair with a reissued one."""
        ...

    def clear(self) -> None:
        """Forget the current credential pair."""
        ...
