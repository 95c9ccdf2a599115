"""In-memory session store.

Holds the credential pair of the signed-in identity for the lifetime of
the process. Hosts with persistent storage provide their own
SessionStoreProtocol implementation.
"""

from src.domain.value_objects import CredentialPair


class InMemorySessionStore:
    """SessionStoreProtocol backed by a single attribute."""

    def __init__(self, credentials: CredentialPair | None = None) -> None:
        self._credentials = credentials

    def get_credentials(self) -> CredentialPair | None:
        return self._credentials

    def save_credentials(self, credentials: CredentialPair) -> None:
        self._credentials = credentials

    def clear(self) -> None:
        self._credentials = None
