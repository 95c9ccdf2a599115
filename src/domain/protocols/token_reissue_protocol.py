"""Token reissue protocol (port).

Exchanges the refresh credential for a new access/refresh pair. Called
only through the TokenRefreshCoordinator, which guarantees a single
request in flight.
"""

from typing import Protocol

from src.core.result import Result
from src.domain.errors import TokenRefreshError
from src.domain.value_objects import CredentialPair


class TokenReissueProtocol(Protocol):
    """Credential reissue endpoint client."""

    async def reissue(
        self, credentials: CredentialPair
    ) -> Result[CredentialPair, TokenRefreshError]:
        """Exchange ``credentials.refresh_token`` for a new pair.

        Returns:
            Success(CredentialPair): Server issued a new pair.
            Failure(TokenRefreshError): Any failure; never retried.
        """
        ...
