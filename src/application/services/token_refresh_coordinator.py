"""Single-flight credential refresh.

Concurrent callers of ``refresh()`` while a reissue is outstanding all
await that one reissue and observe its result. The reissue runs in its
own task and is shielded, so a cancelled caller never cancels the
request other callers are waiting on.

Failure policy: every failure is final for the current credential pair.
Nothing here retries; the caller escalates to forced logout.
"""

import asyncio

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.errors import TokenRefreshError
from src.domain.protocols import (
    LoggerProtocol,
    SessionStoreProtocol,
    TokenReissueProtocol,
)
from src.domain.value_objects import CredentialPair


class TokenRefreshCoordinator:
    """Collapses concurrent refresh requests into one reissue.

    Dependencies (injected via constructor):
        - SessionStoreProtocol: Source of the current pair, sink of the new one
        - TokenReissueProtocol: The reissue endpoint client
        - LoggerProtocol: Structured logging
    """

    def __init__(
        self,
        *,
        session_store: SessionStoreProtocol,
        reissue_client: TokenReissueProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._session_store = session_store
        self._reissue_client = reissue_client
        self._logger = logger
        self._inflight: asyncio.Task[Result[CredentialPair, TokenRefreshError]] | None = None

    @property
    def is_refreshing(self) -> bool:
        """Whether a reissue is currently outstanding."""
        return self._inflight is not None

    async def refresh(self) -> Result[CredentialPair, TokenRefreshError]:
        """Obtain a new credential pair, joining an outstanding reissue if any.

        Returns:
            Success(CredentialPair): New pair (already saved to the store).
            Failure(TokenRefreshError): CREDENTIALS_MISSING when the store is
                empty, otherwise the reissue client's failure.
        """
        if self._inflight is None:
            self._inflight = asyncio.create_task(self._reissue(), name="token-refresh")
        else:
            self._logger.debug("token_refresh_joined")
        return await asyncio.shield(self._inflight)

    async def _reissue(self) -> Result[CredentialPair, TokenRefreshError]:
        try:
            credentials = self._session_store.get_credentials()
            if credentials is None:
                self._logger.warning("token_refresh_credentials_missing")
                return Failure(
                    error=TokenRefreshError(
                        code=ErrorCode.CREDENTIALS_MISSING,
                        message="No refresh credential available",
                    )
                )

            self._logger.info("token_refresh_started")
            result = await self._reissue_client.reissue(credentials)

            match result:
                case Success(value=new_credentials):
                    self._session_store.save_credentials(new_credentials)
                    self._logger.info(
                        "token_refresh_succeeded",
                        expires_at=new_credentials.access_token_expires_at.isoformat(),
                    )
                case Failure(error=error):
                    self._logger.error(
                        "token_refresh_failed",
                        **error.log_context(),
                    )
            return result
        finally:
            self._inflight = None
