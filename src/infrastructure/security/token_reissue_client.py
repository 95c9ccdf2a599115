"""httpx implementation of TokenReissueProtocol.

POSTs the refresh credential to ``{api_base_url}{token_reissue_path}``:

    X-Refresh-Token: <refresh token>
    X-Access-Token:  <current access token>

and expects ``{"accessToken": "...", "refreshToken": "..."}`` back.

Every failure is returned, never retried: a refresh that failed once is
treated as unrecoverable for this credential pair.
"""

from typing import Any

import httpx
import structlog

from src.core.constants import (
    ACCESS_TOKEN_HEADER,
    AUTHORIZATION_REJECTED_STATUSES,
    REFRESH_TOKEN_HEADER,
    RESPONSE_BODY_MAX_LENGTH,
)
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.errors import TokenRefreshError
from src.domain.value_objects import CredentialPair
from src.infrastructure.security.token_expiry import credentials_from_tokens


class HttpxTokenReissueClient:
    """Credential reissue endpoint client.

    Attributes:
        _url: Absolute reissue URL.
        _timeout: HTTP request timeout in seconds.
        _default_ttl_seconds: Lifetime assumed for tokens without ``exp``.
        _logger: Structured logger.
    """

    def __init__(
        self,
        *,
        url: str,
        timeout: float = 10.0,
        default_ttl_seconds: int = 1800,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._default_ttl_seconds = default_ttl_seconds
        self._logger = structlog.get_logger("token_reissue")

    async def reissue(
        self, credentials: CredentialPair
    ) -> Result[CredentialPair, TokenRefreshError]:
        """Exchange the refresh token for a new credential pair.

        Args:
            credentials: Current pair.

        Returns:
            Success(CredentialPair): New pair.
            Failure(TokenRefreshError): TOKEN_REFRESH_REJECTED on 401/403,
                TOKEN_REFRESH_FAILED on transport errors or other statuses,
                TOKEN_REFRESH_INVALID_RESPONSE on unusable bodies.
        """
        headers = {REFRESH_TOKEN_HEADER: credentials.refresh_token}
        if credentials.access_token:
            headers[ACCESS_TOKEN_HEADER] = credentials.access_token

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(self._url, headers=headers)
        except httpx.TimeoutException as e:
            self._logger.warning("token_reissue_timeout", error=str(e))
            return Failure(
                error=TokenRefreshError(
                    code=ErrorCode.TOKEN_REFRESH_FAILED,
                    message="Token reissue request timed out",
                )
            )
        except httpx.RequestError as e:
            self._logger.warning("token_reissue_connection_error", error=str(e))
            return Failure(
                error=TokenRefreshError(
                    code=ErrorCode.TOKEN_REFRESH_FAILED,
                    message=f"Failed to reach token reissue endpoint: {e}",
                )
            )

        return self._handle_response(response)

    def _handle_response(
        self, response: httpx.Response
    ) -> Result[CredentialPair, TokenRefreshError]:
        status = response.status_code

        if status in AUTHORIZATION_REJECTED_STATUSES:
            self._logger.warning("token_reissue_rejected", status_code=status)
            return Failure(
                error=TokenRefreshError(
                    code=ErrorCode.TOKEN_REFRESH_REJECTED,
                    message="Refresh credential was rejected",
                    status_code=status,
                )
            )

        if status != 200:
            self._logger.warning("token_reissue_unexpected_status", status_code=status)
            return Failure(
                error=TokenRefreshError(
                    code=ErrorCode.TOKEN_REFRESH_FAILED,
                    message=f"Token reissue returned status {status}",
                    status_code=status,
                    details={"response_body": response.text[:RESPONSE_BODY_MAX_LENGTH]},
                )
            )

        try:
            data: Any = response.json()
        except ValueError as e:
            self._logger.warning("token_reissue_invalid_json", error=str(e))
            return self._invalid_response("Token reissue response is not valid JSON")

        if not isinstance(data, dict):
            return self._invalid_response("Token reissue response must be an object")

        access_token = data.get("accessToken")
        refresh_token = data.get("refreshToken")
        if not isinstance(access_token, str) or not access_token:
            return self._invalid_response("Token reissue response is missing accessToken")
        if not isinstance(refresh_token, str) or not refresh_token:
            return self._invalid_response("Token reissue response is missing refreshToken")

        credentials = credentials_from_tokens(
            access_token,
            refresh_token,
            default_ttl_seconds=self._default_ttl_seconds,
        )
        self._logger.info(
            "token_reissue_succeeded",
            expires_at=credentials.access_token_expires_at.isoformat(),
        )
        return Success(value=credentials)

    def _invalid_response(self, message: str) -> Failure[TokenRefreshError]:
        self._logger.warning("token_reissue_invalid_response", reason=message)
        return Failure(
            error=TokenRefreshError(
                code=ErrorCode.TOKEN_REFRESH_INVALID_RESPONSE,
                message=message,
            )
        )
