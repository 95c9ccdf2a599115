"""Credential adapters: token expiry decoding and the reissue client."""

from src.infrastructure.security.token_expiry import (
    credentials_from_tokens,
    read_token_expiry,
)
from src.infrastructure.security.token_reissue_client import HttpxTokenReissueClient

__all__ = [
    "HttpxTokenReissueClient",
    "credentials_from_tokens",
    "read_token_expiry",
]
