"""Pytest configuration for async testing.

This configuration ensures:
1. Async tests run in isolated event loops
2. Settings resolve without a .env file
3. Collaborator doubles are available as fixtures
"""

import inspect
import os
from datetime import UTC, datetime, timedelta

import pytest

from src.domain.value_objects import CredentialPair

# Required setting; tests never talk to a real server.
os.environ.setdefault("API_BASE_URL", "https://api.test.local")
os.environ.setdefault("ENVIRONMENT", "testing")

# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line("markers", "asyncio: Async test that requires event loop")


def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions.

    This ensures all async tests are properly marked even if
    the developer forgets to add @pytest.mark.asyncio.
    """
    for item in items:
        if inspect.iscoroutinefunction(item.function):
            item.add_marker(pytest.mark.asyncio)


def create_credentials(
    access_token: str = "access-token-1",
    refresh_token: str = "refresh-token-1",
    expires_in: timedelta = timedelta(minutes=30),
) -> CredentialPair:
    """Helper to create a CredentialPair for testing.

    Args:
        access_token: Bearer token.
        refresh_token: Refresh token.
        expires_in: Lifetime from now (negative for an expired pair).

    Returns:
        CredentialPair instance for testing.
    """
    return CredentialPair(
        access_token=access_token,
        refresh_token=refresh_token,
        access_token_expires_at=datetime.now(UTC) + expires_in,
    )


@pytest.fixture
def credentials() -> CredentialPair:
    """Valid credential pair expiring in 30 minutes."""
    return create_credentials()


@pytest.fixture
def mock_logger():
    """Logger double; bind() returns the same mock so calls stay visible."""
    from unittest.mock import MagicMock

    logger = MagicMock()
    logger.bind.return_value = logger
    logger.with_context.return_value = logger
    return logger
