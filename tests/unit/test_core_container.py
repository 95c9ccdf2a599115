"""Unit tests for the composition root.

Tests cover:
- get_logger / get_event_bus are cached singletons
- build_notification_stream wires settings into the components
- The factory builds an independent manager per identity
"""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from src.application.services import ConnectionManager, LifecycleSupervisor
from src.core.config import Settings
from src.core.container import build_notification_stream, get_event_bus, get_logger
from src.infrastructure.events.in_memory_event_bus import InMemoryEventBus
from src.infrastructure.logging.console_adapter import ConsoleAdapter
from src.infrastructure.session import InMemorySessionStore


@pytest.fixture
def settings() -> Settings:
    return Settings(
        api_base_url="https://api.example.com/",
        sse_reconnect_delay_seconds=2.5,
        sse_refresh_reopen_delay_seconds=0.2,
        access_token_expiry_buffer_seconds=90,
        forced_logout_message="Signed out",
    )


@pytest.fixture(autouse=True)
def clear_singletons():
    get_logger.cache_clear()
    get_event_bus.cache_clear()
    yield
    get_logger.cache_clear()
    get_event_bus.cache_clear()


@pytest.mark.unit
class TestSingletons:
    """Test the cached infrastructure factories."""

    def test_get_logger_returns_console_adapter(self):
        logger = get_logger()

        assert isinstance(logger, ConsoleAdapter)
        assert get_logger() is logger

    def test_get_event_bus_is_cached(self):
        bus = get_event_bus()

        assert isinstance(bus, InMemoryEventBus)
        assert get_event_bus() is bus


@pytest.mark.unit
class TestBuildNotificationStream:
    """Test build_notification_stream()."""

    def test_returns_signed_out_supervisor(self, settings):
        supervisor = build_notification_stream(
            session_store=InMemorySessionStore(),
            sign_out=MagicMock(),
            settings=settings,
        )

        assert isinstance(supervisor, LifecycleSupervisor)
        assert supervisor.connection_manager is None

    def test_manager_uses_configured_policy(self, settings):
        supervisor = build_notification_stream(
            session_store=InMemorySessionStore(),
            sign_out=MagicMock(),
            settings=settings,
            transport=MagicMock(),
        )
        manager = supervisor._connection_manager_factory()

        assert isinstance(manager, ConnectionManager)
        assert manager.policy.reconnect_delay == 2.5
        assert manager.policy.reopen_delay == 0.2
        assert manager.policy.logout_reason == "Signed out"
        assert manager.expiry_buffer == timedelta(seconds=90)

    def test_factory_builds_independent_managers(self, settings):
        supervisor = build_notification_stream(
            session_store=InMemorySessionStore(),
            sign_out=MagicMock(),
            settings=settings,
            transport=MagicMock(),
        )

        first = supervisor._connection_manager_factory()
        second = supervisor._connection_manager_factory()

        assert first is not second
        assert first._heartbeat is not second._heartbeat

    def test_default_adapters_use_settings_urls(self, settings):
        supervisor = build_notification_stream(
            session_store=InMemorySessionStore(),
            sign_out=MagicMock(),
            settings=settings,
        )
        manager = supervisor._connection_manager_factory()

        assert manager._transport._url == "https://api.example.com/v1/notifications/subscribe"
        assert (
            manager._refresh_coordinator._reissue_client._url
            == "https://api.example.com/v1/auth/reissue"
        )
