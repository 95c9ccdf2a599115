"""Notification stream factory.

Wires the five stream components for the host application. Unlike the
singletons in ``infrastructure``, the stream is built per host: the
session store, display and sign-out callable belong to the caller.

Usage:
    supervisor = build_notification_stream(
        session_store=session_store,
        sign_out=router.sign_out,
    )
    supervisor.on_authenticated(credentials)
    supervisor.on_visibility_changed(True)
    supervisor.on_signed_out()
"""

from datetime import timedelta
from typing import TYPE_CHECKING

from src.application.services import (
    ConnectionManager,
    EventDispatcher,
    HeartbeatMonitor,
    LifecycleSupervisor,
    TokenRefreshCoordinator,
)
from src.core.config import Settings, get_settings
from src.core.container.infrastructure import get_event_bus, get_logger
from src.domain.state_machine import ReconnectPolicy
from src.infrastructure.notifications import LoggingNotificationDisplay
from src.infrastructure.security import HttpxTokenReissueClient
from src.infrastructure.session import DedupingLogoutHandler
from src.infrastructure.session.deduping_logout_handler import SignOut
from src.infrastructure.sse import HttpxStreamTransport

if TYPE_CHECKING:
    from src.domain.protocols import (
        EventBusProtocol,
        LoggerProtocol,
        NotificationDisplayProtocol,
        SessionStoreProtocol,
        StreamTransportProtocol,
        TokenReissueProtocol,
    )


def build_notification_stream(
    *,
    session_store: "SessionStoreProtocol",
    sign_out: SignOut,
    display: "NotificationDisplayProtocol | None" = None,
    settings: Settings | None = None,
    event_bus: "EventBusProtocol | None" = None,
    logger: "LoggerProtocol | None" = None,
    transport: "StreamTransportProtocol | None" = None,
    reissue_client: "TokenReissueProtocol | None" = None,
) -> LifecycleSupervisor:
    """Build a LifecycleSupervisor wired to httpx adapters.

    Args:
        session_store: Host-owned credential store.
        sign_out: Host callable ending the session; receives the reason.
        display: Transient notification display (defaults to logging).
        settings: Configuration (defaults to get_settings()).
        event_bus: Broadcast bus (defaults to the app singleton).
        logger: Logger (defaults to the app singleton).
        transport: Stream transport override.
        reissue_client: Token reissue client override.

    Returns:
        Supervisor that creates one ConnectionManager per identity.
    """
    settings = settings or get_settings()
    event_bus = event_bus or get_event_bus()
    logger = logger or get_logger()
    display = display or LoggingNotificationDisplay(logger.bind(component="notification_display"))
    transport = transport or HttpxStreamTransport(
        url=settings.notification_stream_url,
        connect_timeout=settings.sse_connect_timeout_seconds,
    )
    reissue_client = reissue_client or HttpxTokenReissueClient(
        url=settings.token_reissue_url,
        timeout=settings.token_refresh_timeout_seconds,
        default_ttl_seconds=settings.access_token_default_ttl_seconds,
    )

    policy = ReconnectPolicy(
        reconnect_delay=settings.sse_reconnect_delay_seconds,
        reopen_delay=settings.sse_refresh_reopen_delay_seconds,
        logout_reason=settings.forced_logout_message,
    )
    logout_handler = DedupingLogoutHandler(
        sign_out=sign_out,
        event_bus=event_bus,
        logger=logger.bind(component="logout_handler"),
        dedupe_seconds=settings.logout_dedupe_seconds,
    )
    refresh_coordinator = TokenRefreshCoordinator(
        session_store=session_store,
        reissue_client=reissue_client,
        logger=logger.bind(component="token_refresh"),
    )
    dispatcher = EventDispatcher(
        display=display,
        event_bus=event_bus,
        logger=logger.bind(component="event_dispatcher"),
    )

    def connection_manager_factory() -> ConnectionManager:
        return ConnectionManager(
            transport=transport,
            refresh_coordinator=refresh_coordinator,
            dispatcher=dispatcher,
            heartbeat=HeartbeatMonitor(
                timeout=settings.sse_heartbeat_timeout_seconds,
                check_interval=settings.sse_heartbeat_check_interval_seconds,
                logger=logger.bind(component="heartbeat_monitor"),
            ),
            logout_handler=logout_handler,
            event_bus=event_bus,
            logger=logger.bind(component="connection_manager"),
            policy=policy,
            expiry_buffer=timedelta(seconds=settings.access_token_expiry_buffer_seconds),
        )

    return LifecycleSupervisor(
        connection_manager_factory=connection_manager_factory,
        session_store=session_store,
        logger=logger.bind(component="lifecycle_supervisor"),
    )
