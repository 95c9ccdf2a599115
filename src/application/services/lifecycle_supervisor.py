"""Lifecycle supervisor.

Translates host lifecycle transitions into Connection Manager calls:

    authenticated      → build a manager for the identity and open it
    signed out         → tear the manager down and drop it
    tab visible        → full teardown and reopen unless an attempt is in
                         progress (a backgrounded tab may have had its
                         connection silently suspended)
    tab hidden         → nothing; the heartbeat timeout catches staleness

Connection state is scoped to one identity: a manager is created on
authentication and discarded on sign-out.
"""

from collections.abc import Callable

from src.application.services.connection_manager import ConnectionManager
from src.domain.protocols import LoggerProtocol, SessionStoreProtocol
from src.domain.value_objects import CredentialPair


class LifecycleSupervisor:
    """Reacts to authentication and visibility changes of the host."""

    def __init__(
        self,
        *,
        connection_manager_factory: Callable[[], ConnectionManager],
        session_store: SessionStoreProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._connection_manager_factory = connection_manager_factory
        self._session_store = session_store
        self._logger = logger
        self._manager: ConnectionManager | None = None

    @property
    def connection_manager(self) -> ConnectionManager | None:
        """Manager of the current identity, or None while signed out."""
        return self._manager

    @property
    def is_authenticated(self) -> bool:
        return self._manager is not None

    def on_authenticated(self, credentials: CredentialPair | None = None) -> None:
        """An identity became authenticated (or its credential was replaced).

        Args:
            credentials: New pair; saved to the session store. When omitted,
                the pair already in the store is used.
        """
        if credentials is not None:
            self._session_store.save_credentials(credentials)
        else:
            credentials = self._session_store.get_credentials()
            if credentials is None:
                self._logger.warning("sse_authenticated_without_credentials")
                return

        if self._manager is None:
            self._manager = self._connection_manager_factory()
            self._logger.info("sse_session_started")
        self._manager.open(credentials)

    def on_signed_out(self) -> None:
        """The identity signed out: stop reconnecting and drop all state."""
        if self._manager is None:
            return
        self._manager.teardown()
        self._manager = None
        self._logger.info("sse_session_ended")

    def on_visibility_changed(self, visible: bool) -> None:
        """The host tab was hidden or shown.

        Args:
            visible: True when the tab became visible.
        """
        if not visible or self._manager is None:
            return
        self._logger.debug("sse_visibility_restored", status=self._manager.status.value)
        self._manager.restart()

    async def aclose(self) -> None:
        """Sign out and wait for the manager's tasks to finish."""
        manager = self._manager
        self._manager = None
        if manager is not None:
            await manager.aclose()
