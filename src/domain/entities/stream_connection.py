"""StreamConnection entity.

Immutable snapshot of the connection state and its guard flags for one
authenticated identity. The state machine produces a new snapshot on
every transition; only the ConnectionManager holds the current one.

Guard flags:
    connecting: A stream request is in flight.
    refreshing: A credential reissue is in flight.
    logging_out: A forced logout has been issued.
    reconnect_scheduled: A delayed reopen is pending.
    should_reconnect: The identity is authenticated and the stream
        should be kept alive.

Attempt generations:
    Every open increments ``attempt``. Signals from a stream carry the
    attempt they belong to; anything tagged with an older attempt comes
    from an aborted stream and is ignored.
"""

from dataclasses import dataclass, replace

from src.domain.enums import ConnectionStatus


@dataclass(frozen=True, kw_only=True, slots=True)
class StreamConnection:
    """Connection state plus guard flags.

    Attributes:
        status: Current lifecycle state.
        should_reconnect: True exactly while the stream should be alive.
        connecting: Stream request in flight.
        refreshing: Credential reissue in flight.
        logging_out: Forced logout issued; nothing may reconnect.
        reconnect_scheduled: Delayed reopen pending.
        attempt: Generation of the current (or last) stream.
        after_refresh: The current attempt uses a just-reissued credential;
            another rejection is fatal.
    """

    status: ConnectionStatus = ConnectionStatus.IDLE
    should_reconnect: bool = False
    connecting: bool = False
    refreshing: bool = False
    logging_out: bool = False
    reconnect_scheduled: bool = False
    attempt: int = 0
    after_refresh: bool = False

    @property
    def can_reconnect(self) -> bool:
        """Whether a (re)open is currently permitted."""
        return (
            self.should_reconnect
            and not self.logging_out
            and self.status != ConnectionStatus.FATAL
        )

    @property
    def is_busy(self) -> bool:
        """Whether a connect or refresh is already underway."""
        return self.connecting or self.refreshing

    @property
    def is_open(self) -> bool:
        """Whether the stream is established."""
        return self.status == ConnectionStatus.OPEN

    def evolve(self, **changes: object) -> "StreamConnection":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)  # type: ignore[arg-type]

    def reset(self) -> "StreamConnection":
        """Return an idle snapshot with every guard cleared.

        The attempt counter keeps increasing so signals from the torn
        down stream stay stale.
        """
        return StreamConnection(attempt=self.attempt + 1)
