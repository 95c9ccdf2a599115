"""Notification stream connection states.

Defines the status state machine for the single logical stream owned by
one authenticated identity.

State Machine:
    IDLE → CONNECTING → OPEN → RECONNECT_SCHEDULED → CONNECTING → ...
                    ↘ REFRESHING_CREDENTIAL → RECONNECT_SCHEDULED
                                            ↘ FATAL

    - IDLE: No stream and nothing pending
    - CONNECTING: Stream request in flight
    - OPEN: Stream established, frames flowing
    - RECONNECT_SCHEDULED: Waiting out a delay before reopening
    - REFRESHING_CREDENTIAL: Credential rejected, reissue in flight
    - FATAL: Session unrecoverable, forced logout issued

Usage:
    from src.domain.enums import ConnectionStatus

    if connection.status == ConnectionStatus.OPEN:
        # Notifications are being delivered
"""

from enum import Enum


class ConnectionStatus(str, Enum):
    """Notification stream lifecycle states.

    String Enum:
        Inherits from str for easy serialization and structured logging.
        Values are lowercase for consistency.

    State Transitions:
        IDLE → CONNECTING: Identity authenticated, stream requested
        CONNECTING → OPEN: Server accepted the stream
        CONNECTING → REFRESHING_CREDENTIAL: Server rejected the credential
        CONNECTING/OPEN → RECONNECT_SCHEDULED: Transport failure or close
        OPEN → CONNECTING: Heartbeat timeout or tab became visible
        REFRESHING_CREDENTIAL → RECONNECT_SCHEDULED: Reissue succeeded
        REFRESHING_CREDENTIAL → FATAL: Reissue failed
        Any → IDLE: Teardown (logout or host shutdown)
    """

    IDLE = "idle"
    """No stream, no pending reconnect."""

    CONNECTING = "connecting"
    """Stream request in flight, no response yet."""

    OPEN = "open"
    """Stream established; frames are being delivered."""

    RECONNECT_SCHEDULED = "reconnect_scheduled"
    """A delayed reopen is pending."""

    REFRESHING_CREDENTIAL = "refreshing_credential"
    """The access credential was rejected and a reissue is in flight."""

    FATAL = "fatal"
    """Unrecoverable; forced logout has been issued.

    Only a fresh authentication leaves this state.
    """

    @classmethod
    def values(cls) -> list[str]:
        """Get all status values as strings.

        Returns:
            list[str]: List of status values.
        """
        return [status.value for status in cls]

    @classmethod
    def in_progress_states(cls) -> list["ConnectionStatus"]:
        """Get states where an operation is already underway.

        Returns:
            list[ConnectionStatus]: States that block out-of-band reconnects.
        """
        return [cls.CONNECTING, cls.REFRESHING_CREDENTIAL]

    @classmethod
    def terminal_states(cls) -> list["ConnectionStatus"]:
        """Get terminal states (no recovery without re-authentication).

        Returns:
            list[ConnectionStatus]: Terminal states.
        """
        return [cls.FATAL]
