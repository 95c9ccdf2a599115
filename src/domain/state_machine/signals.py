"""Discrete inputs that drive the stream state machine.

Signals are facts reported to the ConnectionManager: things the host
asked for, things the transport reported, and things timers decided.
Signals originating from a specific stream carry its ``attempt`` so
late arrivals from an aborted stream can be recognised.
"""

from dataclasses import dataclass

from src.domain.value_objects import StreamFrame


@dataclass(frozen=True, kw_only=True, slots=True)
class StreamSignal:
    """Base class for state machine inputs."""


@dataclass(frozen=True, kw_only=True, slots=True)
class Activated(StreamSignal):
    """An identity became authenticated; keep a stream alive."""


@dataclass(frozen=True, kw_only=True, slots=True)
class OpenRequested(StreamSignal):
    """Open a stream unless one is already being opened."""


@dataclass(frozen=True, kw_only=True, slots=True)
class Opened(StreamSignal):
    """The server accepted the stream."""

    attempt: int


@dataclass(frozen=True, kw_only=True, slots=True)
class FrameReceived(StreamSignal):
    """A complete frame arrived on the stream."""

    attempt: int
    frame: StreamFrame


@dataclass(frozen=True, kw_only=True, slots=True)
class AuthorizationRejected(StreamSignal):
    """The server rejected the access credential."""

    attempt: int


@dataclass(frozen=True, kw_only=True, slots=True)
class RefreshSucceeded(StreamSignal):
    """Credential reissue produced a new pair."""


@dataclass(frozen=True, kw_only=True, slots=True)
class RefreshFailed(StreamSignal):
    """Credential reissue failed; the session cannot be recovered."""

    reason: str


@dataclass(frozen=True, kw_only=True, slots=True)
class TransportFailed(StreamSignal):
    """Opening or reading the stream failed for a non-credential reason."""

    attempt: int
    reason: str


@dataclass(frozen=True, kw_only=True, slots=True)
class StreamClosed(StreamSignal):
    """The server ended the stream cleanly."""

    attempt: int


@dataclass(frozen=True, kw_only=True, slots=True)
class ReconnectDue(StreamSignal):
    """A scheduled reconnect delay elapsed."""


@dataclass(frozen=True, kw_only=True, slots=True)
class HeartbeatTimedOut(StreamSignal):
    """No frame arrived within the liveness timeout."""


@dataclass(frozen=True, kw_only=True, slots=True)
class VisibilityRestored(StreamSignal):
    """The host tab became visible again."""


@dataclass(frozen=True, kw_only=True, slots=True)
class TeardownRequested(StreamSignal):
    """Logout or host shutdown; drop everything."""
