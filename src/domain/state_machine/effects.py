"""Side effects requested by the stream state machine.

The transition function never performs I/O. It returns effects, in
order, and the ConnectionManager executes them.
"""

from dataclasses import dataclass

from src.domain.value_objects import StreamFrame


@dataclass(frozen=True, kw_only=True, slots=True)
class StreamEffect:
    """Base class for state machine outputs."""


@dataclass(frozen=True, kw_only=True, slots=True)
class OpenStream(StreamEffect):
    """Open a new stream tagged with ``attempt`` using the current credential."""

    attempt: int


@dataclass(frozen=True, kw_only=True, slots=True)
class AbortStream(StreamEffect):
    """Cancel the active or pending stream, if any."""


@dataclass(frozen=True, kw_only=True, slots=True)
class ScheduleReconnect(StreamEffect):
    """Deliver ReconnectDue after ``delay`` seconds."""

    delay: float


@dataclass(frozen=True, kw_only=True, slots=True)
class CancelReconnect(StreamEffect):
    """Cancel a pending ScheduleReconnect, if any."""


@dataclass(frozen=True, kw_only=True, slots=True)
class StartRefresh(StreamEffect):
    """Ask the refresh coordinator for a new credential pair."""


@dataclass(frozen=True, kw_only=True, slots=True)
class StartHeartbeat(StreamEffect):
    """Start the liveness watchdog."""


@dataclass(frozen=True, kw_only=True, slots=True)
class StopHeartbeat(StreamEffect):
    """Stop the liveness watchdog."""


@dataclass(frozen=True, kw_only=True, slots=True)
class TouchHeartbeat(StreamEffect):
    """Record now as the last moment the stream was seen alive."""


@dataclass(frozen=True, kw_only=True, slots=True)
class DispatchFrame(StreamEffect):
    """Route a frame through the event dispatcher.

    Consumed only by the stream reader, which awaits the dispatch before
    reading the next frame so frames are handled in arrival order. The
    effect executor skips it.
    """

    frame: StreamFrame


@dataclass(frozen=True, kw_only=True, slots=True)
class EmitConnected(StreamEffect):
    """Announce that the stream is open."""

    attempt: int


@dataclass(frozen=True, kw_only=True, slots=True)
class EmitDisconnected(StreamEffect):
    """Announce that an open stream was lost."""

    reason: str


@dataclass(frozen=True, kw_only=True, slots=True)
class ForceLogout(StreamEffect):
    """End the authenticated session, showing ``reason`` to the user."""

    reason: str
