"""A single parsed frame of the server-sent event stream.

Wire Format (text/event-stream):
    id: <event_id>
    event: <event_type>
    data: <payload line>
    data: <payload line>
    <blank line>

Lines starting with ``:`` are comments; servers commonly use them as
keep-alives, so a comment-only frame is a heartbeat.

Reference:
    - https://html.spec.whatwg.org/multipage/server-sent-events.html
"""

from dataclasses import dataclass

from src.core.constants import HEARTBEAT_KEYWORD, NOTIFICATION_EVENT


@dataclass(frozen=True, kw_only=True, slots=True)
class StreamFrame:
    """One complete SSE frame.

    Attributes:
        event: Event tag (``event:`` field), None when absent.
        data: Payload (``data:`` lines joined with newlines).
        id: Last event id (``id:`` field), None when absent.
        retry: Server-suggested reconnect delay in milliseconds.
        is_comment: True when the frame consisted only of comment lines.
    """

    event: str | None = None
    data: str = ""
    id: str | None = None
    retry: int | None = None
    is_comment: bool = False

    @property
    def is_heartbeat(self) -> bool:
        """Whether this frame only proves liveness.

        Heartbeats are comment frames, frames tagged ``heartbeat``, frames
        whose data is the keyword ``heartbeat``, and untagged empty frames.
        """
        if self.is_comment:
            return True
        if self.event == HEARTBEAT_KEYWORD:
            return True
        if self.data.strip() == HEARTBEAT_KEYWORD:
            return True
        return self.event is None and not self.data.strip()

    @property
    def is_notification(self) -> bool:
        """Whether this frame should carry a notification envelope.

        Untagged data frames (default ``message`` event) are accepted too.
        """
        if self.is_heartbeat:
            return False
        return self.event in (None, "message", NOTIFICATION_EVENT)
