"""Incremental parser for the text/event-stream wire format.

Fed one decoded line at a time (line terminators already stripped, as
produced by ``httpx.Response.aiter_lines``). Returns a StreamFrame when a
blank line completes a frame.

Field handling:
    id:     last event id
    event:  event tag
    data:   appended; multiple data lines are joined with "\\n"
    retry:  reconnect hint in milliseconds (ignored if not an integer)
    :...    comment; a frame of only comments is a heartbeat

Unknown fields are ignored. A single space after the colon is stripped.

Reference:
    - https://html.spec.whatwg.org/multipage/server-sent-events.html#event-stream-interpretation
"""

from src.domain.value_objects import StreamFrame

_BOM = "\ufeff"


class SSEFrameParser:
    """Line-oriented SSE frame assembler.

    Example:
        >>> parser = SSEFrameParser()
        >>> parser.feed_line("event: notification")
        >>> parser.feed_line('data: {"id": 1}')
        >>> parser.feed_line("")
        StreamFrame(event='notification', data='{"id": 1}', ...)
    """

    def __init__(self) -> None:
        self._first_line = True
        self._reset()

    def _reset(self) -> None:
        self._event: str | None = None
        self._data: list[str] = []
        self._id: str | None = None
        self._retry: int | None = None
        self._has_fields = False
        self._has_comment = False

    def feed_line(self, line: str) -> StreamFrame | None:
        """Consume one line.

        Args:
            line: A single line without its terminator.

        Returns:
            The completed frame when ``line`` is blank and something was
            buffered, otherwise None.
        """
        if self._first_line:
            self._first_line = False
            line = line.removeprefix(_BOM)
        line = line.rstrip("\r")

        if not line:
            return self._flush()

        if line.startswith(":"):
            self._has_comment = True
            return None

        name, sep, value = line.partition(":")
        if sep and value.startswith(" "):
            value = value[1:]

        match name:
            case "event":
                self._event = value
            case "data":
                self._data.append(value)
            case "id":
                if "\0" not in value:
                    self._id = value
            case "retry":
                if value.isdigit():
                    self._retry = int(value)
            case _:
                return None
        self._has_fields = True
        return None

    def feed(self, chunk: str) -> list[StreamFrame]:
        """Consume a chunk containing whole lines.

        Args:
            chunk: Text with ``\\n`` separated lines.

        Returns:
            Frames completed by this chunk, in order.
        """
        frames = []
        for line in chunk.split("\n"):
            frame = self.feed_line(line)
            if frame is not None:
                frames.append(frame)
        return frames

    def _flush(self) -> StreamFrame | None:
        if not self._has_fields and not self._has_comment:
            return None
        frame = StreamFrame(
            event=self._event,
            data="\n".join(self._data),
            id=self._id,
            retry=self._retry,
            is_comment=self._has_comment and not self._has_fields,
        )
        self._reset()
        return frame
