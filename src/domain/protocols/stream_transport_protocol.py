"""Stream transport protocol (port).

A transport opens the long-lived, server-to-client event stream for a
bearer credential and yields parsed frames.

Contract:
    open() returns:
        Success(StreamSession) once the server accepted the stream.
        Failure(StreamAuthorizationError) when the credential was rejected.
        Failure(StreamUnavailableError) for any other failure.

    StreamSession.frames() yields StreamFrame objects until the server
    ends the stream (iteration stops) or the connection breaks
    (StreamInterruptedError is raised). Cancelling the consuming task
    aborts the underlying request; aclose() releases it.

Implementations:
    - HttpxStreamTransport: src/infrastructure/sse/httpx_stream_transport.py
"""

from collections.abc import AsyncIterator
from typing import Protocol

from src.core.result import Result
from src.domain.errors import StreamError
from src.domain.value_objects import StreamFrame


class StreamSession(Protocol):
    """An accepted stream."""

    def frames(self) -> AsyncIterator[StreamFrame]:
        """Iterate frames in arrival order."""
        ...

    async def aclose(self) -> None:
        """Release the underlying connection (idempotent)."""
        ...


class StreamTransportProtocol(Protocol):
    """Opens notification streams."""

    async def open(self, access_token: str) -> Result[StreamSession, StreamError]:
        """Open a stream presenting ``access_token`` as bearer credential."""
        ...
