"""httpx implementation of StreamTransportProtocol.

Opens ``GET {api_base_url}{notification_stream_path}`` with a bearer
credential and exposes the response body as parsed SSE frames.

Architecture:
    - Implements StreamTransportProtocol without inheritance (structural typing)
    - Uses httpx for async HTTP streaming
    - Returns Result types for open failures (no exceptions for expected errors)
    - Mid-stream read failures raise StreamInterruptedError

Timeouts:
    Only connecting is bounded. Reads are unbounded because the stream is
    long-lived; silence is detected by the heartbeat monitor instead.
"""

from collections.abc import AsyncIterator

import httpx
import structlog

from src.core.constants import (
    AUTHORIZATION_REJECTED_STATUSES,
    BEARER_PREFIX,
    EVENT_STREAM_MEDIA_TYPE,
    RESPONSE_BODY_MAX_LENGTH,
)
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.errors import (
    StreamAuthorizationError,
    StreamError,
    StreamInterruptedError,
    StreamUnavailableError,
)
from src.domain.value_objects import StreamFrame
from src.infrastructure.sse.frame_parser import SSEFrameParser


class HttpxStreamSession:
    """An accepted notification stream backed by a streaming httpx response.

    Owns both the response and the client that produced it; aclose()
    releases both.
    """

    def __init__(self, *, client: httpx.AsyncClient, response: httpx.Response) -> None:
        self._client = client
        self._response = response
        self._closed = False

    async def frames(self) -> AsyncIterator[StreamFrame]:
        """Yield frames until the server ends the stream.

        Raises:
            StreamInterruptedError: The connection broke mid-stream.
        """
        parser = SSEFrameParser()
        try:
            async for line in self._response.aiter_lines():
                frame = parser.feed_line(line)
                if frame is not None:
                    yield frame
        except (httpx.HTTPError, httpx.StreamError) as e:
            raise StreamInterruptedError(
                StreamUnavailableError(
                    code=ErrorCode.STREAM_INTERRUPTED,
                    message=f"Notification stream interrupted: {type(e).__name__}",
                    is_transient=True,
                )
            ) from e

    async def aclose(self) -> None:
        """Close the response and its client (idempotent)."""
        if self._closed:
            return
        self._closed = True
        try:
            await self._response.aclose()
        finally:
            await self._client.aclose()


class HttpxStreamTransport:
    """Opens notification streams over HTTP.

    Attributes:
        _url: Absolute stream URL.
        _connect_timeout: Seconds allowed to establish the connection.
        _logger: Structured logger.
    """

    def __init__(self, *, url: str, connect_timeout: float = 10.0) -> None:
        """Initialize transport.

        Args:
            url: Absolute stream URL.
            connect_timeout: Seconds allowed to establish the connection.
        """
        self._url = url
        self._connect_timeout = connect_timeout
        self._logger = structlog.get_logger("sse_transport")

    def _build_client(self) -> httpx.AsyncClient:
        timeout = httpx.Timeout(
            connect=self._connect_timeout,
            read=None,
            write=self._connect_timeout,
            pool=self._connect_timeout,
        )
        return httpx.AsyncClient(timeout=timeout)

    async def open(self, access_token: str) -> Result[HttpxStreamSession, StreamError]:
        """Open the stream.

        Args:
            access_token: Bearer credential.

        Returns:
            Success(HttpxStreamSession): Server answered 200.
            Failure(StreamAuthorizationError): Server answered 401/403.
            Failure(StreamUnavailableError): Any other failure.
        """
        client = self._build_client()
        request = client.build_request(
            "GET",
            self._url,
            headers={
                "Authorization": f"{BEARER_PREFIX}{access_token}",
                "Accept": EVENT_STREAM_MEDIA_TYPE,
                "Cache-Control": "no-cache",
            },
        )

        try:
            response = await client.send(request, stream=True)
        except httpx.TimeoutException as e:
            await client.aclose()
            self._logger.warning("sse_open_timeout", error=str(e))
            return Failure(
                error=StreamUnavailableError(
                    code=ErrorCode.STREAM_UNAVAILABLE,
                    message="Notification stream connection timed out",
                    is_transient=True,
                )
            )
        except httpx.RequestError as e:
            await client.aclose()
            self._logger.warning("sse_open_connection_error", error=str(e))
            return Failure(
                error=StreamUnavailableError(
                    code=ErrorCode.STREAM_UNAVAILABLE,
                    message=f"Failed to connect to notification stream: {e}",
                    is_transient=True,
                )
            )
        except BaseException:
            # Cancelled while connecting
            await client.aclose()
            raise

        status = response.status_code
        if status == 200:
            return Success(value=HttpxStreamSession(client=client, response=response))

        body = ""
        try:
            await response.aread()
            body = response.text[:RESPONSE_BODY_MAX_LENGTH]
        except httpx.HTTPError as e:
            self._logger.debug("sse_error_body_unreadable", error=str(e))
        finally:
            await response.aclose()
            await client.aclose()

        if status in AUTHORIZATION_REJECTED_STATUSES:
            self._logger.warning("sse_open_unauthorized", status_code=status)
            return Failure(
                error=StreamAuthorizationError(
                    code=ErrorCode.STREAM_AUTHORIZATION_REJECTED,
                    message="Notification stream rejected the access credential",
                    status_code=status,
                )
            )

        self._logger.warning("sse_open_unexpected_status", status_code=status)
        return Failure(
            error=StreamUnavailableError(
                code=ErrorCode.STREAM_UNAVAILABLE,
                message=f"Notification stream returned status {status}",
                status_code=status,
                is_transient=status >= 500 or status == 429,
                details={"response_body": body} if body else None,
            )
        )
