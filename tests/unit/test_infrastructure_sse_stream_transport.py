"""Unit tests for HttpxStreamTransport.

Tests cover:
- Request headers (bearer credential, event-stream accept)
- 200 → session yielding parsed frames
- 401/403 → StreamAuthorizationError
- Other statuses, timeouts and connection errors → StreamUnavailableError
- Mid-stream read or stream-state failure → StreamInterruptedError

Architecture:
- Uses pytest-httpx for HTTP mocking
- Tests Result pattern (Success/Failure)
"""

import httpx
import pytest
from pytest_httpx import HTTPXMock

from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.errors import (
    StreamAuthorizationError,
    StreamInterruptedError,
    StreamUnavailableError,
)
from src.infrastructure.sse import HttpxStreamSession, HttpxStreamTransport

STREAM_URL = "https://api.example.com/v1/notifications/subscribe"


class BrokenStream(httpx.AsyncByteStream):
    """Body that delivers one frame and then drops the connection."""

    async def __aiter__(self):
        yield b": ping\n\n"
        raise httpx.ReadError("connection reset by peer")


class ClosedStream(httpx.AsyncByteStream):
    """Body that delivers one frame and then reports the stream closed."""

    async def __aiter__(self):
        yield b": ping\n\n"
        raise httpx.StreamClosed()


@pytest.fixture
def transport() -> HttpxStreamTransport:
    return HttpxStreamTransport(url=STREAM_URL, connect_timeout=2.0)


@pytest.mark.unit
class TestHttpxStreamTransportOpen:
    """Test HttpxStreamTransport.open()."""

    async def test_sends_bearer_and_event_stream_headers(
        self, transport: HttpxStreamTransport, httpx_mock: HTTPXMock
    ):
        httpx_mock.add_response(url=STREAM_URL, method="GET", content=b"")

        result = await transport.open("token-abc")

        request = httpx_mock.get_request()
        assert request.headers["Authorization"] == "Bearer token-abc"
        assert request.headers["Accept"] == "text/event-stream"
        assert request.headers["Cache-Control"] == "no-cache"
        assert isinstance(result, Success)
        await result.value.aclose()

    async def test_success_yields_frames(
        self, transport: HttpxStreamTransport, httpx_mock: HTTPXMock
    ):
        httpx_mock.add_response(
            url=STREAM_URL,
            headers={"Content-Type": "text/event-stream"},
            content=(
                b": connected\n\n"
                b"event: notification\n"
                b'data: {"id": 1, "type": "POINT_EARNED", "message": "+10 points"}\n\n'
            ),
        )

        result = await transport.open("token-abc")

        assert isinstance(result, Success)
        session = result.value
        assert isinstance(session, HttpxStreamSession)
        frames = [frame async for frame in session.frames()]
        await session.aclose()

        assert len(frames) == 2
        assert frames[0].is_heartbeat is True
        assert frames[1].event == "notification"
        assert '"+10 points"' in frames[1].data

    @pytest.mark.parametrize("status_code", [401, 403])
    async def test_rejected_credential(
        self, transport: HttpxStreamTransport, httpx_mock: HTTPXMock, status_code: int
    ):
        httpx_mock.add_response(url=STREAM_URL, status_code=status_code, json={"error": "expired"})

        result = await transport.open("stale-token")

        assert isinstance(result, Failure)
        assert isinstance(result.error, StreamAuthorizationError)
        assert result.error.code == ErrorCode.STREAM_AUTHORIZATION_REJECTED
        assert result.error.status_code == status_code

    @pytest.mark.parametrize(
        ("status_code", "is_transient"),
        [(500, True), (503, True), (429, True), (404, False)],
    )
    async def test_unexpected_status(
        self,
        transport: HttpxStreamTransport,
        httpx_mock: HTTPXMock,
        status_code: int,
        is_transient: bool,
    ):
        httpx_mock.add_response(url=STREAM_URL, status_code=status_code, text="unavailable")

        result = await transport.open("token-abc")

        assert isinstance(result, Failure)
        assert isinstance(result.error, StreamUnavailableError)
        assert result.error.code == ErrorCode.STREAM_UNAVAILABLE
        assert result.error.status_code == status_code
        assert result.error.is_transient is is_transient
        assert result.error.details == {"response_body": "unavailable"}

    async def test_timeout(self, transport: HttpxStreamTransport, httpx_mock: HTTPXMock):
        httpx_mock.add_exception(httpx.ConnectTimeout("timed out"), url=STREAM_URL)

        result = await transport.open("token-abc")

        assert isinstance(result, Failure)
        assert isinstance(result.error, StreamUnavailableError)
        assert result.error.is_transient is True
        assert "timed out" in result.error.message

    async def test_connection_error(
        self, transport: HttpxStreamTransport, httpx_mock: HTTPXMock
    ):
        httpx_mock.add_exception(httpx.ConnectError("name resolution failed"), url=STREAM_URL)

        result = await transport.open("token-abc")

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.STREAM_UNAVAILABLE
        assert "name resolution failed" in result.error.message


@pytest.mark.unit
class TestHttpxStreamSession:
    """Test HttpxStreamSession reading and closing."""

    async def test_read_error_raises_interrupted(
        self, transport: HttpxStreamTransport, httpx_mock: HTTPXMock
    ):
        httpx_mock.add_callback(
            lambda request: httpx.Response(200, stream=BrokenStream()),
            url=STREAM_URL,
        )

        result = await transport.open("token-abc")
        assert isinstance(result, Success)
        session = result.value

        received = []
        with pytest.raises(StreamInterruptedError) as exc_info:
            async for frame in session.frames():
                received.append(frame)
        await session.aclose()

        assert len(received) == 1
        assert exc_info.value.error.code == ErrorCode.STREAM_INTERRUPTED

    async def test_stream_error_raises_interrupted(
        self, transport: HttpxStreamTransport, httpx_mock: HTTPXMock
    ):
        httpx_mock.add_callback(
            lambda request: httpx.Response(200, stream=ClosedStream()),
            url=STREAM_URL,
        )

        result = await transport.open("token-abc")
        assert isinstance(result, Success)
        session = result.value

        with pytest.raises(StreamInterruptedError) as exc_info:
            async for _ in session.frames():
                pass
        await session.aclose()

        assert exc_info.value.error.message == (
            "Notification stream interrupted: StreamClosed"
        )
        assert isinstance(exc_info.value.__cause__, httpx.StreamClosed)

    async def test_aclose_is_idempotent(
        self, transport: HttpxStreamTransport, httpx_mock: HTTPXMock
    ):
        httpx_mock.add_response(url=STREAM_URL, content=b"")

        result = await transport.open("token-abc")
        assert isinstance(result, Success)

        await result.value.aclose()
        await result.value.aclose()
