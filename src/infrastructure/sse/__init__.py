"""SSE infrastructure adapters package.

This package contains the client side of the notification stream:
- SSEFrameParser: text/event-stream line parser
- HttpxStreamTransport: StreamTransportProtocol over httpx

Architecture:
    - Implements domain protocols without inheritance (structural typing)
    - Transport failures become Result values; reconnect policy lives in
      the domain state machine, not here
"""

from src.infrastructure.sse.frame_parser import SSEFrameParser
from src.infrastructure.sse.httpx_stream_transport import (
    HttpxStreamSession,
    HttpxStreamTransport,
)

__all__ = [
    "SSEFrameParser",
    "HttpxStreamSession",
    "HttpxStreamTransport",
]
