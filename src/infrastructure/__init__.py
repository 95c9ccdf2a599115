"""Infrastructure layer - Adapters for the notification stream client.

This layer contains implementations of domain protocols (ports):
- sse/: text/event-stream parser and the httpx stream transport
- security/: access token expiry decoding and the reissue client
- session/: in-memory session store and the forced logout handler
- notifications/: default notification display and link resolution
- events/: in-memory event bus
- logging/: structlog adapter

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""
