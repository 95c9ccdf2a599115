"""Session adapters: credential storage and forced logout."""

from src.infrastructure.session.deduping_logout_handler import DedupingLogoutHandler
from src.infrastructure.session.in_memory_session_store import InMemorySessionStore

__all__ = [
    "DedupingLogoutHandler",
    "InMemorySessionStore",
]
