"""Domain entities.

Usage:
    from src.domain.entities import StreamConnection
"""

from src.domain.entities.stream_connection import StreamConnection

__all__ = ["StreamConnection"]
