"""Test suite for the notification stream client.

Test structure:
- unit/: Unit tests with mocked collaborators (HTTP via pytest-httpx)

Async tests run on pytest-asyncio; no network access is required.
"""
