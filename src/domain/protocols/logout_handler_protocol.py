"""Logout handler protocol (port).

Invoked by the stream client when the session cannot be recovered
(credential reissue failed, or the reissued credential was rejected).
"""

from typing import Protocol


class LogoutHandlerProtocol(Protocol):
    """Ends the authenticated session."""

    async def force_logout(self, reason: str) -> None:
        """Sign the user out and redirect to re-authentication.

        Args:
            reason: Message to show the user.
        """
        ...
