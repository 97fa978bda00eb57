from typing import Optional


class RemoteApiError(Exception):
    """Non-success (or unreadable) response from the Spotify Web API."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SpotifyAuthError(Exception):
    """Token exchange, refresh, or profile lookup failed."""


class SpotifyTokenMissing(Exception):
    """No credential is available for the requested account slot."""
