"""Public façade for the library_transfer.spotify package.

This module exposes the Spotify Web API integration: OAuth helpers, the
shared HTTP helpers, the paginator, and the library snapshot reader. Callers
should import these symbols from this façade instead of the internal
auth, http, pagination, or library modules.
"""

from library_transfer.core import (
    RemoteApiError,
    SpotifyAuthError,
    SpotifyTokenMissing,
)

from .auth import (
    build_spotify_auth_url,
    ensure_fresh,
    exchange_code_for_token,
    parse_account_type,
    refresh_spotify_token,
)
from .http import (
    api_request,
    extract_error_message,
    get_json,
    json_object,
    spotify_headers,
)
from .library import fetch_library_snapshot, get_current_user, get_current_user_id
from .pagination import fetch_all_pages, with_page_size

__all__ = [
    "build_spotify_auth_url",
    "parse_account_type",
    "exchange_code_for_token",
    "refresh_spotify_token",
    "ensure_fresh",
    "spotify_headers",
    "api_request",
    "get_json",
    "json_object",
    "extract_error_message",
    "fetch_all_pages",
    "with_page_size",
    "fetch_library_snapshot",
    "get_current_user",
    "get_current_user_id",
    "RemoteApiError",
    "SpotifyAuthError",
    "SpotifyTokenMissing",
]
