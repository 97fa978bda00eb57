import time
from typing import Dict, Optional
from urllib.parse import urlencode

import requests

from library_transfer.config import (
    SCOPES,
    SPOTIFY_API_BASE,
    SPOTIFY_AUTH_URL,
    SPOTIFY_CLIENT_ID,
    SPOTIFY_CLIENT_SECRET,
    SPOTIFY_TOKEN_URL,
)
from library_transfer.core import (
    Credential,
    SpotifyAuthError,
    log_step,
    log_success,
    log_warning,
)

from .http import extract_error_message, non_json_hint, spotify_headers

ACCOUNT_TYPES = ("source", "target")


def build_spotify_auth_url(
    redirect_uri: str, account_type: str, state: Optional[str] = None
) -> str:
    """
    Authorization URL for one account.

    The account type travels in the OAuth `state` ("source_<epoch ms>") so
    the callback knows which slot the returned code belongs to.
    """
    if state is None:
        state = f"{account_type}_{int(time.time() * 1000)}"

    auth_query_parameters = {
        "client_id": SPOTIFY_CLIENT_ID,
        "response_type": "code",
        "redirect_uri": redirect_uri,
        "scope": " ".join(SCOPES),
        "state": state,
        "show_dialog": "true",
    }
    return f"{SPOTIFY_AUTH_URL}?{urlencode(auth_query_parameters)}"


def parse_account_type(state: Optional[str]) -> Optional[str]:
    """'source_1700000000000' -> 'source'; anything unrecognized -> None."""
    if not state:
        return None
    prefix = state.split("_", 1)[0]
    return prefix if prefix in ACCOUNT_TYPES else None


def _post_token(form: Dict[str, str]) -> requests.Response:
    return requests.post(
        SPOTIFY_TOKEN_URL,
        data=form,
        auth=(SPOTIFY_CLIENT_ID or "", SPOTIFY_CLIENT_SECRET or ""),
    )


def _token_error(data: Dict, fallback: str) -> str:
    return data.get("error_description") or data.get("error") or fallback


def _fetch_profile(access_token: str) -> Dict:
    r = requests.get(f"{SPOTIFY_API_BASE}/me", headers=spotify_headers(access_token))
    try:
        profile = r.json()
    except ValueError:
        log_warning(f"Profile endpoint returned non-JSON: {r.text[:200]}")
        raise SpotifyAuthError(non_json_hint(r, label="Spotify profile endpoint"))

    if not r.ok or (isinstance(profile, dict) and profile.get("error")):
        raise SpotifyAuthError(
            extract_error_message(
                r, f"Failed to fetch profile (status {r.status_code})"
            )
        )
    return profile


def exchange_code_for_token(code: str, redirect_uri: str) -> Dict:
    """
    Exchange an authorization code, then read the profile of the new account.

    Returns access_token, refresh_token, expires_in and a trimmed user profile.
    Raises SpotifyAuthError with the most specific message available.
    """
    log_step("Exchanging authorization code for token...")
    r = _post_token(
        {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": redirect_uri,
        }
    )

    try:
        token_data = r.json()
    except ValueError:
        log_warning(f"Token endpoint returned non-JSON: {r.text[:200]}")
        raise SpotifyAuthError(
            f"Spotify token endpoint returned non-JSON (status {r.status_code}). "
            "Please verify Redirect URI + Client Secret in Spotify app settings."
        )

    if not r.ok or token_data.get("error"):
        raise SpotifyAuthError(
            _token_error(token_data, f"Token exchange failed (status {r.status_code})")
        )

    profile = _fetch_profile(token_data["access_token"])
    log_success(
        f"Token exchanged for user: {profile.get('display_name') or profile.get('id')}"
    )

    return {
        "access_token": token_data["access_token"],
        "refresh_token": token_data.get("refresh_token"),
        "expires_in": token_data.get("expires_in"),
        "user": {
            "id": profile.get("id"),
            "display_name": profile.get("display_name"),
            "email": profile.get("email"),
            "images": profile.get("images") or [],
            "country": profile.get("country"),
            "product": profile.get("product"),
        },
    }


def refresh_spotify_token(refresh_token: str) -> Dict:
    log_step("Refreshing access token...")
    r = _post_token({"grant_type": "refresh_token", "refresh_token": refresh_token})

    try:
        token_data = r.json()
    except ValueError:
        raise SpotifyAuthError(
            f"Spotify token endpoint returned non-JSON (status {r.status_code})."
        )

    if not r.ok or token_data.get("error"):
        raise SpotifyAuthError(
            _token_error(token_data, f"Token refresh failed (status {r.status_code})")
        )

    return {
        "access_token": token_data["access_token"],
        "expires_in": token_data.get("expires_in"),
    }


def ensure_fresh(credential: Credential) -> Credential:
    """
    Return a usable credential: refreshed if expired and refreshable,
    unchanged otherwise.
    """
    if not credential.is_expired() or not credential.refresh_token:
        return credential

    token_info = refresh_spotify_token(credential.refresh_token)
    return Credential.from_token_response(
        token_info, refresh_token=credential.refresh_token
    )
