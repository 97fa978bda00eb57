"""Shared HTTP helpers for the Spotify Web API.

All remote calls go through `requests` with a bearer header. No retries and
no timeouts beyond the library defaults are applied here.
"""

from typing import Any, Dict, Optional

import requests

from library_transfer.core import RemoteApiError

UNAUTHORIZED_APP_HINT = (
    "This account is not authorized for this application. Add it under "
    "Spotify Developer Dashboard → App → Settings → User Management."
)


def spotify_headers(access_token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {access_token}"}


def non_json_hint(response: requests.Response, label: str = "Spotify API") -> str:
    """
    Human-readable message for a response whose body is not JSON.

    A 403 with an HTML body usually means the account is not registered as
    a test user of the developer app.
    """
    if response.status_code == 403:
        return UNAUTHORIZED_APP_HINT
    return f"{label} returned non-JSON (status {response.status_code}). Try again."


def extract_error_message(response: requests.Response, default: str) -> str:
    """
    Unwrap a Spotify error body into a single message.

    Handles both shapes:
      - Web API        : {"error": {"status": 401, "message": "..."}}
      - accounts (auth): {"error": "invalid_grant", "error_description": "..."}
    """
    try:
        body = response.json()
    except ValueError:
        return non_json_hint(response)

    if not isinstance(body, dict):
        return default

    error = body.get("error")
    if isinstance(error, dict):
        return error.get("message") or default
    if error:
        return body.get("error_description") or str(error)
    return default


def api_request(
    method: str,
    url: str,
    access_token: str,
    payload: Optional[Any] = None,
) -> requests.Response:
    """Issue one authenticated request and return the raw response."""
    headers = spotify_headers(access_token)
    if payload is None:
        return requests.request(method, url, headers=headers)
    return requests.request(method, url, headers=headers, json=payload)


def get_json(url: str, access_token: str) -> Dict[str, Any]:
    """
    Authenticated GET returning the parsed JSON body.

    Raises RemoteApiError on a non-success status or an unreadable body.
    """
    r = api_request("GET", url, access_token)
    if not r.ok:
        raise RemoteApiError(
            extract_error_message(r, f"Request failed (status {r.status_code})"),
            status_code=r.status_code,
        )
    return json_object(r)


def json_object(response: requests.Response) -> Dict[str, Any]:
    """Parsed body of a successful response, which must be a JSON object."""
    try:
        body = response.json()
    except ValueError:
        raise RemoteApiError(non_json_hint(response), status_code=response.status_code)

    if not isinstance(body, dict):
        raise RemoteApiError(
            f"Unexpected response from {response.url or 'Spotify API'}: "
            f"expected an object, got {type(body).__name__}.",
            status_code=response.status_code,
        )
    return body
