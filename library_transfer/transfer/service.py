"""Framework-agnostic entry points.

Both functions take and return JSON-serializable values. Failures that abort
the whole operation come back as a top-level {"error": "..."} field instead
of an exception, so every caller (HTTP route, CLI) renders errors the same way.
"""

from typing import Any, Dict, Mapping, Optional

import requests

from library_transfer.core import (
    RemoteApiError,
    SessionContext,
    SpotifyTokenMissing,
    TransferSelection,
    log_error,
    log_section,
)
from library_transfer.spotify import fetch_library_snapshot

from .orchestration import ProgressCallback, transfer_session


def get_user_data(access_token: str) -> Dict[str, Any]:
    """Full library snapshot of the account owning `access_token`."""
    if not access_token:
        return {"error": "Missing access token."}

    try:
        snapshot = fetch_library_snapshot(access_token)
    except (RemoteApiError, requests.RequestException) as e:
        log_error(f"Library fetch failed: {e}")
        return {"error": str(e) or "Failed to fetch data"}

    return snapshot.to_dict()


def transfer_data(
    source_token: Optional[str],
    target_token: Optional[str],
    transfer_options: Mapping[str, Any],
    on_progress: Optional[ProgressCallback] = None,
) -> Dict[str, Any]:
    """Copy the selected entities from the source to the target account."""
    log_section("Transfer")
    session = SessionContext.from_tokens(source_token, target_token)

    try:
        selection = TransferSelection.from_options(transfer_options)
        result = transfer_session(session, selection, on_progress)
    except (
        SpotifyTokenMissing,
        ValueError,
        RemoteApiError,
        requests.RequestException,
    ) as e:
        log_error(f"Transfer aborted: {e}")
        return {"error": str(e) or "Transfer failed"}

    return result.to_dict()
