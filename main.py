#!/usr/bin/env python3
"""
Command line interface for the library transfer.

Usage:
  python3 main.py auth-url --account source
  python3 main.py snapshot --token TOKEN
  python3 main.py transfer --source-token S --target-token T --types tracks albums
  python3 main.py transfer --source-refresh-token RS --target-token T --all-playlists
  python3 main.py transfer --source-token S --target-token T --playlist ID1 ID2

Tokens default to SOURCE_ACCESS_TOKEN / TARGET_ACCESS_TOKEN and
SOURCE_REFRESH_TOKEN / TARGET_REFRESH_TOKEN from the environment.
Results are printed as JSON on stdout.
"""

import argparse
import json
import os
import sys
from typing import Any, Dict, Optional

import requests

from library_transfer.config import SPOTIFY_REDIRECT_URI
from library_transfer.core import (
    SOURCE,
    TARGET,
    Credential,
    SessionContext,
    TransferProgress,
    TransferSelection,
    configure_logging,
    log_error,
    log_progress,
    log_section,
)
from library_transfer.spotify import (
    RemoteApiError,
    SpotifyAuthError,
    SpotifyTokenMissing,
    build_spotify_auth_url,
    ensure_fresh,
    fetch_library_snapshot,
)
from library_transfer.transfer import get_user_data, transfer_session

BULK_TYPES = ("tracks", "albums", "artists", "podcasts")


def print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def report_progress(progress: TransferProgress) -> None:
    log_progress(
        progress.attempted,
        progress.total,
        prefix=f"  Transfer ({progress.entity_type.value}, {progress.failed} failed)",
    )


def _credential(token: Optional[str], refresh_token: Optional[str]) -> Optional[Credential]:
    if not token and not refresh_token:
        return None
    # Without an access token, mark the credential expired so it gets refreshed.
    return Credential(
        access_token=token or "",
        refresh_token=refresh_token,
        expires_in=None if token else 0,
    )


def build_session(args: argparse.Namespace) -> SessionContext:
    session = SessionContext(
        source=_credential(args.source_token, args.source_refresh_token),
        target=_credential(args.target_token, args.target_refresh_token),
    )
    for slot in (SOURCE, TARGET):
        credential = session.get(slot)
        if credential is not None:
            session.set(slot, ensure_fresh(credential))
    return session


def run_transfer(args: argparse.Namespace) -> Dict[str, Any]:
    session = build_session(args)
    source = session.require(SOURCE)
    session.require(TARGET)

    log_section("Source library")
    snapshot = fetch_library_snapshot(source.access_token)

    playlist_ids = snapshot.playlist_ids() if args.all_playlists else args.playlist
    types = set(args.types)
    selection = TransferSelection.from_snapshot(
        snapshot,
        tracks="tracks" in types,
        albums="albums" in types,
        artists="artists" in types,
        podcasts="podcasts" in types,
        playlist_ids=playlist_ids,
    )

    log_section("Transfer")
    result = transfer_session(session, selection, on_progress=report_progress)
    return result.to_dict()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Copy a Spotify library from one account to another",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_url = sub.add_parser("auth-url", help="Print the authorization URL for an account")
    p_url.add_argument("--account", choices=[SOURCE, TARGET], required=True)
    p_url.add_argument("--redirect-uri", default=SPOTIFY_REDIRECT_URI)

    p_snap = sub.add_parser("snapshot", help="Print the library snapshot of an account")
    p_snap.add_argument("--token", default=os.environ.get("SOURCE_ACCESS_TOKEN"))

    p_tr = sub.add_parser("transfer", help="Transfer the library from source to target")
    p_tr.add_argument("--source-token", default=os.environ.get("SOURCE_ACCESS_TOKEN"))
    p_tr.add_argument("--target-token", default=os.environ.get("TARGET_ACCESS_TOKEN"))
    p_tr.add_argument(
        "--source-refresh-token", default=os.environ.get("SOURCE_REFRESH_TOKEN")
    )
    p_tr.add_argument(
        "--target-refresh-token", default=os.environ.get("TARGET_REFRESH_TOKEN")
    )
    p_tr.add_argument(
        "--types",
        nargs="*",
        choices=BULK_TYPES,
        default=[],
        help="All-or-nothing entity types to copy",
    )
    group = p_tr.add_mutually_exclusive_group()
    group.add_argument("--playlist", nargs="+", default=[], metavar="ID")
    group.add_argument("--all-playlists", action="store_true")

    return parser


def main(argv=None) -> int:
    configure_logging()
    args = build_parser().parse_args(argv)

    if args.command == "auth-url":
        print_json({"auth_url": build_spotify_auth_url(args.redirect_uri, args.account)})
        return 0

    if args.command == "snapshot":
        data = get_user_data(args.token or "")
    else:
        try:
            data = run_transfer(args)
        except (
            SpotifyTokenMissing,
            SpotifyAuthError,
            RemoteApiError,
            requests.RequestException,
        ) as e:
            log_error(f"Transfer aborted: {e}")
            data = {"error": str(e)}

    print_json(data)
    return 1 if "error" in data else 0


if __name__ == "__main__":
    sys.exit(main())
