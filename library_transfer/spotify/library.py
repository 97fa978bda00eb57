"""Read side: materialize an account's library into a LibrarySnapshot.

The five collections (playlists, saved tracks, saved albums, followed
artists, saved shows) do not depend on each other, so they are fetched
concurrently and joined before the snapshot is built. Any failure aborts the
whole snapshot: the exception of the first failing category propagates.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List

from library_transfer.config import SPOTIFY_API_BASE
from library_transfer.core import (
    FollowedArtist,
    LibrarySnapshot,
    PlaylistSummary,
    RemoteApiError,
    SavedAlbum,
    SavedShow,
    SavedTrack,
    log_info,
    log_step,
)

from .http import get_json
from .pagination import fetch_all_pages


def get_current_user(access_token: str) -> Dict[str, Any]:
    """Profile of the account owning the token ("who am I")."""
    return get_json(f"{SPOTIFY_API_BASE}/me", access_token)


def get_current_user_id(access_token: str) -> str:
    user_id = get_current_user(access_token).get("id")
    if not user_id:
        raise RemoteApiError("Could not resolve target account id.")
    return user_id


def _join_names(entries: List[Dict] | None) -> str:
    return ", ".join(e.get("name", "") for e in entries or [])


def _project_playlist(p: Dict[str, Any]) -> PlaylistSummary:
    return PlaylistSummary(
        id=p.get("id"),
        name=p.get("name"),
        description=p.get("description"),
        images=p.get("images") or [],
        tracks_total=(p.get("tracks") or {}).get("total") or 0,
        public=p.get("public"),
        owner=p.get("owner"),
    )


def _project_saved_track(item: Dict[str, Any]) -> SavedTrack:
    t = item.get("track") or {}
    return SavedTrack(
        id=t.get("id"),
        name=t.get("name"),
        artists=_join_names(t.get("artists")),
        album=(t.get("album") or {}).get("name"),
        added_at=item.get("added_at"),
    )


def _project_saved_album(item: Dict[str, Any]) -> SavedAlbum:
    a = item.get("album") or {}
    return SavedAlbum(
        id=a.get("id"),
        name=a.get("name"),
        artists=_join_names(a.get("artists")),
        images=a.get("images") or [],
        added_at=item.get("added_at"),
    )


def _project_artist(a: Dict[str, Any]) -> FollowedArtist:
    return FollowedArtist(
        id=a.get("id"),
        name=a.get("name"),
        images=a.get("images") or [],
        genres=a.get("genres") or [],
    )


def _project_saved_show(item: Dict[str, Any]) -> SavedShow:
    s = item.get("show") or {}
    return SavedShow(
        id=s.get("id"),
        name=s.get("name"),
        publisher=s.get("publisher"),
        images=s.get("images") or [],
        added_at=item.get("added_at"),
    )


def fetch_library_snapshot(access_token: str) -> LibrarySnapshot:
    log_step("Fetching library (playlists, tracks, albums, artists, shows)...")

    requests_by_key = {
        "playlists": (f"{SPOTIFY_API_BASE}/me/playlists", None),
        "tracks": (f"{SPOTIFY_API_BASE}/me/tracks", None),
        "albums": (f"{SPOTIFY_API_BASE}/me/albums", None),
        # Cursor-paginated, page wrapped under "artists"
        "artists": (f"{SPOTIFY_API_BASE}/me/following?type=artist", "artists"),
        "shows": (f"{SPOTIFY_API_BASE}/me/shows", None),
    }

    with ThreadPoolExecutor(max_workers=len(requests_by_key)) as executor:
        futures = {
            key: executor.submit(
                fetch_all_pages, url, access_token, container=container
            )
            for key, (url, container) in requests_by_key.items()
        }
        raw = {key: future.result() for key, future in futures.items()}

    snapshot = LibrarySnapshot(
        playlists=tuple(_project_playlist(p) for p in raw["playlists"]),
        saved_tracks=tuple(_project_saved_track(t) for t in raw["tracks"]),
        saved_albums=tuple(_project_saved_album(a) for a in raw["albums"]),
        followed_artists=tuple(_project_artist(a) for a in raw["artists"]),
        saved_shows=tuple(_project_saved_show(s) for s in raw["shows"]),
    )

    log_info(
        f"Fetched: {len(snapshot.playlists)} playlists, "
        f"{len(snapshot.saved_tracks)} tracks, "
        f"{len(snapshot.saved_albums)} albums, "
        f"{len(snapshot.followed_artists)} artists, "
        f"{len(snapshot.saved_shows)} podcasts"
    )
    return snapshot
