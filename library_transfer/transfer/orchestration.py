"""Transfer orchestrator: replay a selection against the target account.

Entity types are processed strictly in this order: tracks, albums, artists,
podcasts, then playlists (the only type needing the target account's own
user id). Every write is sequential, batch after batch and playlist after
playlist.

Failures are additive: a failing batch or playlist adds an entry to
`failed` and the transfer moves on. There is no rollback, so a transfer that
fails halfway leaves the target partially modified, and re-running it
creates the playlists again.
"""

from dataclasses import dataclass
from math import ceil
from typing import Callable, List, Optional

import requests

from library_transfer.config import (
    LIBRARY_BATCH_SIZE,
    PLAYLIST_TRACKS_BATCH_SIZE,
    PLAYLIST_TRACKS_PAGE_SIZE,
    SPOTIFY_API_BASE,
)
from library_transfer.core import (
    SOURCE,
    TARGET,
    Credential,
    EntityType,
    FailureEntry,
    RemoteApiError,
    SessionContext,
    SuccessEntry,
    TransferProgress,
    TransferResult,
    TransferSelection,
    chunk,
    log_info,
    log_step,
    log_success,
    log_warning,
)
from library_transfer.spotify import (
    api_request,
    extract_error_message,
    fetch_all_pages,
    get_current_user_id,
    get_json,
    json_object,
)

ProgressCallback = Callable[[TransferProgress], None]


@dataclass(frozen=True)
class BulkTransfer:
    """One all-or-nothing entity type and the write call that saves it."""

    entity_type: EntityType
    flag: str
    ids_field: str
    method: str
    path: str


BULK_TRANSFERS = (
    BulkTransfer(EntityType.TRACKS, "tracks", "track_ids", "PUT", "/me/tracks"),
    BulkTransfer(EntityType.ALBUMS, "albums", "album_ids", "PUT", "/me/albums"),
    BulkTransfer(
        EntityType.ARTISTS, "artists", "artist_ids", "PUT", "/me/following?type=artist"
    ),
    BulkTransfer(EntityType.PODCASTS, "podcasts", "show_ids", "PUT", "/me/shows"),
)


class _Recorder:
    """Single-writer accumulator for result entries and progress counters."""

    def __init__(self, total: int, on_progress: Optional[ProgressCallback]) -> None:
        self.success: List[SuccessEntry] = []
        self.failed: List[FailureEntry] = []
        self.total = total
        self.on_progress = on_progress

    def ok(self, entry: SuccessEntry) -> None:
        self.success.append(entry)
        self._report(entry.type)

    def fail(self, entry: FailureEntry) -> None:
        self.failed.append(entry)
        self._report(entry.type)

    def _report(self, entity_type: EntityType) -> None:
        if self.on_progress is None:
            return
        self.on_progress(
            TransferProgress(
                entity_type=entity_type,
                attempted=len(self.success) + len(self.failed),
                succeeded=len(self.success),
                failed=len(self.failed),
                total=self.total,
            )
        )

    def result(self) -> TransferResult:
        return TransferResult(success=tuple(self.success), failed=tuple(self.failed))


def _bulk_ids(selection: TransferSelection, bulk: BulkTransfer) -> List[str]:
    if not getattr(selection, bulk.flag):
        return []
    return list(getattr(selection, bulk.ids_field))


def _selected_playlists(selection: TransferSelection) -> List[str]:
    return list(selection.playlist_ids) if selection.playlists else []


def planned_units(selection: TransferSelection) -> int:
    """Number of batches plus playlists a transfer of `selection` will attempt."""
    total = sum(
        ceil(len(_bulk_ids(selection, bulk)) / LIBRARY_BATCH_SIZE)
        for bulk in BULK_TRANSFERS
    )
    return total + len(_selected_playlists(selection))


def _transfer_bulk(
    bulk: BulkTransfer, ids: List[str], target: Credential, recorder: _Recorder
) -> None:
    log_step(f"Transferring {len(ids)} {bulk.entity_type.value}...")
    url = f"{SPOTIFY_API_BASE}{bulk.path}"

    for batch in chunk(ids, LIBRARY_BATCH_SIZE):
        r = api_request(bulk.method, url, target.access_token, payload={"ids": batch})
        if r.ok:
            recorder.ok(SuccessEntry(type=bulk.entity_type, count=len(batch)))
            continue

        message = extract_error_message(r, f"Request failed (status {r.status_code})")
        log_warning(f"{bulk.entity_type.value} batch failed: {message}")
        recorder.fail(FailureEntry(type=bulk.entity_type, error=message))


def _create_playlist(target: Credential, user_id: str, source_playlist: dict) -> str:
    r = api_request(
        "POST",
        f"{SPOTIFY_API_BASE}/users/{user_id}/playlists",
        target.access_token,
        payload={
            "name": source_playlist["name"],
            "description": source_playlist.get("description") or "",
            "public": False,
        },
    )
    if not r.ok:
        raise RemoteApiError(
            extract_error_message(r, f"Playlist creation failed (status {r.status_code})"),
            status_code=r.status_code,
        )

    new_id = json_object(r).get("id")
    if not new_id:
        raise RemoteApiError("Playlist creation returned no playlist id.")
    return new_id


def _copy_playlist(
    playlist_id: str, source: Credential, target: Credential, user_id: str
) -> SuccessEntry:
    playlist = get_json(f"{SPOTIFY_API_BASE}/playlists/{playlist_id}", source.access_token)
    if not playlist.get("name"):
        raise RemoteApiError(f"Playlist {playlist_id} metadata has no name.")
    new_id = _create_playlist(target, user_id, playlist)

    items = fetch_all_pages(
        f"{SPOTIFY_API_BASE}/playlists/{playlist_id}/tracks",
        source.access_token,
        PLAYLIST_TRACKS_PAGE_SIZE,
    )
    uris = [
        item["track"]["uri"]
        for item in items
        if isinstance(item.get("track"), dict) and item["track"].get("uri")
    ]

    add_url = f"{SPOTIFY_API_BASE}/playlists/{new_id}/tracks"
    for batch in chunk(uris, PLAYLIST_TRACKS_BATCH_SIZE):
        r = api_request("POST", add_url, target.access_token, payload={"uris": batch})
        if not r.ok:
            # Not surfaced in the result: the playlist still counts as copied.
            log_warning(
                f"Adding {len(batch)} tracks to playlist {playlist['name']!r} failed: "
                f"{extract_error_message(r, f'status {r.status_code}')}"
            )

    return SuccessEntry(type=EntityType.PLAYLIST, name=playlist["name"], tracks=len(uris))


def _transfer_playlists(
    playlist_ids: List[str],
    source: Credential,
    target: Credential,
    recorder: _Recorder,
) -> None:
    log_step(f"Transferring {len(playlist_ids)} playlists...")

    try:
        user_id = get_current_user_id(target.access_token)
    except RemoteApiError as e:
        message = str(e)
        log_warning(f"Could not resolve target account: {message}")
        for playlist_id in playlist_ids:
            recorder.fail(
                FailureEntry(type=EntityType.PLAYLIST, id=playlist_id, error=message)
            )
        return

    for playlist_id in playlist_ids:
        try:
            entry = _copy_playlist(playlist_id, source, target, user_id)
        except (
            RemoteApiError,
            requests.RequestException,
            KeyError,
            TypeError,
            ValueError,
        ) as e:
            message = str(e) or type(e).__name__
            log_warning(f"Playlist {playlist_id} failed: {message}")
            recorder.fail(
                FailureEntry(type=EntityType.PLAYLIST, id=playlist_id, error=message)
            )
            continue
        recorder.ok(entry)


def transfer(
    source: Credential,
    target: Credential,
    selection: TransferSelection,
    on_progress: Optional[ProgressCallback] = None,
) -> TransferResult:
    """
    Copy the selected library entities from `source` to `target`.

    `on_progress` is called after every batch and every playlist with the
    running counts of attempted/succeeded/failed units.
    """
    recorder = _Recorder(planned_units(selection), on_progress)

    for bulk in BULK_TRANSFERS:
        ids = _bulk_ids(selection, bulk)
        if ids:
            _transfer_bulk(bulk, ids, target, recorder)

    playlist_ids = _selected_playlists(selection)
    if playlist_ids:
        _transfer_playlists(playlist_ids, source, target, recorder)

    result = recorder.result()
    log_success(
        f"Transfer complete: {len(result.success)} succeeded, {len(result.failed)} failed."
    )
    for entity_type in EntityType:
        succeeded, failed = result.entries_for(entity_type)
        if succeeded or failed:
            log_info(f"  {entity_type.value}: {len(succeeded)} ok, {len(failed)} failed")
    if result.failed:
        log_info(f"Failures: {[e.to_dict() for e in result.failed]}")
    return result


def transfer_session(
    session: SessionContext,
    selection: TransferSelection,
    on_progress: Optional[ProgressCallback] = None,
) -> TransferResult:
    """Run a transfer between the two accounts held by `session`."""
    return transfer(
        session.require(SOURCE), session.require(TARGET), selection, on_progress
    )
