import time
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple


class EntityType(str, Enum):
    """Entity type labels, as they appear in transfer results."""

    TRACKS = "tracks"
    ALBUMS = "albums"
    ARTISTS = "artists"
    PODCASTS = "podcasts"
    PLAYLIST = "playlist"


@dataclass
class Credential:
    """
    Bearer credential for one account.

    - access_token  : token sent as "Authorization: Bearer ..."
    - refresh_token : optional, used to obtain a new access token
    - expires_in    : lifetime in seconds, as returned by the token endpoint
    - obtained_at   : epoch seconds when the token was issued
    """

    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    obtained_at: float = field(default_factory=time.time)

    @classmethod
    def from_token_response(
        cls, data: Mapping[str, Any], refresh_token: Optional[str] = None
    ) -> "Credential":
        # A refresh response carries no refresh_token: keep the previous one.
        return cls(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token") or refresh_token,
            expires_in=data.get("expires_in"),
        )

    @property
    def expires_at(self) -> Optional[float]:
        if self.expires_in is None:
            return None
        return self.obtained_at + self.expires_in

    def is_expired(self, skew: int = 60, now: Optional[float] = None) -> bool:
        if self.expires_at is None:
            return False
        now = time.time() if now is None else now
        return now > self.expires_at - skew


# --- Library snapshot ---


@dataclass(frozen=True)
class PlaylistSummary:
    id: str
    name: str
    description: Optional[str]
    images: List[Dict]
    tracks_total: int
    public: Optional[bool]
    owner: Optional[Dict]


@dataclass(frozen=True)
class SavedTrack:
    id: Optional[str]
    name: Optional[str]
    artists: str
    album: Optional[str]
    added_at: Optional[str]


@dataclass(frozen=True)
class SavedAlbum:
    id: Optional[str]
    name: Optional[str]
    artists: str
    images: List[Dict]
    added_at: Optional[str]


@dataclass(frozen=True)
class FollowedArtist:
    id: str
    name: str
    images: List[Dict]
    genres: List[str]


@dataclass(frozen=True)
class SavedShow:
    id: Optional[str]
    name: Optional[str]
    publisher: Optional[str]
    images: List[Dict]
    added_at: Optional[str]


def _ids(items: Sequence[Any]) -> List[str]:
    return [item.id for item in items if item.id]


@dataclass(frozen=True)
class LibrarySnapshot:
    """
    Point-in-time view of an account's transferable library.

    Built once per login and never mutated; a fresh fetch replaces it.
    """

    playlists: Tuple[PlaylistSummary, ...] = ()
    saved_tracks: Tuple[SavedTrack, ...] = ()
    saved_albums: Tuple[SavedAlbum, ...] = ()
    followed_artists: Tuple[FollowedArtist, ...] = ()
    saved_shows: Tuple[SavedShow, ...] = ()

    def playlist_ids(self) -> List[str]:
        return _ids(self.playlists)

    def track_ids(self) -> List[str]:
        return _ids(self.saved_tracks)

    def album_ids(self) -> List[str]:
        return _ids(self.saved_albums)

    def artist_ids(self) -> List[str]:
        return _ids(self.followed_artists)

    def show_ids(self) -> List[str]:
        return _ids(self.saved_shows)

    def to_dict(self) -> Dict[str, List[Dict]]:
        """Wire shape consumed by the frontend (camelCase collection keys)."""
        return {
            "playlists": [asdict(p) for p in self.playlists],
            "savedTracks": [asdict(t) for t in self.saved_tracks],
            "savedAlbums": [asdict(a) for a in self.saved_albums],
            "followedArtists": [asdict(a) for a in self.followed_artists],
            "savedShows": [asdict(s) for s in self.saved_shows],
        }


# --- Transfer selection ---


@dataclass(frozen=True)
class TransferSelection:
    """
    What to copy to the target account.

    Playlists are the only per-item selection; the four other types are
    all-or-nothing and carry every ID of the source snapshot when enabled.
    """

    playlists: bool = False
    tracks: bool = False
    albums: bool = False
    artists: bool = False
    podcasts: bool = False
    playlist_ids: Tuple[str, ...] = ()
    track_ids: Tuple[str, ...] = ()
    album_ids: Tuple[str, ...] = ()
    artist_ids: Tuple[str, ...] = ()
    show_ids: Tuple[str, ...] = ()

    @classmethod
    def from_snapshot(
        cls,
        snapshot: LibrarySnapshot,
        *,
        tracks: bool = False,
        albums: bool = False,
        artists: bool = False,
        podcasts: bool = False,
        playlist_ids: Sequence[str] = (),
    ) -> "TransferSelection":
        return cls(
            playlists=bool(playlist_ids),
            tracks=tracks,
            albums=albums,
            artists=artists,
            podcasts=podcasts,
            playlist_ids=tuple(playlist_ids),
            track_ids=tuple(snapshot.track_ids()) if tracks else (),
            album_ids=tuple(snapshot.album_ids()) if albums else (),
            artist_ids=tuple(snapshot.artist_ids()) if artists else (),
            show_ids=tuple(snapshot.show_ids()) if podcasts else (),
        )

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "TransferSelection":
        """
        Parse the wire shape sent by the frontend:
          {"tracks": true, "trackIds": [...], "playlists": true, "playlistIds": [...], ...}
        """
        if not isinstance(options, Mapping):
            raise ValueError("transfer_options must be an object.")

        def id_list(key: str) -> Tuple[str, ...]:
            value = options.get(key) or []
            if not isinstance(value, (list, tuple)):
                raise ValueError(f"{key} must be a list of ids.")
            return tuple(str(v) for v in value)

        return cls(
            playlists=bool(options.get("playlists")),
            tracks=bool(options.get("tracks")),
            albums=bool(options.get("albums")),
            artists=bool(options.get("artists")),
            podcasts=bool(options.get("podcasts")),
            playlist_ids=id_list("playlistIds"),
            track_ids=id_list("trackIds"),
            album_ids=id_list("albumIds"),
            artist_ids=id_list("artistIds"),
            show_ids=id_list("showIds"),
        )


# --- Transfer result ---


@dataclass(frozen=True)
class SuccessEntry:
    type: EntityType
    count: Optional[int] = None
    name: Optional[str] = None
    tracks: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type.value}
        if self.count is not None:
            data["count"] = self.count
        if self.type is EntityType.PLAYLIST:
            data["name"] = self.name
            data["tracks"] = self.tracks
        return data


@dataclass(frozen=True)
class FailureEntry:
    type: EntityType
    error: str
    id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type.value, "error": self.error}
        if self.id is not None:
            data["id"] = self.id
        return data


@dataclass(frozen=True)
class TransferResult:
    success: Tuple[SuccessEntry, ...] = ()
    failed: Tuple[FailureEntry, ...] = ()

    def entries_for(self, entity_type: EntityType) -> Tuple[list, list]:
        return (
            [e for e in self.success if e.type is entity_type],
            [e for e in self.failed if e.type is entity_type],
        )

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "success": [e.to_dict() for e in self.success],
            "failed": [e.to_dict() for e in self.failed],
        }


@dataclass(frozen=True)
class TransferProgress:
    """
    Running counters reported after every batch or playlist.

    attempted/succeeded/failed count units of work (one bulk batch or one
    playlist); total is the number of units planned for the whole transfer.
    """

    entity_type: EntityType
    attempted: int
    succeeded: int
    failed: int
    total: int

    @property
    def percent(self) -> float:
        if self.total <= 0:
            return 100.0
        return min(100.0, self.attempted * 100.0 / self.total)
