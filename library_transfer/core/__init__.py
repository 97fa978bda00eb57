"""Public façade for the library_transfer.core package.

This module exposes logging helpers, the data model, the batching primitive,
error types, and the two-slot session context. Callers should import these
cross-cutting concerns from this façade instead of the internal submodules.
"""

from .batching import chunk
from .errors import RemoteApiError, SpotifyAuthError, SpotifyTokenMissing
from .logging_config import configure_logging
from .logging_utils import (
    get_logger,
    log_error,
    log_info,
    log_progress,
    log_section,
    log_step,
    log_success,
    log_warning,
)
from .models import (
    Credential,
    EntityType,
    FailureEntry,
    FollowedArtist,
    LibrarySnapshot,
    PlaylistSummary,
    SavedAlbum,
    SavedShow,
    SavedTrack,
    SuccessEntry,
    TransferProgress,
    TransferResult,
    TransferSelection,
)
from .session import SOURCE, TARGET, SessionContext

__all__ = [
    "configure_logging",
    "get_logger",
    "log_section",
    "log_info",
    "log_step",
    "log_success",
    "log_warning",
    "log_error",
    "log_progress",
    "chunk",
    "RemoteApiError",
    "SpotifyAuthError",
    "SpotifyTokenMissing",
    "Credential",
    "EntityType",
    "PlaylistSummary",
    "SavedTrack",
    "SavedAlbum",
    "FollowedArtist",
    "SavedShow",
    "LibrarySnapshot",
    "TransferSelection",
    "SuccessEntry",
    "FailureEntry",
    "TransferResult",
    "TransferProgress",
    "SessionContext",
    "SOURCE",
    "TARGET",
]
