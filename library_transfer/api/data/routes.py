from fastapi import APIRouter

from library_transfer.core import log_step
from library_transfer.transfer import get_user_data, transfer_data

from .schemas import TransferRequest, UserDataRequest

router = APIRouter()


def _dump(model) -> dict:
    if hasattr(model, "model_dump"):
        return model.model_dump()
    return model.dict()


@router.post("/user-data")
def user_data(body: UserDataRequest) -> dict:
    """
    Full library snapshot (playlists, savedTracks, savedAlbums,
    followedArtists, savedShows) of the account owning the token.
    """
    log_step("Fetching all user data...")
    return get_user_data(body.access_token)


@router.post("/transfer")
def transfer(body: TransferRequest) -> dict:
    """
    Copy the selected entities to the target account.

    Returns {"success": [...], "failed": [...]}, or {"error": "..."} when
    the transfer could not run at all.
    """
    return transfer_data(
        body.source_token,
        body.target_token,
        _dump(body.transfer_options),
    )
