from typing import List, Optional

from pydantic import BaseModel, Field


class UserDataRequest(BaseModel):
    access_token: str


class TransferOptions(BaseModel):
    """Selection sent by the frontend; ID list keys keep their camelCase names."""

    playlists: bool = False
    tracks: bool = False
    albums: bool = False
    artists: bool = False
    podcasts: bool = False
    playlistIds: List[str] = Field(default_factory=list)
    trackIds: List[str] = Field(default_factory=list)
    albumIds: List[str] = Field(default_factory=list)
    artistIds: List[str] = Field(default_factory=list)
    showIds: List[str] = Field(default_factory=list)


class TransferRequest(BaseModel):
    source_token: Optional[str] = None
    target_token: Optional[str] = None
    transfer_options: TransferOptions = Field(default_factory=TransferOptions)
