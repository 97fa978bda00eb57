from typing import Literal

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import JSONResponse

from library_transfer.config import SPOTIFY_REDIRECT_URI
from library_transfer.core import log_error
from library_transfer.spotify import (
    SpotifyAuthError,
    build_spotify_auth_url,
    exchange_code_for_token,
    parse_account_type,
    refresh_spotify_token,
)

from .schemas import ExchangeRequest, RefreshRequest

router = APIRouter()


@router.get("/url")
def get_auth_url(
    account_type: Literal["source", "target"] = Query(...),
    redirect_uri: str = Query(default=SPOTIFY_REDIRECT_URI),
) -> dict:
    """
    Spotify authorization URL for the source or the target account.
    """
    return {"auth_url": build_spotify_auth_url(redirect_uri, account_type)}


@router.post("/exchange")
def exchange_token(body: ExchangeRequest) -> dict:
    """
    Exchange an authorization code for tokens + the account's profile.

    Failures are reported as {"error": "..."} with a 200 status.
    """
    try:
        return exchange_code_for_token(body.code, body.redirect_uri)
    except SpotifyAuthError as e:
        log_error(f"Token exchange failed: {e}")
        return {"error": str(e)}


@router.post("/refresh")
def refresh_token(body: RefreshRequest):
    try:
        return refresh_spotify_token(body.refresh_token)
    except SpotifyAuthError as e:
        log_error(f"Token refresh failed: {e}")
        return JSONResponse(status_code=400, content={"error": str(e)})


@router.get("/callback")
def auth_callback(
    code: str | None = Query(default=None),
    state: str | None = Query(default=None),
    error: str | None = Query(default=None),
    error_description: str | None = Query(default=None),
) -> dict:
    """
    Spotify redirect target: resolve the account slot from `state`, then
    exchange the code with the configured redirect URI.
    """
    if error:
        raise HTTPException(
            status_code=400,
            detail=error_description or f"Spotify authorization failed: {error}",
        )

    if code is None:
        raise HTTPException(status_code=400, detail="Missing 'code' parameter.")

    account_type = parse_account_type(state)
    if account_type is None:
        return {"error": "Could not determine account type (source/target) from state."}

    try:
        bundle = exchange_code_for_token(code, SPOTIFY_REDIRECT_URI)
    except SpotifyAuthError as e:
        log_error(f"Token exchange failed: {e}")
        return {"error": str(e)}

    return {"account_type": account_type, **bundle}
