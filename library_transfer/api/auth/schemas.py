"""Pydantic schemas for the auth API."""

from pydantic import BaseModel


class ExchangeRequest(BaseModel):
    code: str
    redirect_uri: str


class RefreshRequest(BaseModel):
    refresh_token: str
