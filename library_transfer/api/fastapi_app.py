from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from library_transfer import __version__
from library_transfer.api.auth.routes import router as auth_router
from library_transfer.api.data.routes import router as data_router
from library_transfer.api.health import router as health_router
from library_transfer.config import FRONTEND_URL
from library_transfer.core import configure_logging

configure_logging()

app = FastAPI(
    title="Spotify Library Transfer API",
    version=__version__,
    description="Backend API to copy a Spotify library between two accounts.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[FRONTEND_URL],
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(health_router, tags=["health"])

# Auth routes
app.include_router(auth_router, prefix="/auth", tags=["auth"])

# Data routes
app.include_router(data_router, prefix="/data", tags=["data"])
