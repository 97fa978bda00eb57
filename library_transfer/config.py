from dotenv import load_dotenv
import os

load_dotenv()

# Spotify credentials (REQUIRED for the OAuth exchange)
SPOTIFY_CLIENT_ID = os.getenv("SPOTIFY_CLIENT_ID")
SPOTIFY_CLIENT_SECRET = os.getenv("SPOTIFY_CLIENT_SECRET")
SPOTIFY_REDIRECT_URI = os.getenv(
    "SPOTIFY_REDIRECT_URI", "http://127.0.0.1:8888/callback"
)

# Allowed CORS origin for the frontend ("*" = any)
FRONTEND_URL = os.getenv("FRONTEND_URL", "*")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Spotify API constants
SPOTIFY_AUTH_URL = "https://accounts.spotify.com/authorize"
SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"
SPOTIFY_API_BASE = "https://api.spotify.com/v1"

SCOPES = [
    "user-library-read",
    "user-library-modify",
    "playlist-read-private",
    "playlist-read-collaborative",
    "playlist-modify-public",
    "playlist-modify-private",
    "user-follow-read",
    "user-follow-modify",
    "user-read-private",
    "user-read-email",
]

# Page sizes for paginated reads
DEFAULT_PAGE_SIZE = 50
PLAYLIST_TRACKS_PAGE_SIZE = 100

# Write ceilings imposed by the Web API
LIBRARY_BATCH_SIZE = 50
PLAYLIST_TRACKS_BATCH_SIZE = 100
