"""Copy a Spotify library (playlists, saved tracks, albums, followed artists,
saved podcasts) from one account to another."""

__version__ = "0.1.0"
