"""Shared configuration constants used across the application."""

from pathlib import Path

# Spotify OAuth scopes needed for reading playback/playlists and modifying library.
SCOPES = [
    "user-read-playback-state",
    "user-modify-playback-state",
    "user-read-currently-playing",
    "playlist-read-private",
    "playlist-read-collaborative",
    "playlist-modify-private",
    "playlist-modify-public",
    "user-read-recently-played",
    "user-library-modify",
    "user-library-read",
]
SCOPE = " ".join(SCOPES)

DEFAULT_REDIRECT_URI = "http://127.0.0.1:8888/callback"

# Local file paths for the OAuth token and the last played item.
TOKEN_PATH = Path("token.txt")
LAST_TRACK_PATH = Path("last.txt")

# Runtime tuning constants.
PLAYLIST_PAGE_SIZE = 50  # Spotify API max page size for playlists.
SETTLE_SECONDS = 1.0
FIXED_ACTIONS = ["Skip", "Reload", "Remove", "Quit"]
