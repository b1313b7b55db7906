"""Spotipy client setup and cleanup helpers."""

import logging

import requests
import spotipy
from spotipy.exceptions import SpotifyException
from spotipy.oauth2 import SpotifyOAuth

# Failures of a single Web API call: HTTP errors reported by Spotify and transport errors.
API_ERRORS = (SpotifyException, requests.exceptions.RequestException)


def configure_spotipy_logging() -> None:
    """Reduce Spotipy logger noise so the menu output stays readable."""
    for logger_name in ("spotipy", "spotipy.client", "spotipy.oauth2"):
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.CRITICAL)
        logger.propagate = False


# Apply logging policy at import so all consumers get consistent behavior.
configure_spotipy_logging()


def create_spotify_client(auth_manager: SpotifyOAuth) -> spotipy.Spotify:
    """Create a Spotipy client with retries and timeouts around an auth manager."""
    return spotipy.Spotify(
        auth_manager=auth_manager,
        requests_timeout=10,
        retries=3,
        status_retries=3,
    )


def close_session(obj: object) -> None:
    """Close the HTTP session held by one Spotipy object, if any."""
    # Spotipy exposes sessions on private attributes.
    session = getattr(obj, "_session", None)
    close_fn = getattr(session, "close", None)
    if callable(close_fn):
        close_fn()


def close_sessions(sp: spotipy.Spotify) -> None:
    """Close HTTP sessions held by the client and its auth manager."""
    for obj in (sp, sp.auth_manager):
        close_session(obj)
