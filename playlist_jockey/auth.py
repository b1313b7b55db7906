"""OAuth Authorization Code flow backed by the local token file."""

import json
import logging
import secrets
import urllib.parse
from typing import Any

from spotipy.cache_handler import CacheHandler
from spotipy.oauth2 import SpotifyOAuth, SpotifyOauthError

from .config import DEFAULT_REDIRECT_URI, SCOPE
from .env import get_env, get_required_env
from .spotify_client import API_ERRORS
from .storage import TextStore
from .ui import Prompter

logger = logging.getLogger(__name__)


class AuthenticationError(RuntimeError):
    """Raised when neither the cached token nor the browser flow yields a session."""


class TokenStoreCacheHandler(CacheHandler):
    """Spotipy cache handler that keeps the token info JSON in a TextStore."""

    def __init__(self, store: TextStore) -> None:
        self.store = store

    def get_cached_token(self) -> dict[str, Any] | None:
        raw = self.store.read()
        if not raw or not raw.strip():
            return None

        try:
            token_info = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Ignoring unparseable token in %r: %s", self.store, exc)
            return None

        if not isinstance(token_info, dict):
            logger.warning("Ignoring token in %r: expected a JSON object", self.store)
            return None
        return token_info

    def save_token_to_cache(self, token_info: dict[str, Any]) -> None:
        self.store.write(json.dumps(token_info))


def create_auth_manager(token_store: TextStore, redirect_uri: str | None = None) -> SpotifyOAuth:
    """Create the OAuth manager; the redirect is pasted back by hand, so no browser is opened."""
    return SpotifyOAuth(
        client_id=get_required_env("SPOTIPY_CLIENT_ID"),
        client_secret=get_required_env("SPOTIPY_CLIENT_SECRET"),
        redirect_uri=redirect_uri or get_env("SPOTIPY_REDIRECT_URI", DEFAULT_REDIRECT_URI),
        scope=SCOPE,
        cache_handler=TokenStoreCacheHandler(token_store),
        open_browser=False,
        show_dialog=False,
    )


def parse_redirect_url(url: str) -> tuple[str, str]:
    """Return (code, state) from the URL the browser was redirected to."""
    url = url.strip()
    query = urllib.parse.parse_qs(urllib.parse.urlparse(url).query)
    if query.get("error"):
        raise AuthenticationError(f"authorization was denied ({query['error'][0]})")
    if "?code=" not in url or not query.get("code"):
        raise AuthenticationError("URL doesn't include '?code='")
    if "&state=" not in url or not query.get("state"):
        raise AuthenticationError("URL doesn't include '&state='")

    return query["code"][0], query["state"][0]


def load_cached_token(auth_manager: SpotifyOAuth) -> dict[str, Any] | None:
    """Return a usable cached token, refreshing it if expired, or None."""
    token_info = auth_manager.cache_handler.get_cached_token()
    if token_info is None:
        return None

    try:
        return auth_manager.validate_token(token_info)
    except (SpotifyOauthError, KeyError, *API_ERRORS) as exc:
        logger.info("Cached token could not be used: %s", exc)
        return None


def authenticate_interactively(auth_manager: SpotifyOAuth, prompter: Prompter) -> dict[str, Any]:
    """Run the browser redirect flow and store the resulting token."""
    state = secrets.token_urlsafe(16)
    print(f"Open this URL in your browser: {auth_manager.get_authorize_url(state=state)}")

    url = prompter.text("Enter the URL you were redirected to", allow_empty=False)
    if url is None:
        raise AuthenticationError("no redirect URL was entered")

    code, returned_state = parse_redirect_url(url)
    if returned_state != state:
        raise AuthenticationError("state in the redirect URL doesn't match the request")

    try:
        # The auth manager writes the new token through its cache handler.
        auth_manager.get_access_token(code, as_dict=False, check_cache=False)
    except (SpotifyOauthError, *API_ERRORS) as exc:
        raise AuthenticationError(f"final login call went wrong: {exc}") from exc

    token_info = auth_manager.cache_handler.get_cached_token()
    if token_info is None:
        raise AuthenticationError("no token was stored after login")
    return token_info


def authenticate(auth_manager: SpotifyOAuth, prompter: Prompter) -> dict[str, Any]:
    """Reuse the stored token when possible, otherwise fall back to the browser flow."""
    token_info = load_cached_token(auth_manager)
    if token_info is not None:
        print("Authenticated using existing token!")
        return token_info

    token_info = authenticate_interactively(auth_manager, prompter)
    print("Authentication successful!")
    return token_info
