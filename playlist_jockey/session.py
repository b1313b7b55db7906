"""Session loop: show what is playing, apply the chosen action, wait for the song."""

import logging

import spotipy

from .config import FIXED_ACTIONS, SETTLE_SECONDS
from .playback import add_to_playlist, get_current_track, list_owned_playlists, remove_from_library, settle, skip
from .spotify_client import API_ERRORS
from .storage import StateFileError, TextStore
from .ui import Prompter, now_playing_prompt

logger = logging.getLogger(__name__)

SKIP, RELOAD, REMOVE, QUIT = range(len(FIXED_ACTIONS))
CONTINUE_PROMPT = "Press Enter to continue when the song is finished"


def build_menu(playlists: list[dict]) -> list[str]:
    """Fixed actions first, then playlist names in the order given."""
    return FIXED_ACTIONS + [str(playlist.get("name") or "") for playlist in playlists]


def playlist_for_selection(selection: int, playlists: list[dict]) -> dict:
    """Map a menu index past the fixed actions onto its playlist."""
    index = selection - len(FIXED_ACTIONS)
    if index < 0 or index >= len(playlists):
        raise RuntimeError(f"Selected an action that isn't implemented yet: {selection}")
    return playlists[index]


def run_iteration(
    sp: spotipy.Spotify,
    last_store: TextStore,
    prompter: Prompter,
    settle_seconds: float = SETTLE_SECONDS,
) -> bool:
    """Run one menu round. Returns False when the session should end."""
    try:
        track = get_current_track(sp)
    except API_ERRORS as exc:
        logger.debug("Currently playing lookup failed: %s", exc)
        return False
    if track is None:
        return False

    try:
        user = sp.current_user()
    except API_ERRORS as exc:
        logger.debug("Profile lookup failed: %s", exc)
        print("Failed to get user profile!")
        return False

    try:
        playlists = list_owned_playlists(sp, user["id"])
    except API_ERRORS as exc:
        logger.debug("Playlist listing failed: %s", exc)
        print("Failed to get user playlists!")
        return False

    selection = prompter.select(now_playing_prompt(track), build_menu(playlists))
    if selection is None:
        print("Invalid selection!")
        return True

    if selection == RELOAD:
        return True
    if selection == QUIT:
        return False

    # Every remaining action moves away from this item, so remember it first.
    try:
        last_store.write(track.uri)
    except StateFileError as exc:
        print(exc)

    if selection == SKIP:
        try:
            skip(sp)
        except API_ERRORS as exc:
            logger.debug("Skip failed: %s", exc)
            print("Failed to skip to next track!")
        settle(settle_seconds)
    elif selection == REMOVE:
        try:
            remove_from_library(sp, track)
        except API_ERRORS as exc:
            logger.debug("Remove failed for %s: %s", track.uri, exc)
            print("Failed to remove track from library!")
        try:
            skip(sp)
        except API_ERRORS as exc:
            logger.debug("Skip failed: %s", exc)
            print("Failed to skip to next track!")
        settle(settle_seconds)
    else:
        playlist = playlist_for_selection(selection, playlists)
        try:
            add_to_playlist(sp, playlist["id"], track)
        except API_ERRORS as exc:
            logger.debug("Adding %s to %s failed: %s", track.uri, playlist["id"], exc)
            print(f"Failed to add track to playlist!\nTrack: {track.uri}\nPlaylist: {playlist['id']}")

    # Manual pacing: the next round starts once the user says the song is over.
    prompter.text(CONTINUE_PROMPT, allow_empty=True)
    return True


def run_session(
    sp: spotipy.Spotify,
    last_store: TextStore,
    prompter: Prompter,
    settle_seconds: float = SETTLE_SECONDS,
) -> None:
    """Repeat menu rounds until one signals the end of the session."""
    while run_iteration(sp, last_store, prompter, settle_seconds=settle_seconds):
        pass
