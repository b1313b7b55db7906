"""Playback and library helpers around the Spotipy client."""

import time
from typing import Any

import spotipy

from .config import PLAYLIST_PAGE_SIZE
from .track import Track


def get_current_track(sp: spotipy.Spotify) -> Track | None:
    """Return the currently playing track or episode, or None when nothing plays."""
    playing = sp.currently_playing(additional_types="track,episode")
    if not isinstance(playing, dict):
        return None
    return Track.from_playable_item(playing.get("item"))


def list_owned_playlists(sp: spotipy.Spotify, user_id: str) -> list[dict[str, Any]]:
    """Fetch every page of the user's playlists and keep the ones they own."""
    playlists: list[dict[str, Any]] = []
    offset = 0

    while True:
        page = sp.current_user_playlists(limit=PLAYLIST_PAGE_SIZE, offset=offset)
        items = page.get("items") or []
        if not items:
            break

        for playlist in items:
            # Playlists that were deleted upstream come back as null entries.
            if not isinstance(playlist, dict):
                continue
            owner = playlist.get("owner") or {}
            if owner.get("id") == user_id:
                playlists.append(playlist)

        offset += len(items)
        if not page.get("next"):
            break

    return playlists


def collection_context_uri(user_id: str) -> str:
    """Context URI of the user's saved-tracks collection."""
    return f"spotify:user:{user_id}:collection"


def resume_last_track(sp: spotipy.Spotify, uri: str, user_id: str, disable_shuffle: bool = True) -> None:
    """Restart the user's saved-tracks collection at the last played item."""
    if disable_shuffle:
        # Shuffled playback would jump away from the resumed position.
        sp.shuffle(False)

    sp.start_playback(
        context_uri=collection_context_uri(user_id),
        offset={"uri": uri},
    )


def skip(sp: spotipy.Spotify) -> None:
    """Advance playback to the next item."""
    sp.next_track()


def remove_from_library(sp: spotipy.Spotify, track: Track) -> None:
    """Remove the item from the user's saved tracks, or saved episodes for podcasts."""
    if track.is_episode:
        sp.current_user_saved_episodes_delete([track.uri])
    else:
        sp.current_user_saved_tracks_delete([track.uri])


def add_to_playlist(sp: spotipy.Spotify, playlist_id: str, track: Track) -> None:
    """Append the item to the end of a playlist."""
    sp.playlist_add_items(playlist_id, [track.uri])


def settle(seconds: float) -> None:
    """Give Spotify time to apply a playback change before the next read."""
    if seconds > 0:
        time.sleep(seconds)
