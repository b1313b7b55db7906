from fakes import episode_item, track_item
from playlist_jockey.track import Track
from playlist_jockey.ui import now_playing_prompt


def test_track_item_projects_artist_names():
    track = Track.from_playable_item(track_item("a", name="Song", artists=("X", "Y")))

    assert track == Track(kind="track", id="a", uri="spotify:track:a", name="Song", artists=["X", "Y"])
    assert track.artists_text == "X, Y"
    assert not track.is_episode


def test_episode_item_credits_its_show():
    track = Track.from_playable_item(episode_item("e", name="Ep 1", show="The Show"))

    assert track.kind == "episode"
    assert track.uri == "spotify:episode:e"
    assert track.artists == ["The Show"]
    assert track.is_episode


def test_unusable_items_are_rejected():
    assert Track.from_playable_item(None) is None
    assert Track.from_playable_item({"type": "track", "name": "No uri"}) is None
    assert Track.from_playable_item({"type": "ad", "uri": "spotify:ad:1"}) is None


def test_blank_artist_names_are_dropped():
    item = track_item("a")
    item["artists"] = [{"name": ""}, {"name": " Z "}, "junk"]

    assert Track.from_playable_item(item).artists == ["Z"]


def test_now_playing_prompt():
    track = Track.from_playable_item(track_item("a", name="Song", artists=("X",)))
    assert now_playing_prompt(track) == "Currently playing: Song by X"

    anonymous = Track(kind="track", id="b", uri="spotify:track:b", name="Untitled")
    assert now_playing_prompt(anonymous) == "Currently playing: Untitled"


def test_null_names_are_treated_as_missing():
    item = track_item("a")
    item["artists"] = [{"name": None}, {"name": "X"}]
    assert Track.from_playable_item(item).artists == ["X"]

    episode = episode_item("e")
    episode["show"] = {"name": None}
    assert Track.from_playable_item(episode).artists == []
