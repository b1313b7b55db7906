"""Uniform view over tracks and podcast episodes."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Track:
    """Uniform view over the playable item Spotify reports as currently playing."""

    kind: str
    id: str | None
    uri: str
    name: str
    artists: list[str] = field(default_factory=list)

    @property
    def is_episode(self) -> bool:
        return self.kind == "episode"

    @property
    def artists_text(self) -> str:
        return ", ".join(self.artists)

    @classmethod
    def from_playable_item(cls, item: dict[str, Any] | None) -> "Track | None":
        """Project a track or episode payload into a Track.

        Tracks credit their artists, episodes credit the show they belong to.
        Anything else, or an item without a URI, yields None.
        """
        if not isinstance(item, dict):
            return None

        uri = item.get("uri")
        if not uri:
            return None

        kind = item.get("type")
        if kind == "track":
            raw_artists = item.get("artists") or []
            artists = [(artist.get("name") or "").strip() for artist in raw_artists if isinstance(artist, dict)]
        elif kind == "episode":
            show = item.get("show") or {}
            artists = [str(show.get("name") or "").strip()] if isinstance(show, dict) else []
        else:
            return None

        return cls(
            kind=kind,
            id=item.get("id"),
            uri=uri,
            name=str(item.get("name") or "Unknown"),
            artists=[artist for artist in artists if artist],
        )
