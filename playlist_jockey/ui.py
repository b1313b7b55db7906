"""Terminal prompts built on questionary."""

from typing import Protocol

import questionary

from .track import Track


class Prompter(Protocol):
    """Prompt primitives the session needs; None means the user cancelled."""

    def confirm(self, message: str) -> bool | None: ...

    def text(self, message: str, allow_empty: bool = True) -> str | None: ...

    def select(self, message: str, titles: list[str]) -> int | None: ...


def now_playing_prompt(track: Track) -> str:
    """Menu heading naming the current item and who made it."""
    if not track.artists:
        return f"Currently playing: {track.name}"
    return f"Currently playing: {track.name} by {track.artists_text}"


class QuestionaryPrompter:
    """Interactive prompts; every method returns None when the user cancels."""

    def confirm(self, message: str) -> bool | None:
        return questionary.confirm(message, default=True).ask()

    def text(self, message: str, allow_empty: bool = True) -> str | None:
        validate = None
        if not allow_empty:
            validate = lambda value: bool(value.strip()) or "Please enter a value."
        return questionary.text(message, validate=validate).ask()

    def select(self, message: str, titles: list[str]) -> int | None:
        """Fuzzy-searchable single choice returning the position of the selected title."""
        choices = [questionary.Choice(title=title, value=index) for index, title in enumerate(titles)]
        return questionary.select(
            message,
            choices=choices,
            use_search_filter=True,
            use_jk_keys=False,
        ).ask()
