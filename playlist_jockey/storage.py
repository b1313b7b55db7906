"""Storage ports for the small pieces of state kept between runs."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class StateFileError(RuntimeError):
    """Raised when a local state file exists but cannot be read or written."""


class TextStore:
    """Interface for a single text blob that is always overwritten wholesale."""

    def read(self) -> str | None:
        raise NotImplementedError

    def write(self, text: str) -> None:
        raise NotImplementedError


class FileTextStore(TextStore):
    """Text store backed by one local file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def read(self) -> str | None:
        if not self.path.exists():
            return None

        try:
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise StateFileError(f"{self.path} exists but couldn't read it: {exc}") from exc

    def write(self, text: str) -> None:
        try:
            self.path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise StateFileError(f"Failed to write to {self.path}: {exc}") from exc
        logger.debug("Wrote %d characters to %s", len(text), self.path)

    def __repr__(self) -> str:
        return f"FileTextStore({str(self.path)!r})"


class InMemoryTextStore(TextStore):
    """Text store kept in memory, for tests and dry runs."""

    def __init__(self, initial: str | None = None) -> None:
        self._text = initial
        self.writes: list[str] = []

    def read(self) -> str | None:
        return self._text

    def write(self, text: str) -> None:
        self._text = text
        self.writes.append(text)


def read_last_uri(store: TextStore) -> str | None:
    """Return the stored last-played URI, treating blank content as absent."""
    text = store.read()
    if text is None:
        return None
    return text.strip() or None
