"""Cart storage port and adapters.

The cart lives in client-local persistent storage as a single text blob per key.
The store only needs get/set of that blob, so tests run against the in-memory
adapter and a browsing client can use the JSON file adapter.
"""

import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path


class CartStorage(ABC):
    """Abstract key/value text storage used by the cart store."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored text for ``key``, or None when nothing is stored."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Persist ``value`` under ``key``, replacing what was there."""
        ...


class InMemoryStorage(CartStorage):
    """Storage kept in a dict; records every write for test assertions."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})
        self.writes: list[tuple[str, str]] = []

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value
        self.writes.append((key, value))


class FileStorage(CartStorage):
    """One JSON file per key inside ``directory``.

    Writes go to a temporary file first and are moved into place, so a reader
    never sees a half-written cart. Concurrent writers are last-writer-wins.
    """

    def __init__(self, directory: str | os.PathLike):
        self.directory = Path(directory)

    def _path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        try:
            return self._path_for(key).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(value)
            os.replace(tmp_path, self._path_for(key))
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise
