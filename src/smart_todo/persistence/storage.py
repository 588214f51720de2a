"""Key-value storage slots for the persisted task collection.

A storage slot holds one text value per key and is replaced as a whole on
every write. Two implementations are provided:
- JsonFileStorage: one file per key in a directory, atomic writes
- MemoryStorage: dict-backed, for tests and throwaway sessions
"""

from pathlib import Path
from typing import Protocol

from smart_todo.logging import Loggers
from smart_todo.persistence._utils import atomic_write_text, sanitize_filename

logger = Loggers.persistence()


class KeyValueStorage(Protocol):
    """A durable key-value slot store."""

    def read(self, key: str) -> str | None:
        """Return the stored value, or None if the key was never written."""
        ...

    def write(self, key: str, value: str) -> None:
        """Replace the value stored under ``key``."""
        ...


class JsonFileStorage:
    """File-backed storage: each key maps to ``<directory>/<key>.json``.

    Example:
        >>> storage = JsonFileStorage(settings.data_dir)
        >>> storage.write("smart-todo::tasks", "[]")
        >>> storage.read("smart-todo::tasks")
        '[]'
    """

    def __init__(self, directory: Path) -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        """Get the file path used for a key."""
        return self._directory / f"{sanitize_filename(key)}.json"

    def read(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, key: str, value: str) -> None:
        path = self.path_for(key)
        atomic_write_text(path, value)
        logger.debug("storage_written", path=str(path), size=len(value))


class MemoryStorage:
    """In-memory storage with the same contract as JsonFileStorage."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._slots: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self._slots.get(key)

    def write(self, key: str, value: str) -> None:
        self._slots[key] = value

    def keys(self) -> list[str]:
        return list(self._slots)
