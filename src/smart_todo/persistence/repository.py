"""Serialization of the task collection into a storage slot.

The whole collection is stored under one namespace key as a JSON array of
task records (dates as ``YYYY-MM-DD``, ``createdAt`` as epoch
milliseconds, ids as strings), in collection order.
"""

import json
from typing import TYPE_CHECKING, Iterable

from smart_todo.errors import PersistenceReadError, PersistenceWriteError
from smart_todo.logging import Loggers
from smart_todo.tasks.models import Task

if TYPE_CHECKING:
    from smart_todo.persistence.storage import KeyValueStorage

logger = Loggers.persistence()

STORAGE_KEY = "smart-todo::tasks"


def encode_tasks(tasks: Iterable[Task]) -> str:
    """Serialize tasks to the stored JSON text."""
    return json.dumps([task.to_dict() for task in tasks], ensure_ascii=False, indent=2)


def decode_tasks(raw: str) -> list[Task]:
    """Parse stored JSON text into tasks.

    Raises:
        PersistenceReadError: If the text is not a JSON array of valid records.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise PersistenceReadError(f"Stored tasks are not valid JSON: {e}") from e
    except RecursionError as e:
        raise PersistenceReadError("Stored tasks are nested too deeply") from e

    if not isinstance(data, list):
        raise PersistenceReadError(
            "Stored tasks must be a JSON array",
            details={"type": type(data).__name__},
        )

    tasks: list[Task] = []
    for index, record in enumerate(data):
        if not isinstance(record, dict):
            raise PersistenceReadError(
                f"Task record at index {index} is not an object",
                details={"index": index},
            )
        try:
            tasks.append(Task.from_dict(record))
        except (KeyError, TypeError, ValueError) as e:
            raise PersistenceReadError(
                f"Task record at index {index} is malformed: {e}",
                details={"index": index},
            ) from e
    return tasks


class TaskRepository:
    """Reads and writes the task collection through a KeyValueStorage.

    Example:
        >>> repo = TaskRepository(MemoryStorage())
        >>> repo.write([task])
        >>> repo.read()[0].id == task.id
        True
    """

    def __init__(self, storage: "KeyValueStorage", key: str = STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def read(self) -> list[Task]:
        """Load the stored collection.

        Returns an empty list when nothing has been stored yet.

        Raises:
            PersistenceReadError: If the slot is unreadable or malformed.
        """
        try:
            raw = self._storage.read(self._key)
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceReadError(f"Could not read stored tasks: {e}") from e
        if raw is None:
            return []
        return decode_tasks(raw)

    def read_or_empty(self) -> list[Task]:
        """Load the stored collection, falling back to empty on bad data."""
        try:
            return self.read()
        except PersistenceReadError as e:
            logger.warning("stored_tasks_unreadable", key=self._key, error=e.message)
            return []

    def write(self, tasks: Iterable[Task]) -> None:
        """Replace the stored collection.

        Raises:
            PersistenceWriteError: If the storage slot cannot be written.
        """
        payload = encode_tasks(tasks)
        try:
            self._storage.write(self._key, payload)
        except OSError as e:
            raise PersistenceWriteError(f"Could not write tasks: {e}", details={"key": self._key}) from e
