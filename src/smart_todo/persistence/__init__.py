"""Persistence module for smart-todo."""

from smart_todo.persistence.repository import (
    STORAGE_KEY,
    TaskRepository,
    decode_tasks,
    encode_tasks,
)
from smart_todo.persistence.storage import JsonFileStorage, KeyValueStorage, MemoryStorage

__all__ = [
    "STORAGE_KEY",
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "TaskRepository",
    "decode_tasks",
    "encode_tasks",
]
