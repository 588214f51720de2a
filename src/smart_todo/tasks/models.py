"""Task entity and its serialized record format."""

import math
import re
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any

TITLE_MAX_LENGTH = 120

_ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


class Priority(str, Enum):
    """Valid task priorities."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


PRIORITY_RANK: dict[str, int] = {
    Priority.HIGH.value: 3,
    Priority.MEDIUM.value: 2,
    Priority.LOW.value: 1,
}


def priority_value(priority: Priority | str) -> str:
    """Stored text of a priority, including unrecognized legacy values."""
    return priority.value if isinstance(priority, Priority) else priority


def priority_rank(priority: Priority | str) -> int:
    """Rank used for priority sorting; unrecognized values rank 0."""
    return PRIORITY_RANK.get(priority_value(priority), 0)


def parse_iso_date(text: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` calendar date.

    Raises:
        ValueError: For any other shape, including compact and week dates.
    """
    if not _ISO_DATE_RE.fullmatch(text):
        raise ValueError(f"expected YYYY-MM-DD, got {text!r}")
    return date.fromisoformat(text)


def safe_enum(enum_cls, value, default):
    """Convert value to enum, returning default if invalid."""
    try:
        return enum_cls(value)
    except ValueError:
        return default


@dataclass
class Task:
    """A single task entry.

    ``created_at`` is milliseconds since the epoch. Overdue status is not
    stored; use ``is_overdue(today)``. ``priority`` is a plain string only
    for stored records whose priority is not recognized; those rank lowest.
    """

    id: str
    title: str
    due: date
    priority: Priority | str = Priority.MEDIUM
    completed: bool = False
    created_at: int = 0

    def is_overdue(self, today: date) -> bool:
        return not self.completed and self.due < today

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "due": self.due.isoformat(),
            "priority": priority_value(self.priority),
            "completed": self.completed,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        """Build a task from a stored record.

        Raises KeyError, TypeError or ValueError when the record is
        malformed. Unknown priority strings are kept as they are.
        """
        title = data["title"]
        if not isinstance(title, str):
            raise TypeError(f"title must be a string, got {type(title).__name__}")
        completed = data.get("completed", False)
        if not isinstance(completed, bool):
            raise TypeError(f"completed must be a boolean, got {type(completed).__name__}")
        created_at = data.get("createdAt", 0)
        if isinstance(created_at, bool) or not isinstance(created_at, (int, float)):
            raise TypeError(f"createdAt must be a number, got {type(created_at).__name__}")
        if isinstance(created_at, float) and not math.isfinite(created_at):
            raise ValueError(f"createdAt must be finite, got {created_at}")
        priority = data.get("priority", Priority.MEDIUM.value)
        if not isinstance(priority, str):
            raise TypeError(f"priority must be a string, got {type(priority).__name__}")
        due = data["due"]
        if not isinstance(due, str):
            raise TypeError(f"due must be a string, got {type(due).__name__}")
        return cls(
            id=str(data["id"]),
            title=title,
            due=parse_iso_date(due),
            priority=safe_enum(Priority, priority, priority),
            completed=completed,
            created_at=int(created_at),
        )
