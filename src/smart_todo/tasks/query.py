"""Filtered, sorted views and aggregate counts over a task collection.

``query`` is a pure function of (tasks, criteria, today): it never
mutates or keeps the sequence it is given. Filters are AND-combined,
sorting is stable, and the stats always describe the full collection,
not the filtered view.

Example:
    >>> criteria = Criteria.parse(text="buy", status="active", sort_by="dueAsc")
    >>> result = query(store.snapshot(), criteria, today=clock.today())
    >>> [t.title for t in result.view]
    ['Buy milk']
    >>> result.stats.total
    2
"""

from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Any, Sequence

from smart_todo.tasks.models import Task, safe_enum, priority_rank


class StatusFilter(str, Enum):
    """Completion filter."""

    ALL = "all"
    ACTIVE = "active"
    DONE = "done"


class DateFilter(str, Enum):
    """Due-date filter."""

    ANY = "any"
    TODAY = "today"
    UPCOMING = "upcoming"
    OVERDUE = "overdue"


class SortOrder(str, Enum):
    """View ordering. NONE keeps collection order."""

    DUE_ASC = "dueAsc"
    DUE_DESC = "dueDesc"
    PRIORITY_DESC = "prioDesc"
    CREATED_DESC = "createdDesc"
    NONE = "none"


@dataclass(frozen=True)
class Criteria:
    """Text query, status filter, date filter and sort order."""

    text: str = ""
    status: StatusFilter = StatusFilter.ALL
    date_filter: DateFilter = DateFilter.ANY
    sort_by: SortOrder = SortOrder.NONE

    @classmethod
    def parse(
        cls,
        text: str | None = "",
        status: Any = StatusFilter.ALL,
        date_filter: Any = DateFilter.ANY,
        sort_by: Any = SortOrder.NONE,
    ) -> "Criteria":
        """Build criteria from raw values.

        Unknown sort values mean "no reordering"; unknown status and date
        values fall back to ``all`` and ``any``.
        """
        return cls(
            text=text or "",
            status=safe_enum(StatusFilter, status, StatusFilter.ALL),
            date_filter=safe_enum(DateFilter, date_filter, DateFilter.ANY),
            sort_by=safe_enum(SortOrder, sort_by, SortOrder.NONE),
        )

    def replace(self, **changes: Any) -> "Criteria":
        """Return a copy with the given fields changed (raw values accepted)."""
        merged = {
            "text": self.text,
            "status": self.status,
            "date_filter": self.date_filter,
            "sort_by": self.sort_by,
        }
        merged.update(changes)
        return Criteria.parse(**merged)

    def to_dict(self) -> dict[str, str]:
        return {
            "text": self.text,
            "status": self.status.value,
            "dateFilter": self.date_filter.value,
            "sortBy": self.sort_by.value,
        }


@dataclass(frozen=True)
class Stats:
    """Counts over the unfiltered collection."""

    total: int = 0
    active: int = 0
    done: int = 0
    overdue: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "active": self.active,
            "done": self.done,
            "overdue": self.overdue,
        }


@dataclass(frozen=True)
class QueryResult:
    """A derived view plus collection stats."""

    view: list[Task] = field(default_factory=list)
    stats: Stats = field(default_factory=Stats)
    criteria: Criteria = field(default_factory=Criteria)

    @property
    def is_empty(self) -> bool:
        """True when the filtered view has nothing to show."""
        return not self.view


def _matches(task: Task, needle: str, criteria: Criteria, today: date) -> bool:
    if needle and needle not in task.title.lower():
        return False

    if criteria.status is StatusFilter.ACTIVE and task.completed:
        return False
    if criteria.status is StatusFilter.DONE and not task.completed:
        return False

    if criteria.date_filter is DateFilter.TODAY:
        return task.due == today
    if criteria.date_filter is DateFilter.UPCOMING:
        return task.due > today
    if criteria.date_filter is DateFilter.OVERDUE:
        return task.is_overdue(today)
    return True


def sort_tasks(tasks: Sequence[Task], sort_by: SortOrder) -> list[Task]:
    """Stable sort; ties keep their relative order."""
    if sort_by is SortOrder.DUE_ASC:
        return sorted(tasks, key=lambda t: t.due)
    if sort_by is SortOrder.DUE_DESC:
        return sorted(tasks, key=lambda t: t.due, reverse=True)
    if sort_by is SortOrder.PRIORITY_DESC:
        return sorted(tasks, key=lambda t: priority_rank(t.priority), reverse=True)
    if sort_by is SortOrder.CREATED_DESC:
        return sorted(tasks, key=lambda t: t.created_at, reverse=True)
    return list(tasks)


def compute_stats(tasks: Sequence[Task], today: date) -> Stats:
    """Count total, active, done and overdue tasks."""
    total = len(tasks)
    done = sum(1 for t in tasks if t.completed)
    overdue = sum(1 for t in tasks if t.is_overdue(today))
    return Stats(total=total, active=total - done, done=done, overdue=overdue)


def query(tasks: Sequence[Task], criteria: Criteria | None = None, *, today: date) -> QueryResult:
    """Derive the filtered, sorted view and the collection stats.

    Args:
        tasks: Snapshot of the collection, in collection order.
        criteria: Filters and sort order; defaults to show everything unsorted.
        today: Local calendar date used for date filters and overdue.

    Returns:
        QueryResult with copies of the matching tasks.
    """
    criteria = criteria or Criteria()
    needle = criteria.text.strip().lower()
    filtered = [replace(t) for t in tasks if _matches(t, needle, criteria, today)]
    return QueryResult(
        view=sort_tasks(filtered, criteria.sort_by),
        stats=compute_stats(tasks, today),
        criteria=criteria,
    )
