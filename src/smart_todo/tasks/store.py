"""Ordered, persistent task collection.

The store is the only owner of task objects. Every mutation validates
first, writes the new collection through the repository, and only then
swaps it in, so a failed validation or a failed write leaves the
in-memory state exactly as it was after the last successful call.

Example:
    >>> store = TaskStore(TaskRepository(MemoryStorage()), clock=FixedClock(date(2030, 1, 1)))
    >>> task_id = store.add("Buy milk", "2030-01-02", "high")
    >>> store.toggle_completed(task_id)
    True
    >>> store.clear_completed()
    1
"""

import uuid
from dataclasses import replace
from datetime import date
from typing import TYPE_CHECKING, Callable, Iterator, cast

from smart_todo.clock import Clock, SystemClock
from smart_todo.errors import NotFoundError, ValidationError
from smart_todo.logging import Loggers
from smart_todo.tasks.models import Priority, Task
from smart_todo.tasks.validation import (
    DateOrEmpty,
    ValidationIssue,
    validate,
    validate_priority,
)

if TYPE_CHECKING:
    from smart_todo.persistence.repository import TaskRepository

logger = Loggers.store()


def _new_task_id() -> str:
    return uuid.uuid4().hex


class TaskStore:
    """In-memory ordered task list backed by a TaskRepository.

    Args:
        repository: Where the collection is loaded from and written to.
        clock: Source of "today" (validation) and creation timestamps.
        id_factory: Generates fresh task ids.
    """

    def __init__(
        self,
        repository: "TaskRepository",
        clock: Clock | None = None,
        id_factory: Callable[[], str] = _new_task_id,
    ) -> None:
        self._repository = repository
        self._clock = clock or SystemClock()
        self._id_factory = id_factory
        self._tasks: list[Task] = []

    @property
    def clock(self) -> Clock:
        return self._clock

    # ---- persistence ----

    def load(self) -> None:
        """Restore the collection from the repository.

        Absent or malformed stored state results in an empty collection.
        """
        tasks: list[Task] = []
        seen: set[str] = set()
        for task in self._repository.read_or_empty():
            if task.id in seen:
                logger.warning("duplicate_task_id_dropped", task_id=task.id)
                continue
            seen.add(task.id)
            tasks.append(task)
        self._tasks = tasks
        logger.info("tasks_loaded", count=len(tasks))

    def persist(self) -> None:
        """Write the current collection to the repository."""
        self._repository.write(self._tasks)

    def _commit(self, tasks: list[Task]) -> None:
        # Write first: a failed write must not change in-memory state
        self._repository.write(tasks)
        self._tasks = tasks

    # ---- reads ----

    def get(self, task_id: str) -> Task | None:
        """Get a copy of a task by id."""
        index = self._index_of(task_id)
        return None if index is None else replace(self._tasks[index])

    def snapshot(self) -> list[Task]:
        """Copies of all tasks, in collection order."""
        return [replace(t) for t in self._tasks]

    def is_empty(self) -> bool:
        return not self._tasks

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return any(t.id == task_id for t in self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.snapshot())

    def _index_of(self, task_id: str) -> int | None:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        return None

    # ---- mutations ----

    def _validated(
        self, title: str, due: DateOrEmpty, priority: Priority | str
    ) -> tuple[str, date, Priority]:
        result = validate(title, due, today=self._clock.today())
        issues: dict[str, ValidationIssue] = result.issues
        checked_priority = validate_priority(priority)
        if isinstance(checked_priority, ValidationIssue):
            issues["priority"] = checked_priority
        if issues:
            raise ValidationError(issues)
        # No issues means the due date parsed
        return result.title, cast(date, result.due), checked_priority

    def _fresh_id(self) -> str:
        task_id = self._id_factory()
        while task_id in self:
            task_id = self._id_factory()
        return task_id

    def add(self, title: str, due: DateOrEmpty, priority: Priority | str = Priority.MEDIUM) -> str:
        """Create a task and append it to the collection.

        Args:
            title: Task title (trimmed before storing).
            due: Due date as a date or ``YYYY-MM-DD`` string.
            priority: low, medium or high.

        Returns:
            The new task's id.

        Raises:
            ValidationError: If the title, due date or priority is rejected.
        """
        clean_title, due_date, checked_priority = self._validated(title, due, priority)
        task = Task(
            id=self._fresh_id(),
            title=clean_title,
            due=due_date,
            priority=checked_priority,
            completed=False,
            created_at=self._clock.now_ms(),
        )
        self._commit([*self._tasks, task])
        logger.info("task_added", task_id=task.id, due=task.due.isoformat(), priority=task.priority.value)
        return task.id

    def edit(self, task_id: str, title: str, due: DateOrEmpty, priority: Priority | str) -> None:
        """Update a task's title, due date and priority.

        Raises:
            ValidationError: If the new values are rejected.
            NotFoundError: If no task has this id.
        """
        clean_title, due_date, checked_priority = self._validated(title, due, priority)
        index = self._index_of(task_id)
        if index is None:
            raise NotFoundError(task_id)
        tasks = list(self._tasks)
        tasks[index] = replace(
            tasks[index], title=clean_title, due=due_date, priority=checked_priority
        )
        self._commit(tasks)
        logger.info("task_edited", task_id=task_id)

    def toggle_completed(self, task_id: str) -> bool:
        """Flip a task's completed flag.

        Returns:
            The new completed value.

        Raises:
            NotFoundError: If no task has this id.
        """
        index = self._index_of(task_id)
        if index is None:
            raise NotFoundError(task_id)
        tasks = list(self._tasks)
        tasks[index] = replace(tasks[index], completed=not tasks[index].completed)
        self._commit(tasks)
        logger.info("task_toggled", task_id=task_id, completed=tasks[index].completed)
        return tasks[index].completed

    def remove(self, task_id: str) -> bool:
        """Remove a task. Removing an absent id is a no-op.

        Returns:
            True if a task was removed.
        """
        tasks = [t for t in self._tasks if t.id != task_id]
        if len(tasks) == len(self._tasks):
            logger.debug("task_remove_noop", task_id=task_id)
            return False
        self._commit(tasks)
        logger.info("task_removed", task_id=task_id)
        return True

    def clear_completed(self) -> int:
        """Remove every completed task.

        Returns:
            How many tasks were removed (0 if none).
        """
        tasks = [t for t in self._tasks if not t.completed]
        removed = len(self._tasks) - len(tasks)
        if removed:
            self._commit(tasks)
        logger.info("completed_cleared", removed=removed)
        return removed

    def clear_all(self) -> int:
        """Remove every task. Confirmation is the caller's job.

        Returns:
            How many tasks were removed.
        """
        removed = len(self._tasks)
        self._commit([])
        logger.info("all_cleared", removed=removed)
        return removed
