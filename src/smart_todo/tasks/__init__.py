"""Task management core: model, validation, store and query engine.

Example:
    >>> store = TaskStore(TaskRepository(JsonFileStorage(settings.data_dir)))
    >>> store.load()
    >>> task_id = store.add("Buy milk", "2030-01-02", priority="high")
    >>> result = query(store.snapshot(), Criteria.parse(status="active"), today=date.today())
"""

from smart_todo.tasks.models import Priority, Task, priority_rank
from smart_todo.tasks.query import (
    Criteria,
    DateFilter,
    QueryResult,
    SortOrder,
    Stats,
    StatusFilter,
    query,
)
from smart_todo.tasks.store import TaskStore
from smart_todo.tasks.validation import (
    ValidationIssue,
    ValidationResult,
    validate,
    validate_priority,
)

__all__ = [
    "Criteria",
    "DateFilter",
    "Priority",
    "QueryResult",
    "SortOrder",
    "Stats",
    "StatusFilter",
    "Task",
    "TaskStore",
    "ValidationIssue",
    "ValidationResult",
    "priority_rank",
    "query",
    "validate",
    "validate_priority",
]
