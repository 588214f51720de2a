"""Smart Todo - a client-side task list manager.

This package provides the task list core and a terminal front end:

- Validation of titles, due dates and priorities
- An ordered, persistent TaskStore
- A pure query engine (text/status/date filters, sorting, stats)
- Intent dispatch through TaskListController
- A slash-command REPL built on prompt_toolkit and rich

Note: TodoCLIApp is lazy-loaded so the core can be used without
importing the terminal stack.
"""

from smart_todo.clock import Clock, FixedClock, SystemClock
from smart_todo.config import (
    SettingsContext,
    TodoSettings,
    get_context_settings,
    get_settings,
    reload_settings,
    set_context_settings,
    set_settings,
)
from smart_todo.controller import Outcome, TaskListController
from smart_todo.errors import (
    ErrorCode,
    NotFoundError,
    PersistenceReadError,
    PersistenceWriteError,
    TodoError,
    ValidationError,
)
from smart_todo.intents import (
    AddTask,
    ClearAll,
    ClearCompleted,
    DeleteTask,
    EditTask,
    Intent,
    SetFilterCriteria,
    ToggleTask,
)
from smart_todo.persistence import JsonFileStorage, MemoryStorage, TaskRepository
from smart_todo.tasks import (
    Criteria,
    DateFilter,
    Priority,
    QueryResult,
    SortOrder,
    Stats,
    StatusFilter,
    Task,
    TaskStore,
    query,
    validate,
)

_lazy_imports = {
    "TodoCLIApp": "smart_todo.cli.app",
}


def __getattr__(name: str):
    """Lazy import for the terminal front end."""
    if name in _lazy_imports:
        import importlib

        module = importlib.import_module(_lazy_imports[name])
        value = getattr(module, name)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    # Core
    "Task",
    "Priority",
    "TaskStore",
    "TaskRepository",
    "JsonFileStorage",
    "MemoryStorage",
    "validate",
    # Query
    "Criteria",
    "StatusFilter",
    "DateFilter",
    "SortOrder",
    "Stats",
    "QueryResult",
    "query",
    # Intents
    "TaskListController",
    "Outcome",
    "Intent",
    "AddTask",
    "EditTask",
    "ToggleTask",
    "DeleteTask",
    "ClearCompleted",
    "ClearAll",
    "SetFilterCriteria",
    # Errors
    "ErrorCode",
    "TodoError",
    "ValidationError",
    "NotFoundError",
    "PersistenceReadError",
    "PersistenceWriteError",
    # Clock
    "Clock",
    "SystemClock",
    "FixedClock",
    # Settings
    "TodoSettings",
    "SettingsContext",
    "get_settings",
    "set_settings",
    "set_context_settings",
    "get_context_settings",
    "reload_settings",
    # CLI
    "TodoCLIApp",  # lazy
]

__version__ = "0.1.0"
