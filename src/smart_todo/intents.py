"""Intent messages sent by a front end to the task core.

Intents are plain frozen dataclasses. A front end builds one per user
action and hands it to ``TaskListController.dispatch``, which runs it to
completion before the next intent is accepted.

Intent Types:
    - AddTask / EditTask: create or update a task (validated)
    - ToggleTask: flip completion
    - DeleteTask: remove one task (absent ids are a no-op)
    - ClearCompleted: remove all completed tasks
    - ClearAll: remove every task (the front end confirms beforehand)
    - SetFilterCriteria: change the view's filters and sort order

Example:
    outcome = controller.dispatch(AddTask("Buy milk", "2030-01-02", "high"))
    if outcome.errors:
        show_inline(outcome.errors)
"""

from dataclasses import dataclass
from datetime import date

from smart_todo.tasks.models import Priority
from smart_todo.tasks.query import Criteria


@dataclass(frozen=True)
class AddTask:
    title: str
    due: date | str | None
    priority: Priority | str = Priority.MEDIUM


@dataclass(frozen=True)
class EditTask:
    task_id: str
    title: str
    due: date | str | None
    priority: Priority | str


@dataclass(frozen=True)
class ToggleTask:
    task_id: str


@dataclass(frozen=True)
class DeleteTask:
    task_id: str


@dataclass(frozen=True)
class ClearCompleted:
    pass


@dataclass(frozen=True)
class ClearAll:
    """Remove every task. Only send after the user confirmed."""


@dataclass(frozen=True)
class SetFilterCriteria:
    criteria: Criteria


Intent = (
    AddTask
    | EditTask
    | ToggleTask
    | DeleteTask
    | ClearCompleted
    | ClearAll
    | SetFilterCriteria
)
