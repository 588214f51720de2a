"""Intent dispatch: mutate the store, then recompute the view.

The controller is the single entry point a front end talks to. Each
``dispatch`` call validates (for add/edit), mutates and persists through
the TaskStore, and returns a fresh QueryResult for re-rendering along with
any field-tagged validation messages.
"""

from dataclasses import dataclass, field

from smart_todo.clock import Clock
from smart_todo.errors import NotFoundError, ValidationError
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
from smart_todo.logging import Loggers
from smart_todo.tasks.query import Criteria, QueryResult, query
from smart_todo.tasks.store import TaskStore

logger = Loggers.controller()


@dataclass
class Outcome:
    """What a front end needs after an intent ran.

    Attributes:
        result: The recomputed view and stats
        errors: Validation messages keyed by field ("title", "due", "priority")
        task_id: Id of the task an add/edit/toggle acted on
        removed: Number of tasks removed by delete/clear intents
        not_found: True when edit/toggle referenced a missing task
        completed: New completion state after a toggle
    """

    result: QueryResult
    errors: dict[str, str] = field(default_factory=dict)
    task_id: str | None = None
    removed: int = 0
    not_found: bool = False
    completed: bool | None = None

    @property
    def ok(self) -> bool:
        return not self.errors and not self.not_found


class TaskListController:
    """Runs intents against a TaskStore and derives the view.

    Example:
        >>> controller = TaskListController(store)
        >>> outcome = controller.dispatch(AddTask("Buy milk", "2030-01-02"))
        >>> outcome.result.stats.total
        1
    """

    def __init__(
        self,
        store: TaskStore,
        clock: Clock | None = None,
        criteria: Criteria | None = None,
    ) -> None:
        self._store = store
        self._clock = clock or store.clock
        self._criteria = criteria or Criteria()

    @property
    def criteria(self) -> Criteria:
        return self._criteria

    @property
    def store(self) -> TaskStore:
        return self._store

    def view(self) -> QueryResult:
        """Recompute the view for the current criteria."""
        return query(self._store.snapshot(), self._criteria, today=self._clock.today())

    def dispatch(self, intent: Intent) -> Outcome:
        """Run one intent to completion.

        Raises:
            TypeError: If ``intent`` is not a known intent type.
            PersistenceWriteError: If the store could not be written.
        """
        name = type(intent).__name__
        logger.debug("intent_dispatched", intent=name)

        try:
            outcome = self._apply(intent)
        except ValidationError as e:
            logger.info("intent_rejected", intent=name, fields=sorted(e.issues))
            return Outcome(result=self.view(), errors=e.errors)
        except NotFoundError as e:
            logger.info("intent_target_missing", intent=name, task_id=e.task_id)
            return Outcome(result=self.view(), task_id=e.task_id, not_found=True)

        return outcome

    def _apply(self, intent: Intent) -> Outcome:
        if isinstance(intent, AddTask):
            task_id = self._store.add(intent.title, intent.due, intent.priority)
            return Outcome(result=self.view(), task_id=task_id)

        if isinstance(intent, EditTask):
            self._store.edit(intent.task_id, intent.title, intent.due, intent.priority)
            return Outcome(result=self.view(), task_id=intent.task_id)

        if isinstance(intent, ToggleTask):
            completed = self._store.toggle_completed(intent.task_id)
            return Outcome(result=self.view(), task_id=intent.task_id, completed=completed)

        if isinstance(intent, DeleteTask):
            removed = 1 if self._store.remove(intent.task_id) else 0
            return Outcome(result=self.view(), task_id=intent.task_id, removed=removed)

        if isinstance(intent, ClearCompleted):
            removed = self._store.clear_completed()
            return Outcome(result=self.view(), removed=removed)

        if isinstance(intent, ClearAll):
            removed = self._store.clear_all()
            return Outcome(result=self.view(), removed=removed)

        if isinstance(intent, SetFilterCriteria):
            self._criteria = intent.criteria
            return Outcome(result=self.view())

        raise TypeError(f"Unknown intent: {intent!r}")
