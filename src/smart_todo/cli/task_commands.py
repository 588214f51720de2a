"""Slash commands that act on the task list.

Mutating commands build an intent and hand it to the app, which forwards
it to the controller. View commands change the controller's criteria.
Task ids may be given in full or as any unique prefix (the table shows
the first 8 characters).
"""

from typing import Any

from rich.markup import escape
from rich.table import Table

from smart_todo.cli.commands import Command, CommandCategory
from smart_todo.intents import (
    AddTask,
    ClearAll,
    ClearCompleted,
    DeleteTask,
    EditTask,
    ToggleTask,
)
from smart_todo.tasks.models import priority_value
from smart_todo.tasks.query import DateFilter, SortOrder, StatusFilter

_SORT_ALIASES = {
    "due": SortOrder.DUE_ASC,
    "due-asc": SortOrder.DUE_ASC,
    "due-desc": SortOrder.DUE_DESC,
    "priority": SortOrder.PRIORITY_DESC,
    "created": SortOrder.CREATED_DESC,
}


def _choices(enum_cls: type) -> str:
    return ", ".join(member.value for member in enum_cls)


# === Task mutations ===


class AddCommand(Command):
    """Create a task."""

    def __init__(self) -> None:
        super().__init__(
            name="add",
            description="Add a task",
            aliases=["new"],
            usage="/add <title> --due YYYY-MM-DD [--priority low|medium|high]",
            examples=[
                "/add Buy milk --due 2030-01-02",
                '/add "Renew passport" -d 2030-03-01 -p high',
            ],
            category=CommandCategory.TASKS,
        )

    def execute(self, args: str, app: Any) -> None:
        parsed = self.parse_args(args)
        priority = parsed.first("priority", "p", default=app.settings.default_priority.value)
        outcome = app.dispatch(
            AddTask(
                title=parsed.positional,
                due=parsed.first("due", "d", default=""),
                priority=priority,
            )
        )
        if outcome.ok:
            app.success("Task added.")
            app.show(outcome.result)


class EditCommand(Command):
    """Update a task's title, due date or priority."""

    def __init__(self) -> None:
        super().__init__(
            name="edit",
            description="Edit a task (unspecified fields are kept)",
            usage="/edit <id> [--title TEXT] [--due YYYY-MM-DD] [--priority low|medium|high]",
            examples=[
                "/edit 3f2a --due 2030-02-01",
                '/edit 3f2a --title "Buy oat milk" -p low',
            ],
            category=CommandCategory.TASKS,
        )

    def execute(self, args: str, app: Any) -> None:
        parsed = self.parse_args(args)
        task_id = app.resolve_task_id(parsed.positional)
        if task_id is None:
            return
        current = app.store.get(task_id)
        if current is None:
            app.error(f"Task not found: {task_id}")
            return

        outcome = app.dispatch(
            EditTask(
                task_id=task_id,
                title=parsed.first("title", "t", default=current.title),
                due=parsed.first("due", "d", default=current.due.isoformat()),
                priority=parsed.first("priority", "p", default=priority_value(current.priority)),
            )
        )
        if outcome.ok:
            app.success("Task updated.")
            app.show(outcome.result)


class DoneCommand(Command):
    """Toggle completion."""

    def __init__(self) -> None:
        super().__init__(
            name="done",
            description="Mark a task done (or undone again)",
            aliases=["toggle"],
            usage="/done <id>",
            examples=["/done 3f2a"],
            category=CommandCategory.TASKS,
        )

    def execute(self, args: str, app: Any) -> None:
        task_id = app.resolve_task_id(self.parse_args(args).positional)
        if task_id is None:
            return
        outcome = app.dispatch(ToggleTask(task_id))
        if outcome.ok:
            app.success("Task completed." if outcome.completed else "Task reopened.")
            app.show(outcome.result)


class DeleteCommand(Command):
    """Remove one task."""

    def __init__(self) -> None:
        super().__init__(
            name="delete",
            description="Delete a task",
            aliases=["rm"],
            usage="/delete <id>",
            examples=["/delete 3f2a"],
            category=CommandCategory.TASKS,
        )

    def execute(self, args: str, app: Any) -> None:
        task_id = app.resolve_task_id(self.parse_args(args).positional)
        if task_id is None:
            return
        outcome = app.dispatch(DeleteTask(task_id))
        app.success("Task deleted." if outcome.removed else "Nothing to delete.")
        app.show(outcome.result)


class ClearCompletedCommand(Command):
    """Remove all completed tasks."""

    def __init__(self) -> None:
        super().__init__(
            name="clear-completed",
            description="Delete all completed tasks",
            aliases=["cc"],
            category=CommandCategory.TASKS,
        )

    def execute(self, args: str, app: Any) -> None:
        outcome = app.dispatch(ClearCompleted())
        if not outcome.removed:
            app.info("No completed tasks to clear.")
            return
        noun = "task" if outcome.removed == 1 else "tasks"
        app.success(f"Cleared {outcome.removed} completed {noun}.")
        app.show(outcome.result)


class ClearAllCommand(Command):
    """Remove every task after confirmation."""

    def __init__(self) -> None:
        super().__init__(
            name="clear-all",
            description="Delete ALL tasks (asks for confirmation)",
            usage="/clear-all [--yes]",
            examples=["/clear-all", "/clear-all --yes"],
            category=CommandCategory.TASKS,
        )

    def execute(self, args: str, app: Any) -> None:
        if app.store.is_empty():
            app.info("No tasks to delete.")
            return

        parsed = self.parse_args(args)
        if not (parsed.has_flag("yes") or parsed.has_flag("y")):
            if not app.confirm(f"Delete all {len(app.store)} tasks? This cannot be undone."):
                app.info("Cancelled.")
                return

        outcome = app.dispatch(ClearAll())
        app.success(f"Deleted {outcome.removed} tasks.")
        app.show(outcome.result)


# === View ===


class ListCommand(Command):
    """Show the current view."""

    def __init__(self) -> None:
        super().__init__(
            name="list",
            description="Show tasks with the current filters",
            aliases=["ls"],
            category=CommandCategory.VIEW,
        )

    def execute(self, args: str, app: Any) -> None:
        app.show()


class SearchCommand(Command):
    """Set the case-insensitive title search."""

    def __init__(self) -> None:
        super().__init__(
            name="search",
            description="Filter by title text (no argument clears the search)",
            aliases=["find"],
            usage="/search [text]",
            examples=["/search milk", "/search"],
            category=CommandCategory.VIEW,
        )

    def execute(self, args: str, app: Any) -> None:
        app.show(app.set_criteria(text=args.strip()))


class FilterCommand(Command):
    """Set status and date filters."""

    def __init__(self) -> None:
        super().__init__(
            name="filter",
            description="Filter by status and due date (no options resets both)",
            usage=f"/filter [--status {_choices(StatusFilter)}] [--date {_choices(DateFilter)}]",
            examples=["/filter --status active", "/filter --date overdue", "/filter"],
            category=CommandCategory.VIEW,
        )

    def execute(self, args: str, app: Any) -> None:
        parsed = self.parse_args(args)
        status = parsed.first("status", "s")
        date_filter = parsed.first("date", "d")

        if status is None and date_filter is None:
            app.show(app.set_criteria(status=StatusFilter.ALL, date_filter=DateFilter.ANY))
            return

        changes: dict[str, Any] = {}
        if status is not None:
            if status.lower() not in {s.value for s in StatusFilter}:
                app.error(f"Unknown status: {escape(status)} (choose {_choices(StatusFilter)})")
                return
            changes["status"] = status.lower()
        if date_filter is not None:
            if date_filter.lower() not in {d.value for d in DateFilter}:
                app.error(f"Unknown date filter: {escape(date_filter)} (choose {_choices(DateFilter)})")
                return
            changes["date_filter"] = date_filter.lower()

        app.show(app.set_criteria(**changes))


class SortCommand(Command):
    """Choose the view order."""

    def __init__(self) -> None:
        super().__init__(
            name="sort",
            description="Sort the view (none keeps insertion order)",
            usage=f"/sort <{_choices(SortOrder)}>",
            examples=["/sort dueAsc", "/sort priority", "/sort none"],
            category=CommandCategory.VIEW,
        )

    def execute(self, args: str, app: Any) -> None:
        value = args.strip()
        if not value:
            app.info(f"Current sort: {app.controller.criteria.sort_by.value}")
            return

        order = _SORT_ALIASES.get(value.lower())
        if order is None:
            order = next((o for o in SortOrder if o.value.lower() == value.lower()), None)
        if order is None:
            app.error(f"Unknown sort order: {escape(value)} (choose {_choices(SortOrder)})")
            return

        app.show(app.set_criteria(sort_by=order))


class StatsCommand(Command):
    """Show collection counts."""

    def __init__(self) -> None:
        super().__init__(
            name="stats",
            description="Show total, active, done and overdue counts",
            category=CommandCategory.VIEW,
        )

    def execute(self, args: str, app: Any) -> None:
        stats = app.controller.view().stats

        table = Table(show_header=False, box=None, padding=(0, 2, 0, 0))
        table.add_column("Key", style="bold cyan", no_wrap=True)
        table.add_column("Value")
        table.add_row("Total", str(stats.total))
        table.add_row("Active", str(stats.active))
        table.add_row("Done", str(stats.done))
        table.add_row("Overdue", f"[red]{stats.overdue}[/red]" if stats.overdue else "0")
        app.console.print(table)


TASK_COMMANDS: list[type[Command]] = [
    AddCommand,
    EditCommand,
    DoneCommand,
    DeleteCommand,
    ClearCompletedCommand,
    ClearAllCommand,
    ListCommand,
    SearchCommand,
    FilterCommand,
    SortCommand,
    StatsCommand,
]
