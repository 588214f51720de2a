"""Rich renderables for query results."""

from datetime import date

from rich.table import Table
from rich.text import Text

from smart_todo.tasks.models import Priority, Task, priority_value
from smart_todo.tasks.query import QueryResult, Stats

SHORT_ID_LENGTH = 8

_PRIORITY_STYLES = {
    Priority.HIGH: "bold red",
    Priority.MEDIUM: "yellow",
    Priority.LOW: "green",
}


def short_id(task_id: str) -> str:
    return task_id[:SHORT_ID_LENGTH]


def _row_style(task: Task, today: date) -> str:
    if task.completed:
        return "dim strike"
    if task.is_overdue(today):
        return "red"
    return ""


def task_table(result: QueryResult, today: date) -> Table:
    """Table of the filtered, sorted view."""
    table = Table(show_lines=False, padding=(0, 1))
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("", no_wrap=True)
    table.add_column("Task", max_width=60)
    table.add_column("Due", no_wrap=True)
    table.add_column("Priority", no_wrap=True)

    for task in result.view:
        due = task.due.isoformat()
        if task.is_overdue(today):
            due += " (overdue)"
        table.add_row(
            short_id(task.id),
            "[✓]" if task.completed else "[ ]",
            Text(task.title),
            due,
            Text(priority_value(task.priority).capitalize(), style=_PRIORITY_STYLES.get(task.priority, "dim")),
            style=_row_style(task, today),
        )
    return table


def stats_line(stats: Stats) -> Text:
    """One-line summary of the full collection."""
    text = Text()
    text.append("Total ", style="dim")
    text.append(str(stats.total), style="bold")
    text.append("  Active ", style="dim")
    text.append(str(stats.active), style="bold cyan")
    text.append("  Done ", style="dim")
    text.append(str(stats.done), style="bold green")
    text.append("  Overdue ", style="dim")
    text.append(str(stats.overdue), style="bold red" if stats.overdue else "bold")
    return text


def criteria_line(result: QueryResult) -> Text:
    """Describe active filters, or nothing when everything is shown."""
    c = result.criteria
    parts = []
    if c.text.strip():
        parts.append(f'search "{c.text.strip()}"')
    if c.status.value != "all":
        parts.append(f"status {c.status.value}")
    if c.date_filter.value != "any":
        parts.append(f"date {c.date_filter.value}")
    if c.sort_by.value != "none":
        parts.append(f"sort {c.sort_by.value}")
    return Text(" | ".join(parts), style="dim italic")
