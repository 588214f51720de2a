"""Interactive terminal front end.

This module provides the REPL that:
1. Loads settings and configures logging
2. Builds the TaskStore and TaskListController
3. Reads slash commands with prompt_toolkit and renders results with rich
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.shortcuts import confirm as prompt_confirm
from rich.console import Console
from rich.markup import escape

from smart_todo.cli.commands import CommandRegistry
from smart_todo.cli.render import criteria_line, stats_line, task_table
from smart_todo.clock import Clock, SystemClock
from smart_todo.config import TodoSettings, get_settings
from smart_todo.controller import Outcome, TaskListController
from smart_todo.logging import Loggers, bind_context, clear_context, configure_logging
from smart_todo.persistence import JsonFileStorage, TaskRepository
from smart_todo.tasks.query import Criteria, QueryResult
from smart_todo.tasks.store import TaskStore

if TYPE_CHECKING:
    from smart_todo.intents import Intent
    from smart_todo.persistence import KeyValueStorage

logger = Loggers.cli()

_FIELD_LABELS = {"title": "Task", "due": "Due date", "priority": "Priority"}


# === Slash Command Completer ===


class SlashCommandCompleter(Completer):
    """Completer that only triggers for slash commands."""

    def __init__(self, commands: list[str]) -> None:
        self.commands = sorted(commands)

    def get_completions(self, document: Document, complete_event):
        """Yield completions only when text starts with /."""
        text = document.text_before_cursor

        if not text.startswith("/") or " " in text:
            return

        partial = text[1:].lower()

        for cmd in self.commands:
            if cmd.lower().startswith(partial):
                yield Completion(
                    text=f"/{cmd}",
                    start_position=-len(text),
                    display=f"/{cmd}",
                )


# === CLI Application ===


class TodoCLIApp:
    """Terminal task list.

    Args:
        settings: Optional settings override (defaults to get_settings())
        storage: Optional storage override (defaults to a JSON file in data_dir)
        clock: Optional clock override (defaults to the system clock)
        console: Optional rich Console for output
        confirm: Optional yes/no prompt used before destructive commands
    """

    def __init__(
        self,
        settings: TodoSettings | None = None,
        storage: "KeyValueStorage | None" = None,
        clock: Clock | None = None,
        console: Console | None = None,
        confirm: Callable[[str], bool] | None = None,
    ) -> None:
        # === Configuration ===
        self._settings = settings or get_settings()
        configure_logging(self._settings)
        bind_context(app=self._settings.app_name)

        logger.info("app_starting", workspace=str(self._settings.workspace_dir))

        # === Task core ===
        self.clock = clock or SystemClock()
        if storage is None:
            storage = JsonFileStorage(self._settings.data_dir)
        repository = TaskRepository(storage, key=self._settings.storage_key)
        self.store = TaskStore(repository, clock=self.clock)
        self.store.load()
        self.controller = TaskListController(
            self.store,
            clock=self.clock,
            criteria=Criteria(sort_by=self._settings.default_sort),
        )

        # === Output / input ===
        self.console = console or Console()
        self._confirm = confirm or (lambda question: prompt_confirm(question))
        self._session: PromptSession | None = None

        # === Command Registry ===
        self.command_registry = CommandRegistry()
        self._register_commands()

        self.should_exit = False

    @property
    def settings(self) -> TodoSettings:
        return self._settings

    def _register_commands(self) -> None:
        from smart_todo.cli.builtin_commands import ExitCommand, HelpCommand
        from smart_todo.cli.task_commands import TASK_COMMANDS

        self.command_registry.register(HelpCommand())
        self.command_registry.register(ExitCommand())
        for command_cls in TASK_COMMANDS:
            self.command_registry.register(command_cls())

    # === Intents and output ===

    def dispatch(self, intent: "Intent") -> Outcome:
        """Send an intent to the controller and report validation errors."""
        outcome = self.controller.dispatch(intent)
        if outcome.errors:
            self.show_errors(outcome.errors)
        elif outcome.not_found:
            self.error(f"Task not found: {outcome.task_id}")
        return outcome

    def set_criteria(self, **changes: Any) -> QueryResult:
        """Update view criteria (raw values accepted) and return the new view."""
        from smart_todo.intents import SetFilterCriteria

        criteria = self.controller.criteria.replace(**changes)
        return self.controller.dispatch(SetFilterCriteria(criteria)).result

    def show(self, result: QueryResult | None = None) -> None:
        """Render the view, the active filters and the stats."""
        result = result or self.controller.view()
        if result.is_empty:
            self.console.print("[dim]No tasks to show.[/dim]")
        else:
            self.console.print(task_table(result, self.clock.today()))
        filters = criteria_line(result)
        if filters.plain:
            self.console.print(filters)
        self.console.print(stats_line(result.stats))

    def show_errors(self, errors: dict[str, str]) -> None:
        for name, message in errors.items():
            label = _FIELD_LABELS.get(name, name)
            self.console.print(f"[red]{label}:[/red] {message}")

    def info(self, message: str) -> None:
        self.console.print(message)

    def success(self, message: str) -> None:
        self.console.print(f"[green]{message}[/green]")

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]{message}[/bold red]")

    def confirm(self, question: str) -> bool:
        return bool(self._confirm(question))

    def resolve_task_id(self, ref: str) -> str | None:
        """Resolve a full id or unique id prefix to a task id.

        Prints an error and returns None when nothing (or more than one
        task) matches.
        """
        ref = ref.strip()
        if not ref:
            self.error("A task id is required.")
            return None
        if ref in self.store:
            return ref
        matches = [t.id for t in self.store.snapshot() if t.id.startswith(ref)]
        if len(matches) == 1:
            return matches[0]
        if not matches:
            self.error(f"Task not found: {escape(ref)}")
        else:
            self.error(f"Ambiguous task id: {escape(ref)} matches {len(matches)} tasks")
        return None

    # === Input handling ===

    def stop(self) -> None:
        """Stop the application."""
        self.should_exit = True

    def process_input(self, user_input: str) -> None:
        """Process one line of user input."""
        user_input = user_input.strip()

        if not user_input:
            return

        if user_input.startswith("/"):
            self._handle_command(user_input)
        else:
            self.info("[dim]Type /help to see available commands, e.g. /add Buy milk --due 2030-01-02[/dim]")

    def _handle_command(self, user_input: str) -> None:
        parts = user_input[1:].split(maxsplit=1)
        command_name = parts[0] if parts else ""
        args = parts[1] if len(parts) > 1 else ""

        command = self.command_registry.get(command_name)
        if command is None:
            self.error(f"Unknown command: /{escape(command_name)}")
            self.info("Type /help to see available commands")
            return

        logger.debug("executing_command", command=command.name, args=args)
        try:
            command.execute(args, self)
            logger.debug("command_completed", command=command.name)
        except Exception as e:
            logger.error("command_failed", command=command.name, error=str(e))
            self.error(f"Error executing command: {escape(str(e))}")

    def run(self) -> None:
        """Run the main application loop."""
        logger.info("repl_starting")
        completer = SlashCommandCompleter(self.command_registry.get_completions())
        self._session = PromptSession(
            history=InMemoryHistory(),
            completer=completer,
            complete_while_typing=True,
        )

        self.console.print(f"[bold cyan]{self._settings.app_name}[/bold cyan] [dim]/help for commands[/dim]")
        self.show()

        while not self.should_exit:
            try:
                text = self._session.prompt(">>> ")
            except KeyboardInterrupt:
                continue
            except EOFError:
                break
            self.process_input(text)

        logger.info("app_ending")
        clear_context()
        self.console.print("Goodbye!")
