"""Terminal front end for smart-todo."""

from smart_todo.cli.commands import (
    Command,
    CommandCategory,
    CommandRegistry,
    ParsedArgs,
)
from smart_todo.cli.app import SlashCommandCompleter, TodoCLIApp

__all__ = [
    "Command",
    "CommandCategory",
    "CommandRegistry",
    "ParsedArgs",
    "SlashCommandCompleter",
    "TodoCLIApp",
]
