"""Validation rules for proposed task values.

All rules are checked independently, so a single call can report both a
title problem and a due-date problem. Validation is a pure check: it
never raises and never touches the store. The caller decides whether to
raise ValidationError or show the messages inline.

Example:
    >>> result = validate("", "2099-01-01", today=date(2030, 1, 1))
    >>> result.ok
    False
    >>> result.title_error
    <ValidationIssue.TITLE_REQUIRED: 'title required'>
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum

from smart_todo.tasks.models import TITLE_MAX_LENGTH, Priority, parse_iso_date

DateOrEmpty = date | str | None


class ValidationIssue(str, Enum):
    """A violated validation rule."""

    TITLE_REQUIRED = "title required"
    TITLE_TOO_LONG = "title too long"
    DUE_REQUIRED = "due date required"
    DUE_INVALID = "due date invalid"
    DUE_IN_PAST = "due date cannot be in the past"
    PRIORITY_INVALID = "priority invalid"

    @property
    def message(self) -> str:
        """User-facing text for inline display."""
        return _MESSAGES[self]


_MESSAGES = {
    ValidationIssue.TITLE_REQUIRED: "Task is required.",
    ValidationIssue.TITLE_TOO_LONG: f"Task is too long (max {TITLE_MAX_LENGTH} chars).",
    ValidationIssue.DUE_REQUIRED: "Due date is required.",
    ValidationIssue.DUE_INVALID: "Due date must be a date in YYYY-MM-DD format.",
    ValidationIssue.DUE_IN_PAST: "Due date cannot be in the past.",
    ValidationIssue.PRIORITY_INVALID: "Priority must be one of: low, medium, high.",
}


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a title/due pair.

    ``title`` is the trimmed title and ``due`` the parsed date (None when
    missing or unparseable), ready to be stored when ``ok`` is True.
    """

    title: str
    due: date | None
    title_error: ValidationIssue | None = None
    due_error: ValidationIssue | None = None

    @property
    def ok(self) -> bool:
        return self.title_error is None and self.due_error is None

    @property
    def issues(self) -> dict[str, ValidationIssue]:
        found: dict[str, ValidationIssue] = {}
        if self.title_error is not None:
            found["title"] = self.title_error
        if self.due_error is not None:
            found["due"] = self.due_error
        return found

    @property
    def errors(self) -> dict[str, str]:
        """Messages keyed by field name ("title", "due")."""
        return {name: issue.message for name, issue in self.issues.items()}


def parse_due(value: DateOrEmpty) -> date | None:
    """Parse a due value into a date.

    Returns None for missing input. Raises ValueError for text that is
    not a strict ``YYYY-MM-DD`` calendar date.
    """
    if value is None:
        return None
    if isinstance(value, date):
        # datetime is a date subclass; keep only the calendar part
        return date(value.year, value.month, value.day)
    text = value.strip()
    if not text:
        return None
    return parse_iso_date(text)


def _check_title(title: str | None) -> tuple[str, ValidationIssue | None]:
    text = (title or "").strip()
    if not text:
        return text, ValidationIssue.TITLE_REQUIRED
    if len(text) > TITLE_MAX_LENGTH:
        return text, ValidationIssue.TITLE_TOO_LONG
    return text, None


def _check_due(value: DateOrEmpty, today: date) -> tuple[date | None, ValidationIssue | None]:
    try:
        due = parse_due(value)
    except ValueError:
        return None, ValidationIssue.DUE_INVALID
    if due is None:
        return None, ValidationIssue.DUE_REQUIRED
    if due < today:
        return due, ValidationIssue.DUE_IN_PAST
    return due, None


def validate(title: str | None, due: DateOrEmpty, *, today: date) -> ValidationResult:
    """Check a proposed title and due date.

    Args:
        title: Proposed title; surrounding whitespace is ignored.
        due: A date, an ISO ``YYYY-MM-DD`` string, or None/"" when missing.
        today: The local calendar date to compare against.

    Returns:
        ValidationResult with per-field issues.
    """
    clean_title, title_error = _check_title(title)
    parsed_due, due_error = _check_due(due, today)
    return ValidationResult(
        title=clean_title,
        due=parsed_due,
        title_error=title_error,
        due_error=due_error,
    )


def validate_priority(value: Priority | str | None) -> Priority | ValidationIssue:
    """Coerce a priority value, or report PRIORITY_INVALID."""
    if isinstance(value, Priority):
        return value
    try:
        return Priority((value or "").strip().lower())
    except ValueError:
        return ValidationIssue.PRIORITY_INVALID
