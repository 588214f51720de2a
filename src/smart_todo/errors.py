"""Error types raised by the task core.

All errors derive from TodoError and carry a machine-readable error code
plus optional details, so a front end can render them without parsing
messages.

Error kinds:
- ValidationError: a title/due/priority rule was violated (field-tagged)
- NotFoundError: an operation referenced an id that is not in the store
- PersistenceReadError: stored state is malformed (recovered by the store)
- PersistenceWriteError: the storage slot could not be written
"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from smart_todo.tasks.validation import ValidationIssue


class ErrorCode:
    """Standard error codes for task operations."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    NOT_FOUND = "NOT_FOUND"
    PERSISTENCE_READ = "PERSISTENCE_READ"
    PERSISTENCE_WRITE = "PERSISTENCE_WRITE"


class TodoError(Exception):
    """Base error for task operations.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
        details: Additional error details
    """

    error_code: str = "TODO_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "message": self.message,
            "code": self.error_code,
            "details": self.details,
        }


class ValidationError(TodoError):
    """Raised when proposed task values violate a validation rule.

    Field-tagged and user-correctable: ``issues`` maps a field name
    ("title", "due", "priority") to the rule it broke.
    """

    error_code = ErrorCode.VALIDATION_FAILED

    def __init__(self, issues: "dict[str, ValidationIssue]") -> None:
        self.issues = dict(issues)
        summary = ", ".join(issue.value for issue in self.issues.values())
        super().__init__(f"Validation failed: {summary}", details={"fields": self.errors})

    @property
    def errors(self) -> dict[str, str]:
        """User-facing messages keyed by field."""
        return {name: issue.message for name, issue in self.issues.items()}


class NotFoundError(TodoError, KeyError):
    """Raised when a task id is not present in the store."""

    error_code = ErrorCode.NOT_FOUND

    def __init__(self, task_id: str) -> None:
        self.task_id = task_id
        super().__init__(f"Task not found: {task_id}", details={"task_id": task_id})

    def __str__(self) -> str:
        return self.message


class PersistenceReadError(TodoError):
    """Raised when stored task state cannot be decoded."""

    error_code = ErrorCode.PERSISTENCE_READ


class PersistenceWriteError(TodoError):
    """Raised when the task collection cannot be written."""

    error_code = ErrorCode.PERSISTENCE_WRITE
