"""Settings mixins for application identity and CLI configuration.

AppSettingsMixin: Application identity and disk layout (app_name, workspace, storage key).
CLISettingsMixin: Front-end settings (logging, default sort and priority).

These live outside cli/ so that config.py can compose TodoSettings
without importing the cli package.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator

from smart_todo.persistence.repository import STORAGE_KEY
from smart_todo.tasks.models import Priority
from smart_todo.tasks.query import SortOrder


class AppSettingsMixin:
    """Settings for application identity and disk layout.

    Should be composed with TodoSettings via multiple inheritance.
    """

    app_name: str = Field(
        default="smart_todo",
        title="App Name",
        description="Application name, also used for config directories",
    )

    workspace_dir: Path = Field(
        default_factory=lambda: Path.home() / ".smart_todo",
        title="Workspace Directory",
        description="Directory holding the persisted task list",
    )

    storage_key: str = Field(
        default=STORAGE_KEY,
        title="Storage Key",
        description="Namespace key of the persisted task collection",
    )

    @field_validator("workspace_dir", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Expand ~ and environment variables in paths."""
        if isinstance(v, str):
            return Path(v).expanduser()
        return v

    @property
    def data_dir(self) -> Path:
        """Directory for task storage files."""
        return self.workspace_dir / "data"


class CLISettingsMixin:
    """Settings for the terminal front end.

    Note: This is a mixin, not a BaseSettings subclass, to avoid
    MRO issues when composed with other settings classes.
    """

    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="warning",
        title="Log Level",
        description="Logging verbosity level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        title="Log Format",
        description="Log output format (console for dev, json for production)",
    )

    default_sort: SortOrder = Field(
        default=SortOrder.NONE,
        title="Default Sort",
        description="Sort order applied when the list is first shown",
    )
    default_priority: Priority = Field(
        default=Priority.MEDIUM,
        title="Default Priority",
        description="Priority used by /add when --priority is omitted",
    )
