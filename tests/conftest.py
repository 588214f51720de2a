"""Shared test fixtures and utilities for smart-todo tests.

Provides:
- MockContext for isolating tests from global state
- A fixed clock pinned to 2030-01-15
- Store and controller fixtures backed by MemoryStorage
"""

import os
import tempfile
from datetime import date
from pathlib import Path
from typing import Generator
from unittest.mock import patch

import pytest

from smart_todo.clock import FixedClock
from smart_todo.config import (
    TodoSettings,
    reload_settings,
    set_context_settings,
    set_settings,
)
from smart_todo.controller import TaskListController
from smart_todo.persistence import MemoryStorage, TaskRepository
from smart_todo.tasks.store import TaskStore

TODAY = date(2030, 1, 15)


class MockContext:
    """Context manager for isolating tests from global state.

    Handles:
    - Resetting global settings singleton
    - Providing a temporary workspace directory
    - Clearing SMART_TODO_* environment variables

    Usage:
        with MockContext(default_sort="dueAsc") as ctx:
            settings = ctx.settings
            workspace = ctx.workspace_dir
    """

    def __init__(self, **settings_kwargs):
        self._settings_kwargs = settings_kwargs
        self._temp_dir: tempfile.TemporaryDirectory | None = None
        self._settings: TodoSettings | None = None
        self._original_env: dict[str, str] = {}

    def __enter__(self) -> "MockContext":
        self._temp_dir = tempfile.TemporaryDirectory()
        workspace_dir = Path(self._temp_dir.name)

        for var in list(os.environ):
            if var.startswith("SMART_TODO_"):
                self._original_env[var] = os.environ.pop(var)

        self._settings = TodoSettings(
            workspace_dir=workspace_dir,
            **self._settings_kwargs,
        )
        set_settings(self._settings)

        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        set_context_settings(None)
        os.environ.update(self._original_env)
        reload_settings()

        if self._temp_dir:
            self._temp_dir.cleanup()

    @property
    def settings(self) -> TodoSettings:
        if self._settings is None:
            raise RuntimeError("MockContext not entered")
        return self._settings

    @property
    def workspace_dir(self) -> Path:
        if self._temp_dir is None:
            raise RuntimeError("MockContext not entered")
        return Path(self._temp_dir.name)


class FailingStorage(MemoryStorage):
    """MemoryStorage whose writes can be switched to fail."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        super().__init__(initial)
        self.fail_writes = False
        self.write_count = 0

    def write(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise OSError("disk full")
        self.write_count += 1
        super().write(key, value)


@pytest.fixture
def mock_context() -> Generator[MockContext, None, None]:
    """Fixture providing an isolated test context."""
    with MockContext() as ctx:
        yield ctx


@pytest.fixture
def temp_workspace(tmp_path: Path) -> Path:
    """Fixture providing a temporary workspace directory."""
    workspace = tmp_path / "workspace"
    workspace.mkdir(parents=True)
    return workspace


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Run with no environment variables set."""
    with patch.dict(os.environ, {}, clear=True):
        yield


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(TODAY)


@pytest.fixture
def storage() -> FailingStorage:
    return FailingStorage()


@pytest.fixture
def repository(storage: FailingStorage) -> TaskRepository:
    return TaskRepository(storage)


@pytest.fixture
def store(repository: TaskRepository, clock: FixedClock) -> TaskStore:
    task_store = TaskStore(repository, clock=clock)
    task_store.load()
    return task_store


@pytest.fixture
def controller(store: TaskStore) -> TaskListController:
    return TaskListController(store)
