"""Tests for intent dispatch through TaskListController."""

from datetime import date

import pytest

from smart_todo.controller import TaskListController
from smart_todo.errors import PersistenceWriteError
from smart_todo.intents import (
    AddTask,
    ClearAll,
    ClearCompleted,
    DeleteTask,
    EditTask,
    SetFilterCriteria,
    ToggleTask,
)
from smart_todo.tasks.query import Criteria, SortOrder


class TestAddAndEdit:
    def test_add_returns_recomputed_view(self, controller):
        outcome = controller.dispatch(AddTask("Buy milk", "2030-01-16", "high"))

        assert outcome.ok
        assert outcome.task_id is not None
        assert [t.title for t in outcome.result.view] == ["Buy milk"]
        assert outcome.result.stats.total == 1

    def test_add_rejected_with_field_messages(self, controller, store):
        outcome = controller.dispatch(AddTask("", "2099-01-01", "low"))
        assert outcome.errors == {"title": "Task is required."}
        assert not outcome.ok
        assert store.is_empty()

        outcome = controller.dispatch(AddTask("Task", "", "low"))
        assert outcome.errors == {"due": "Due date is required."}
        assert store.is_empty()

    def test_add_and_edit_reject_past_due(self, controller, store):
        yesterday = "2030-01-14"
        assert controller.dispatch(AddTask("Task", yesterday)).errors == {
            "due": "Due date cannot be in the past."
        }

        task_id = controller.dispatch(AddTask("Task", "2030-01-16")).task_id
        outcome = controller.dispatch(EditTask(task_id, "Task", yesterday, "medium"))
        assert outcome.errors == {"due": "Due date cannot be in the past."}
        assert store.get(task_id).due == date(2030, 1, 16)

    def test_edit(self, controller, store):
        task_id = controller.dispatch(AddTask("Old", "2030-01-16")).task_id
        outcome = controller.dispatch(EditTask(task_id, "New", "2030-01-20", "low"))
        assert outcome.ok
        assert store.get(task_id).title == "New"

    def test_edit_missing_task(self, controller):
        outcome = controller.dispatch(EditTask("missing", "Task", "2030-01-16", "low"))
        assert outcome.not_found
        assert outcome.task_id == "missing"
        assert not outcome.errors


class TestToggleAndDelete:
    def test_toggle(self, controller):
        task_id = controller.dispatch(AddTask("Task", "2030-01-16")).task_id
        outcome = controller.dispatch(ToggleTask(task_id))
        assert outcome.completed is True
        assert outcome.result.stats.done == 1

    def test_toggle_missing(self, controller):
        assert controller.dispatch(ToggleTask("missing")).not_found

    def test_delete_is_idempotent(self, controller):
        task_id = controller.dispatch(AddTask("Task", "2030-01-16")).task_id
        assert controller.dispatch(DeleteTask(task_id)).removed == 1

        outcome = controller.dispatch(DeleteTask(task_id))
        assert outcome.ok
        assert outcome.removed == 0


class TestClear:
    def test_clear_completed_reports_count(self, controller):
        task_id = controller.dispatch(AddTask("Done", "2030-01-16")).task_id
        controller.dispatch(AddTask("Open", "2030-01-16"))
        controller.dispatch(ToggleTask(task_id))

        assert controller.dispatch(ClearCompleted()).removed == 1
        assert controller.dispatch(ClearCompleted()).removed == 0

    def test_clear_all(self, controller):
        controller.dispatch(AddTask("A", "2030-01-16"))
        controller.dispatch(AddTask("B", "2030-01-16"))
        outcome = controller.dispatch(ClearAll())
        assert outcome.removed == 2
        assert outcome.result.is_empty
        assert outcome.result.stats.total == 0


class TestCriteria:
    def test_set_filter_criteria(self, controller):
        controller.dispatch(AddTask("Later", "2030-01-20"))
        controller.dispatch(AddTask("Sooner", "2030-01-16"))

        criteria = Criteria(sort_by=SortOrder.DUE_ASC)
        outcome = controller.dispatch(SetFilterCriteria(criteria))

        assert controller.criteria == criteria
        assert [t.title for t in outcome.result.view] == ["Sooner", "Later"]

    def test_criteria_applies_after_mutations(self, controller):
        controller.dispatch(SetFilterCriteria(Criteria.parse(status="active")))
        task_id = controller.dispatch(AddTask("Task", "2030-01-16")).task_id
        outcome = controller.dispatch(ToggleTask(task_id))
        assert outcome.result.is_empty
        assert outcome.result.stats.total == 1

    def test_initial_criteria(self, store):
        controller = TaskListController(store, criteria=Criteria(text="x"))
        assert controller.view().criteria.text == "x"


class TestDispatchErrors:
    def test_unknown_intent(self, controller):
        with pytest.raises(TypeError):
            controller.dispatch("add")

    def test_write_failure_propagates(self, controller, storage, store):
        storage.fail_writes = True
        with pytest.raises(PersistenceWriteError):
            controller.dispatch(AddTask("Task", "2030-01-16"))
        assert store.is_empty()

    def test_overdue_tracks_clock(self, controller, clock):
        controller.dispatch(AddTask("Task", "2030-01-15"))
        assert controller.view().stats.overdue == 0
        clock.advance(days=1)
        assert controller.view().stats.overdue == 1
