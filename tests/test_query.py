"""Tests for the query engine: filters, sorting and stats."""

from datetime import date, timedelta

import pytest

from smart_todo.tasks.models import Priority, Task
from smart_todo.tasks.query import (
    Criteria,
    DateFilter,
    SortOrder,
    StatusFilter,
    compute_stats,
    query,
    sort_tasks,
)

TODAY = date(2030, 1, 15)
YESTERDAY = TODAY - timedelta(days=1)
TOMORROW = TODAY + timedelta(days=1)


def task(id, title="Task", due=TODAY, priority=Priority.MEDIUM, completed=False, created_at=0) -> Task:
    return Task(id=id, title=title, due=due, priority=priority, completed=completed, created_at=created_at)


@pytest.fixture
def milk_and_bread() -> list[Task]:
    return [
        task("milk", "Buy milk", due=TODAY, priority=Priority.HIGH),
        task("bread", "Buy bread", due=TOMORROW, priority=Priority.LOW, completed=True),
    ]


def ids(result) -> list[str]:
    return [t.id for t in result.view]


class TestCriteria:
    """Tests for Criteria parsing."""

    def test_defaults(self):
        criteria = Criteria()
        assert criteria.text == ""
        assert criteria.status is StatusFilter.ALL
        assert criteria.date_filter is DateFilter.ANY
        assert criteria.sort_by is SortOrder.NONE

    def test_parse_raw_values(self):
        criteria = Criteria.parse(text="buy", status="active", date_filter="overdue", sort_by="prioDesc")
        assert criteria.status is StatusFilter.ACTIVE
        assert criteria.date_filter is DateFilter.OVERDUE
        assert criteria.sort_by is SortOrder.PRIORITY_DESC

    def test_unknown_values_fall_back(self):
        criteria = Criteria.parse(text=None, status="bogus", date_filter="someday", sort_by="random")
        assert criteria.text == ""
        assert criteria.status is StatusFilter.ALL
        assert criteria.date_filter is DateFilter.ANY
        assert criteria.sort_by is SortOrder.NONE

    def test_replace_keeps_other_fields(self):
        criteria = Criteria.parse(text="buy", status="done").replace(sort_by="dueDesc")
        assert criteria.text == "buy"
        assert criteria.status is StatusFilter.DONE
        assert criteria.sort_by is SortOrder.DUE_DESC

    def test_to_dict(self):
        assert Criteria().to_dict() == {
            "text": "",
            "status": "all",
            "dateFilter": "any",
            "sortBy": "none",
        }


class TestFilters:
    """Tests for the AND-combined filter pipeline."""

    def test_filter_conjunction(self, milk_and_bread):
        criteria = Criteria.parse(text="buy", status="active", date_filter="any", sort_by="dueAsc")
        assert ids(query(milk_and_bread, criteria, today=TODAY)) == ["milk"]

    def test_text_is_trimmed_and_case_insensitive(self, milk_and_bread):
        result = query(milk_and_bread, Criteria(text="  MILK "), today=TODAY)
        assert ids(result) == ["milk"]

    def test_empty_text_matches_everything(self, milk_and_bread):
        assert ids(query(milk_and_bread, Criteria(text="   "), today=TODAY)) == ["milk", "bread"]

    def test_status_done(self, milk_and_bread):
        assert ids(query(milk_and_bread, Criteria(status=StatusFilter.DONE), today=TODAY)) == ["bread"]

    @pytest.mark.parametrize(
        "date_filter,expected",
        [
            (DateFilter.TODAY, ["today"]),
            (DateFilter.UPCOMING, ["later"]),
            (DateFilter.OVERDUE, ["late"]),
            (DateFilter.ANY, ["late", "late-done", "today", "later"]),
        ],
    )
    def test_date_filters(self, date_filter, expected):
        tasks = [
            task("late", due=YESTERDAY),
            task("late-done", due=YESTERDAY, completed=True),
            task("today", due=TODAY),
            task("later", due=TOMORROW),
        ]
        assert ids(query(tasks, Criteria(date_filter=date_filter), today=TODAY)) == expected

    def test_no_criteria_returns_everything(self, milk_and_bread):
        assert ids(query(milk_and_bread, today=TODAY)) == ["milk", "bread"]


class TestSorting:
    """Tests for stable sort orders."""

    def test_priority_sort_is_stable(self):
        tasks = [
            task("m1", priority=Priority.MEDIUM),
            task("h1", priority=Priority.HIGH),
            task("m2", priority=Priority.MEDIUM),
            task("l1", priority=Priority.LOW),
            task("h2", priority=Priority.HIGH),
        ]
        result = sort_tasks(tasks, SortOrder.PRIORITY_DESC)
        assert [t.id for t in result] == ["h1", "h2", "m1", "m2", "l1"]

    def test_unrecognized_priority_ranks_below_low(self):
        tasks = [task("u", priority="urgent"), task("l", priority=Priority.LOW), task("h", priority=Priority.HIGH)]
        assert [t.id for t in sort_tasks(tasks, SortOrder.PRIORITY_DESC)] == ["h", "l", "u"]

    def test_due_ascending_and_descending(self):
        tasks = [task("b", due=TOMORROW), task("a", due=TODAY), task("c", due=TOMORROW)]
        assert [t.id for t in sort_tasks(tasks, SortOrder.DUE_ASC)] == ["a", "b", "c"]
        assert [t.id for t in sort_tasks(tasks, SortOrder.DUE_DESC)] == ["b", "c", "a"]

    def test_created_descending(self):
        tasks = [task("old", created_at=1), task("new", created_at=3), task("mid", created_at=2)]
        assert [t.id for t in sort_tasks(tasks, SortOrder.CREATED_DESC)] == ["new", "mid", "old"]

    def test_none_keeps_collection_order(self):
        tasks = [task("b", due=TOMORROW), task("a", due=TODAY)]
        assert [t.id for t in sort_tasks(tasks, SortOrder.NONE)] == ["b", "a"]

    def test_unknown_sort_value_passes_through(self):
        tasks = [task("b", due=TOMORROW), task("a", due=TODAY)]
        result = query(tasks, Criteria.parse(sort_by="alphabetical"), today=TODAY)
        assert ids(result) == ["b", "a"]


class TestStats:
    """Stats always describe the full collection."""

    @pytest.mark.parametrize(
        "criteria",
        [
            Criteria(),
            Criteria(text="milk"),
            Criteria(status=StatusFilter.DONE),
            Criteria(date_filter=DateFilter.OVERDUE),
            Criteria(text="nothing matches"),
        ],
    )
    def test_stats_ignore_filters(self, milk_and_bread, criteria):
        stats = query(milk_and_bread, criteria, today=TODAY).stats
        assert (stats.total, stats.active, stats.done) == (2, 1, 1)

    def test_overdue_counted_only_when_active(self):
        active = [task("late", due=YESTERDAY)]
        done = [task("late", due=YESTERDAY, completed=True)]

        assert compute_stats(active, TODAY).overdue == 1
        assert ids(query(active, Criteria(date_filter=DateFilter.OVERDUE), today=TODAY)) == ["late"]
        assert compute_stats(done, TODAY).overdue == 0
        assert ids(query(done, Criteria(date_filter=DateFilter.OVERDUE), today=TODAY)) == []

    def test_empty_view_with_non_empty_collection(self, milk_and_bread):
        result = query(milk_and_bread, Criteria(text="nothing matches"), today=TODAY)
        assert result.is_empty
        assert result.stats.total == 2

    def test_to_dict(self):
        assert compute_stats([], TODAY).to_dict() == {"total": 0, "active": 0, "done": 0, "overdue": 0}


class TestPurity:
    def test_query_does_not_mutate_input(self, milk_and_bread):
        before = [t.to_dict() for t in milk_and_bread]
        result = query(milk_and_bread, Criteria(sort_by=SortOrder.DUE_DESC), today=TODAY)
        result.view[0].title = "Changed"
        assert [t.to_dict() for t in milk_and_bread] == before
