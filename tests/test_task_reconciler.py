# tests/test_task_reconciler.py

from __future__ import annotations

import logging

from taskboard.schemas.task import FilterStatus, Task
from taskboard.services.task_reconciler import (
    filter_tasks,
    insert_task,
    remove_task,
    replace_task,
    sort_tasks,
    task_stats,
)

RECONCILER_LOGGER = "taskboard.services.task_reconciler"


def ids(tasks) -> list:
    return [t["id"] if isinstance(t, dict) else t.id for t in tasks]


def test_sort_by_priority_then_due_date(tasks: list[Task]) -> None:
    assert ids(sort_tasks(tasks)) == [4, 2, 3, 1]


def test_sort_is_idempotent(tasks: list[Task]) -> None:
    once = sort_tasks(tasks)
    assert sort_tasks(once) == once


def test_sort_does_not_mutate_input(tasks: list[Task]) -> None:
    before = list(tasks)
    sort_tasks(tasks)
    assert tasks == before


def test_sort_groups_priorities_and_keeps_invalid_dates_stable() -> None:
    tasks = [
        {"id": "a", "priority": "Low", "due_date": "2026-10-20"},
        {"id": "b", "priority": "High", "due_date": "soon"},
        {"id": "c", "priority": "High", "due_date": "2026-12-01"},
        {"id": "d", "priority": "Medium", "due_date": "2026-10-22"},
        {"id": "e", "priority": "High", "due_date": None},
        {"id": "f", "priority": "Someday", "due_date": "2026-10-20"},
        {"id": "g", "priority": "High", "due_date": "2026-11-01"},
    ]

    assert ids(sort_tasks(tasks)) == ["g", "c", "b", "e", "d", "a", "f"]


def test_sort_non_sequence_is_empty_with_warning(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger=RECONCILER_LOGGER):
        assert sort_tasks(None) == []
        assert sort_tasks("tasks") == []
        assert sort_tasks({"id": 1}) == []

    assert len(caplog.records) == 3


def test_insert_places_task_in_sorted_position(tasks: list[Task]) -> None:
    new = Task(id=9, title="Renew passport", due_date="2026-10-19", priority="Medium")

    result = insert_task(sort_tasks(tasks), new)

    assert ids(result) == [4, 2, 9, 3, 1]
    assert len(tasks) == 4


def test_insert_invalid_task_is_noop(tasks: list[Task], caplog) -> None:
    with caplog.at_level(logging.WARNING, logger=RECONCILER_LOGGER):
        result = insert_task(tasks, None)

    assert result == sort_tasks(tasks)
    assert "insert_task" in caplog.text


def test_insert_then_remove_restores_collection(tasks: list[Task]) -> None:
    start = sort_tasks(tasks)
    new = Task(id=9, title="Renew passport", due_date="2026-10-20", priority="High")

    assert remove_task(insert_task(start, new), 9) == start


def test_replace_swaps_by_id_and_resorts(tasks: list[Task]) -> None:
    updated = tasks[0].model_copy(update={"priority": "High", "due_date": "2026-10-19"})

    result = replace_task(tasks, updated)

    assert ids(result) == [1, 4, 2, 3]
    assert result[0].priority == "High"
    assert tasks[0].priority == "Low"


def test_replace_unknown_id_only_sorts(tasks: list[Task]) -> None:
    stranger = Task(id=77, title="Unknown", due_date="2026-10-20", priority="High")
    assert replace_task(tasks, stranger) == sort_tasks(tasks)


def test_replace_without_id_is_noop(tasks: list[Task], caplog) -> None:
    with caplog.at_level(logging.WARNING, logger=RECONCILER_LOGGER):
        assert replace_task(tasks, {"title": "No id"}) == sort_tasks(tasks)
        assert replace_task(tasks, {"id": None}) == sort_tasks(tasks)
        assert replace_task(tasks, "task") == sort_tasks(tasks)

    assert len(caplog.records) == 3


def test_remove_nonexistent_id_equals_sort(tasks: list[Task]) -> None:
    assert remove_task(tasks, 404) == sort_tasks(tasks)


def test_remove_empty_id_is_noop(tasks: list[Task], caplog) -> None:
    with caplog.at_level(logging.WARNING, logger=RECONCILER_LOGGER):
        assert remove_task(tasks, None) == sort_tasks(tasks)
        assert remove_task(tasks, "") == sort_tasks(tasks)

    assert "remove_task" in caplog.text


def test_remove_by_id(tasks: list[Task]) -> None:
    assert ids(remove_task(tasks, 2)) == [4, 3, 1]


def test_filter_partitions_collection(tasks: list[Task]) -> None:
    active = filter_tasks(tasks, "active")
    completed = filter_tasks(tasks, FilterStatus.COMPLETED)

    assert ids(active) == [1, 3, 4]
    assert ids(completed) == [2]
    assert sorted(ids(active) + ids(completed)) == sorted(ids(tasks))
    assert not set(ids(active)) & set(ids(completed))


def test_filter_all_and_unknown_status_return_everything(tasks: list[Task]) -> None:
    assert filter_tasks(tasks, "all") == tasks
    assert filter_tasks(tasks, FilterStatus.ALL) == tasks
    assert filter_tasks(tasks, "archived") == tasks


def test_stats(tasks: list[Task]) -> None:
    stats = task_stats(tasks)

    assert (stats.total, stats.active, stats.completed) == (4, 3, 1)


def test_stats_of_nothing() -> None:
    stats = task_stats([])
    assert (stats.total, stats.active, stats.completed) == (0, 0, 0)


def test_non_string_priority_ranks_last_without_raising() -> None:
    tasks = [
        {"id": 1, "priority": ["High"], "due_date": "2026-10-20"},
        {"id": 2, "priority": "Low", "due_date": "2026-10-21"},
        {"id": 3, "priority": {"x": 1}, "due_date": "2026-10-19"},
    ]

    assert ids(sort_tasks(tasks)) == [2, 3, 1]
    assert ids(insert_task([], {"id": 4, "priority": {"x": 1}, "due_date": "2026-10-20"})) == [4]
    assert ids(replace_task(tasks, {"id": 2, "priority": ["Low"], "due_date": None})) == [3, 1, 2]
    assert ids(remove_task(tasks, 3)) == [2, 1]
