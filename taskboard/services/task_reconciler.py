"""
Task list reconciliation.

Keeps the in-memory task collection sorted and derives filtered views after
the backend confirms a create, update, toggle or delete. Every function
returns a new list; the input collection is never mutated.

Malformed input never raises: the operation degrades to a no-op and logs a
warning, so a transiently inconsistent view cannot take the board down.
"""
from collections.abc import Mapping, Sequence
from typing import Any, List, Optional
import logging

from taskboard.schemas.task import FilterStatus, TaskStats
from taskboard.utils.dates import parse_due_date

logger = logging.getLogger(__name__)

# Lower rank sorts first; unknown priorities go last
PRIORITY_RANK = {"High": 1, "Medium": 2, "Low": 3}
UNKNOWN_PRIORITY_RANK = 4


def task_value(task: Any, name: str, default: Any = None) -> Any:
    """Read a field from a Task model or a plain mapping."""
    if isinstance(task, Mapping):
        return task.get(name, default)
    return getattr(task, name, default)


def priority_name(priority: Any) -> Optional[str]:
    """Priority as a plain string, or None when it is not one."""
    value = getattr(priority, "value", priority)
    return value if isinstance(value, str) else None


def _is_task(obj: Any) -> bool:
    return obj is not None and (isinstance(obj, Mapping) or hasattr(obj, "id"))


def _as_list(tasks: Any, operation: str) -> List[Any]:
    if isinstance(tasks, Sequence) and not isinstance(tasks, (str, bytes)):
        return list(tasks)
    logger.warning(f"{operation}: expected a sequence of tasks, got {type(tasks).__name__}")
    return []


def _sort_key(task: Any):
    rank = PRIORITY_RANK.get(priority_name(task_value(task, "priority")), UNKNOWN_PRIORITY_RANK)
    due_date = parse_due_date(task_value(task, "due_date"))
    if due_date is None:
        # Unparseable dates trail their priority group in encountered order
        return (rank, 1)
    return (rank, 0, due_date)


def sort_tasks(tasks: Any) -> List[Any]:
    """Order tasks by priority (High, Medium, Low), then by due date ascending."""
    return sorted(_as_list(tasks, "sort_tasks"), key=_sort_key)


def insert_task(tasks: Any, new_task: Any) -> List[Any]:
    """Add a backend-confirmed task to the collection."""
    current = _as_list(tasks, "insert_task")
    if not _is_task(new_task):
        logger.warning(f"insert_task: ignoring invalid task {new_task!r}")
        return sort_tasks(current)
    return sort_tasks(current + [new_task])


def replace_task(tasks: Any, updated_task: Any) -> List[Any]:
    """Swap in the backend-confirmed copy of a task, matched by id."""
    current = _as_list(tasks, "replace_task")
    if not _is_task(updated_task) or task_value(updated_task, "id") in (None, ""):
        logger.warning(f"replace_task: ignoring task without id {updated_task!r}")
        return sort_tasks(current)

    task_id = task_value(updated_task, "id")
    return sort_tasks([
        updated_task if task_value(task, "id") == task_id else task
        for task in current
    ])


def remove_task(tasks: Any, task_id: Any) -> List[Any]:
    """Drop the task with the given id."""
    current = _as_list(tasks, "remove_task")
    if not task_id:
        logger.warning(f"remove_task: ignoring empty task id {task_id!r}")
        return sort_tasks(current)
    return sort_tasks([task for task in current if task_value(task, "id") != task_id])


def filter_tasks(tasks: Any, status: Optional[Any] = FilterStatus.ALL) -> List[Any]:
    """
    Select the tasks shown for a completion filter.

    Args:
        tasks: Task collection
        status: "all", "active" or "completed"; anything else shows all tasks

    Returns:
        Matching tasks in collection order
    """
    current = _as_list(tasks, "filter_tasks")
    status = getattr(status, "value", status)
    if status == FilterStatus.COMPLETED.value:
        return [task for task in current if task_value(task, "completed")]
    if status == FilterStatus.ACTIVE.value:
        return [task for task in current if not task_value(task, "completed")]
    return current


def task_stats(tasks: Any) -> TaskStats:
    """Count total, active and completed tasks in one pass."""
    stats = TaskStats()
    for task in _as_list(tasks, "task_stats"):
        stats.total += 1
        if task_value(task, "completed"):
            stats.completed += 1
        else:
            stats.active += 1
    return stats
