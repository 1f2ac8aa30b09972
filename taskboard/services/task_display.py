"""Display helpers for the task list view."""
from datetime import date
from typing import Any, Dict

from taskboard.schemas.task import FilterStatus
from taskboard.services.task_reconciler import priority_name, task_value
from taskboard.utils.dates import parse_due_date

PRIORITY_BADGES = {
    "High": "red",
    "Medium": "yellow",
    "Low": "green",
}

EMPTY_LIST_MESSAGES = {
    FilterStatus.COMPLETED.value: "No completed tasks found.",
    FilterStatus.ACTIVE.value: "No active tasks found.",
}
DEFAULT_EMPTY_MESSAGE = "No tasks yet. Create your first task!"


def due_date_state(due_date: Any, today: date) -> str:
    """Classify a due date as "overdue", "today", "upcoming" or "invalid"."""
    parsed = parse_due_date(due_date)
    if parsed is None:
        return "invalid"
    if parsed < today:
        return "overdue"
    if parsed == today:
        return "today"
    return "upcoming"


def status_label(task: Any, today: date) -> str:
    if task_value(task, "completed"):
        return "Completed"
    if due_date_state(task_value(task, "due_date"), today) == "overdue":
        return "Overdue"
    return "Active"


def priority_badge(priority: Any) -> str:
    return PRIORITY_BADGES.get(priority_name(priority), "gray")


def empty_list_message(status: Any) -> str:
    status = getattr(status, "value", status)
    if not isinstance(status, str):
        return DEFAULT_EMPTY_MESSAGE
    return EMPTY_LIST_MESSAGES.get(status, DEFAULT_EMPTY_MESSAGE)


def edit_form_data(task: Any) -> Dict[str, Any]:
    """
    Prefill the edit form from a task.

    Timestamps are cut down to their date part so the date input accepts them.
    """
    due_date = task_value(task, "due_date")
    if isinstance(due_date, str):
        due_date = due_date.split("T")[0]

    return {
        "title": task_value(task, "title"),
        "description": task_value(task, "description"),
        "due_date": due_date,
        "priority": task_value(task, "priority"),
        "completed": bool(task_value(task, "completed", False)),
    }


def task_view(task: Any, today: date) -> Dict[str, Any]:
    """Serialize a task together with the labels the list renders for it."""
    data = task.model_dump(mode="json") if hasattr(task, "model_dump") else dict(task)
    data["status_label"] = status_label(task, today)
    data["due_state"] = due_date_state(task_value(task, "due_date"), today)
    data["priority_badge"] = priority_badge(task_value(task, "priority"))
    return data
