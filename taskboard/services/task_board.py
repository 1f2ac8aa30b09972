"""Task board state: the collection, the current filter and the edit form."""
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Protocol
import logging

from taskboard.config import current_time
from taskboard.exceptions import TaskNotFoundError, TaskServiceError
from taskboard.schemas.task import FilterStatus, TaskCreate, TaskStats, TaskToggleComplete, TaskUpdate
from taskboard.services.task_client import TaskApiClient, TaskId
from taskboard.services.task_display import edit_form_data
from taskboard.services.task_reconciler import (
    filter_tasks,
    insert_task,
    remove_task,
    replace_task,
    sort_tasks,
    task_stats,
    task_value,
)
from taskboard.services.task_validator import group_field_errors, validate_task_data
from taskboard.utils.dates import parse_due_date

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Where success and failure toasts go."""

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class LoggingNotifier:
    """Notifier that writes toasts to the log."""

    def success(self, message: str) -> None:
        logger.info(message)

    def error(self, message: str) -> None:
        logger.error(message)


@dataclass
class FormResult:
    """Outcome of a form submission or list action."""
    ok: bool
    task: Any = None
    errors: List[str] = field(default_factory=list)
    field_errors: Dict[str, str] = field(default_factory=dict)
    error: Optional[str] = None


def _create_payload(data: Mapping) -> Dict[str, Any]:
    values = dict(data)
    values["due_date"] = parse_due_date(values.get("due_date"))
    return TaskCreate.model_validate(values).model_dump(mode="json")


def _update_payload(data: Mapping) -> Dict[str, Any]:
    values = {key: data[key] for key in TaskUpdate.model_fields if key in data}
    if "due_date" in values:
        values["due_date"] = parse_due_date(values["due_date"])
    return TaskUpdate.model_validate(values).model_dump(mode="json", exclude_unset=True)


class TaskBoard:
    """
    UI state for the task list and forms.

    The collection is only changed after the backend confirms a mutation,
    and always through the reconciler, so it stays sorted. A failed call
    leaves it as it was.
    """

    def __init__(
        self,
        client: TaskApiClient,
        notifier: Optional[Notifier] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.client = client
        self.notifier = notifier or LoggingNotifier()
        self.clock = clock or current_time
        self.tasks: List[Any] = []
        self.loading = False
        self.error: Optional[str] = None
        self.filter_status = FilterStatus.ALL
        self.editing_task_id: Optional[TaskId] = None

    # ---- Queries ----

    def find_task(self, task_id: Any) -> Optional[Any]:
        """Look up a task by id; ids from a URL path match by their string form."""
        for task in self.tasks:
            task_key = task_value(task, "id")
            if task_key == task_id or str(task_key) == str(task_id):
                return task
        return None

    def resolve_id(self, task_id: Any) -> Any:
        task = self.find_task(task_id)
        return task_value(task, "id") if task is not None else task_id

    def visible_tasks(self) -> List[Any]:
        return filter_tasks(self.tasks, self.filter_status)

    def stats(self) -> TaskStats:
        return task_stats(self.tasks)

    def set_filter(self, status: Any) -> None:
        self.filter_status = FilterStatus(getattr(status, "value", status))

    def today(self):
        return self.clock().date()

    # ---- Edit form ----

    def start_edit(self, task_id: Any) -> Dict[str, Any]:
        task = self.find_task(task_id)
        if task is None:
            raise TaskNotFoundError(f"Task {task_id} not found")
        self.editing_task_id = task_value(task, "id")
        return edit_form_data(task)

    def cancel_edit(self) -> None:
        self.editing_task_id = None

    # ---- Backend round trips ----

    async def refresh(self) -> None:
        """Reload the whole collection from the backend."""
        self.loading = True
        try:
            tasks = await self.client.get_all_tasks()
            self.tasks = sort_tasks(tasks)
            self.error = None
        except TaskServiceError as e:
            logger.warning(f"Task refresh failed: {e.message}")
            self.error = e.message
        finally:
            self.loading = False

    def _failed(self, error: TaskServiceError) -> FormResult:
        self.notifier.error(error.message)
        return FormResult(ok=False, error=error.message)

    def _rejected(self, errors: List[str]) -> FormResult:
        return FormResult(ok=False, errors=errors, field_errors=group_field_errors(errors))

    async def create(self, form: Any) -> FormResult:
        """Validate the new-task form and create the task."""
        data = dict(form) if isinstance(form, Mapping) else form
        errors = validate_task_data(data, is_update=False, now=self.clock())
        if errors:
            return self._rejected(errors)

        try:
            task = await self.client.create_task(_create_payload(data))
        except TaskServiceError as e:
            return self._failed(e)

        self.tasks = insert_task(self.tasks, task)
        self.notifier.success("Task created successfully!")
        return FormResult(ok=True, task=task)

    async def update(self, task_id: TaskId, form: Any) -> FormResult:
        """Validate the edit form and save it."""
        data = dict(form) if isinstance(form, Mapping) else form
        errors = validate_task_data(data, is_update=True, now=self.clock())
        if errors:
            return self._rejected(errors)

        try:
            task = await self.client.update_task(task_id, _update_payload(data))
        except TaskServiceError as e:
            return self._failed(e)

        self.tasks = replace_task(self.tasks, task)
        self.editing_task_id = None
        self.notifier.success("Task updated successfully!")
        return FormResult(ok=True, task=task)

    async def toggle(self, task_id: TaskId) -> FormResult:
        """Flip a task between completed and active."""
        current = self.find_task(task_id)
        if current is None:
            raise TaskNotFoundError(f"Task {task_id} not found")

        completed = not task_value(current, "completed")
        payload = TaskToggleComplete(completed=completed).model_dump()
        try:
            task = await self.client.toggle_completion(task_value(current, "id"), payload)
        except TaskServiceError as e:
            return self._failed(e)

        self.tasks = replace_task(self.tasks, task)
        self.notifier.success(f"Task marked as {'completed' if completed else 'incomplete'}!")
        return FormResult(ok=True, task=task)

    async def delete(self, task_id: TaskId) -> FormResult:
        try:
            await self.client.delete_task(task_id)
        except TaskServiceError as e:
            return self._failed(e)

        self.tasks = remove_task(self.tasks, task_id)
        if self.editing_task_id == task_id:
            self.editing_task_id = None
        self.notifier.success("Task deleted successfully!")
        return FormResult(ok=True)
