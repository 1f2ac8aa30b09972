"""HTTP client for the task REST backend."""
from typing import Any, Dict, List, Optional, Union

import httpx
from pydantic import ValidationError

from taskboard.config import API_BASE_URL, API_TIMEOUT
from taskboard.exceptions import TaskServiceError
from taskboard.schemas.task import Task
from taskboard.utils.logger import get_logger

logger = get_logger(__name__)

TaskId = Union[int, str]


def _error_detail(response: httpx.Response) -> str:
    """Best human-readable reason from an error response."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ("detail", "message", "error"):
            if isinstance(body.get(key), str) and body[key]:
                return body[key]
    return f"{response.status_code} {response.reason_phrase}".strip()


class TaskApiClient:
    """
    Thin async wrapper over the task CRUD endpoints.

    Every failure (transport error, non-2xx status, malformed body) is raised
    as TaskServiceError with a "Failed to <action>: <detail>" message. Nothing
    is retried; the caller decides whether to refresh.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or API_BASE_URL
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else API_TIMEOUT,
            transport=transport,
        )

    async def __aenter__(self) -> "TaskApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, action: str, **kwargs) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            detail = _error_detail(e.response)
            logger.error("Task API request failed", method=method, path=path,
                         status=e.response.status_code, detail=detail)
            raise TaskServiceError(
                f"Failed to {action}: {detail}", status_code=e.response.status_code
            ) from e
        except httpx.HTTPError as e:
            logger.error("Task API unreachable", method=method, path=path, detail=str(e))
            raise TaskServiceError(f"Failed to {action}: {str(e) or type(e).__name__}") from e

        logger.info("Task API request", method=method, path=path, status=response.status_code)

        if not response.content:
            return None
        try:
            body = response.json()
        except ValueError as e:
            raise TaskServiceError(f"Failed to {action}: response is not valid JSON") from e

        # Some backends wrap the payload as {"data": ...}
        if isinstance(body, dict) and "data" in body:
            return body["data"]
        return body

    @staticmethod
    def _to_task(body: Any, action: str) -> Task:
        try:
            return Task.model_validate(body)
        except ValidationError as e:
            raise TaskServiceError(f"Failed to {action}: invalid task in response") from e

    async def get_all_tasks(self) -> List[Task]:
        """Fetch every task from the backend."""
        body = await self._request("GET", "/tasks", "fetch tasks")
        if not isinstance(body, list):
            raise TaskServiceError("Failed to fetch tasks: expected a list of tasks")
        return [self._to_task(item, "fetch tasks") for item in body]

    async def create_task(self, payload: Dict[str, Any]) -> Task:
        body = await self._request("POST", "/tasks", "create task", json=payload)
        return self._to_task(body, "create task")

    async def update_task(self, task_id: TaskId, payload: Dict[str, Any]) -> Task:
        body = await self._request("PUT", f"/tasks/{task_id}", "update task", json=payload)
        return self._to_task(body, "update task")

    async def delete_task(self, task_id: TaskId) -> bool:
        await self._request("DELETE", f"/tasks/{task_id}", "delete task")
        return True

    async def toggle_completion(self, task_id: TaskId, payload: Dict[str, Any]) -> Task:
        """Flip completion via the dedicated toggle endpoint."""
        body = await self._request(
            "PATCH", f"/tasks/{task_id}/toggle", "update task completion", json=payload
        )
        return self._to_task(body, "update task completion")
