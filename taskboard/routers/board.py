"""Board router: the task list and forms over JSON."""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from taskboard.exceptions import TaskNotFoundError
from taskboard.schemas.task import FilterStatus
from taskboard.services.task_board import FormResult, TaskBoard
from taskboard.services.task_client import TaskApiClient
from taskboard.services.task_display import empty_list_message, task_view
from taskboard.services.task_validator import group_field_errors, validate_task_data

router = APIRouter(tags=["Board"])

_board: Optional[TaskBoard] = None


def get_board() -> TaskBoard:
    """Dependency for getting the shared TaskBoard instance."""
    global _board
    if _board is None:
        _board = TaskBoard(TaskApiClient())
    return _board


def board_view(board: TaskBoard) -> Dict[str, Any]:
    today = board.today()
    visible = board.visible_tasks()
    return {
        "tasks": [task_view(task, today) for task in visible],
        "count": len(visible),
        "stats": board.stats().model_dump(),
        "filter": board.filter_status.value,
        "editing_task_id": board.editing_task_id,
        "loading": board.loading,
        "error": board.error,
        "empty_message": empty_list_message(board.filter_status) if not visible else None,
    }


@router.get("/board", response_model=Dict[str, Any])
async def read_board(
    filter_status: Optional[FilterStatus] = Query(None, alias="status", description="Filter: all, active, completed"),
    board: TaskBoard = Depends(get_board),
):
    """Current task list view with counts."""
    if filter_status is not None:
        board.set_filter(filter_status)
    return board_view(board)


@router.post("/board/refresh", response_model=Dict[str, Any])
async def refresh_board(board: TaskBoard = Depends(get_board)):
    """Reload tasks from the backend."""
    await board.refresh()
    if board.error:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=board.error)
    return board_view(board)


@router.post("/board/tasks", status_code=status.HTTP_201_CREATED)
async def create_task(
    task_data: Any = Body(None),
    board: TaskBoard = Depends(get_board),
):
    """Submit the new-task form."""
    result = await board.create(task_data)
    return _task_response(result, board)


@router.get("/board/tasks/{task_id}/edit", response_model=Dict[str, Any])
async def edit_task(task_id: str, board: TaskBoard = Depends(get_board)):
    """Open the edit form prefilled from the task."""
    try:
        return board.start_edit(task_id)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.delete("/board/edit", response_model=Dict[str, Any])
async def cancel_edit(board: TaskBoard = Depends(get_board)):
    board.cancel_edit()
    return board_view(board)


@router.put("/board/tasks/{task_id}")
async def update_task(
    task_id: str,
    task_data: Any = Body(None),
    board: TaskBoard = Depends(get_board),
):
    """Save the edit form."""
    result = await board.update(board.resolve_id(task_id), task_data)
    return _task_response(result, board)


@router.patch("/board/tasks/{task_id}/toggle")
async def toggle_task(task_id: str, board: TaskBoard = Depends(get_board)):
    """Flip a task's completion."""
    try:
        result = await board.toggle(task_id)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    return _task_response(result, board)


@router.delete("/board/tasks/{task_id}")
async def delete_task(task_id: str, board: TaskBoard = Depends(get_board)):
    """Delete a task."""
    resolved_id = board.resolve_id(task_id)
    result = await board.delete(resolved_id)
    _task_response(result, board)
    return {"deleted": True, "id": resolved_id}


@router.post("/validate", response_model=Dict[str, Any])
async def validate_task(
    task_data: Any = Body(None),
    mode: str = Query("create", pattern=r"^(create|update)$", description="create or update"),
    board: TaskBoard = Depends(get_board),
):
    """Run form validation without touching the backend."""
    data = dict(task_data) if isinstance(task_data, dict) else task_data
    errors = validate_task_data(data, is_update=(mode == "update"), now=board.clock())
    return {
        "valid": not errors,
        "errors": errors,
        "field_errors": group_field_errors(errors),
    }


def _task_response(result: FormResult, board: TaskBoard) -> Dict[str, Any]:
    """Turn a FormResult into a task payload or the matching HTTP error."""
    if result.errors:
        raise HTTPException(
            status_code=422,
            detail={"errors": result.errors, "field_errors": result.field_errors}
        )
    if result.error:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=result.error)
    if result.task is None:
        return {}
    return task_view(result.task, board.today())
