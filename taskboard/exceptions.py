"""Exceptions raised by the task board."""
from typing import Any, Dict, Optional


class TaskBoardError(Exception):
    """Base exception for task board errors"""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class TaskServiceError(TaskBoardError):
    """The task backend could not be reached or rejected the request"""
    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[Dict[str, Any]] = None):
        self.status_code = status_code
        super().__init__(message, details)


class TaskNotFoundError(TaskBoardError):
    """No task with the requested id is on the board"""
