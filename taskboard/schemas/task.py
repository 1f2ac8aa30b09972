"""Task schemas for the task board."""
from datetime import date
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Priority(str, Enum):
    """Task priority level."""
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class FilterStatus(str, Enum):
    """Completion filter applied to the task list view."""
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


class Task(BaseModel):
    """Task as echoed back by the backend of record."""
    model_config = ConfigDict(extra="allow")

    id: Union[int, str]
    title: str
    description: Optional[str] = None
    due_date: str  # ISO date or timestamp, as sent by the backend
    priority: str
    completed: bool = False


class TaskCreate(BaseModel):
    """Payload sent when creating a task from the new-task form."""
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    due_date: date
    priority: Priority = Priority.MEDIUM


class TaskUpdate(BaseModel):
    """Payload sent when saving the edit form."""
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    due_date: Optional[date] = None
    priority: Optional[Priority] = None
    completed: Optional[bool] = None


class TaskToggleComplete(BaseModel):
    """Body for the completion toggle endpoint."""
    completed: bool


class TaskStats(BaseModel):
    """Counts shown above the task list."""
    total: int = 0
    active: int = 0
    completed: int = 0
