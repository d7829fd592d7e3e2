"""Task schemas for request/response serialization."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import ConfigDict, Field, field_validator

from models.task import TaskPriority, TaskStatus

from .base import BaseModelSchema, BaseSchema


def _clean_labels(labels: list[str] | None) -> list[str] | None:
    if labels is None:
        return None
    cleaned = []
    for label in labels:
        label = label.strip()
        if label and label not in cleaned:
            cleaned.append(label)
    return cleaned


def _clean_title(v: str | None) -> str | None:
    if v is not None:
        v = v.strip()
        if not v:
            raise ValueError("Title is required")
    return v


class TaskCreate(BaseSchema):
    """Schema for creating a new task."""

    title: str = Field(..., max_length=500)
    description: str | None = None
    status: TaskStatus = TaskStatus.todo
    priority: TaskPriority = TaskPriority.medium
    due_date: datetime
    project_id: UUID | None = None
    labels: list[str] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Validate and clean the task title."""
        return _clean_title(v)

    @field_validator("labels")
    @classmethod
    def validate_labels(cls, v: list[str]) -> list[str]:
        return _clean_labels(v)


class TaskUpdate(BaseSchema):
    """Schema for updating a task.

    Only fields present in the request body are applied. ``description`` and
    ``project_id`` may be set to null to clear them; a null for any other
    field is ignored.
    """

    title: str | None = Field(None, max_length=500)
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None
    project_id: UUID | None = None
    labels: list[str] | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        return _clean_title(v)

    @field_validator("labels")
    @classmethod
    def validate_labels(cls, v: list[str] | None) -> list[str] | None:
        return _clean_labels(v)


class TaskResponse(BaseModelSchema):
    """Schema for task response."""

    user_id: UUID
    project_id: UUID | None = None
    title: str
    description: str | None = None
    status: TaskStatus
    priority: TaskPriority
    due_date: datetime
    labels: list[str] = []

    model_config = ConfigDict(from_attributes=True)


class TaskFilter(BaseSchema):
    """Schema for filtering tasks."""

    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    project_id: UUID | None = None


class TaskListResponse(BaseSchema):
    """Schema for task list response."""

    tasks: list[TaskResponse]
    total: int


class TaskStats(BaseSchema):
    """Schema for task statistics."""

    total_tasks: int
    todo_tasks: int
    in_progress_tasks: int
    completed_tasks: int
    overdue_tasks: int
    completion_rate: float
