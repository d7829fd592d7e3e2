"""Task API controller with FastAPI endpoints."""

import logging
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from models.task import TaskPriority, TaskStatus
from models.user import User
from taskify.core.dependencies import get_current_user, get_db, validate_token
from taskify.domains.task.service import TaskService
from taskify.exceptions.task import TaskNotFoundError
from taskify.schemas.base import ResponseSchema
from taskify.schemas.task import (
    TaskCreate,
    TaskFilter,
    TaskListResponse,
    TaskResponse,
    TaskStats,
    TaskUpdate,
)

router = APIRouter(
    prefix="/api/tasks",
    tags=["tasks"],
    dependencies=[Depends(validate_token)],  # Global token validation for all routes
)


@router.get("/", response_model=TaskListResponse)
async def get_tasks(
    status: TaskStatus | None = Query(None),
    priority: TaskPriority | None = Query(None),
    project_id: UUID | None = Query(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get all of the current user's tasks, newest first."""
    filters = TaskFilter(status=status, priority=priority, project_id=project_id)

    service = TaskService(db)
    tasks = await service.get_tasks_list(user_id=current_user.id, filters=filters)

    return TaskListResponse(
        tasks=[TaskResponse.model_validate(task) for task in tasks],
        total=len(tasks),
    )


@router.get("/stats/summary", response_model=ResponseSchema)
async def get_task_stats(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get task statistics for the current user."""
    service = TaskService(db)
    stats = await service.get_user_task_stats(current_user.id)

    return ResponseSchema(
        status="success",
        message="Task statistics retrieved successfully",
        data=TaskStats.model_validate(stats).model_dump(mode="json"),
    )


@router.get("/{task_id}", response_model=ResponseSchema)
async def get_task(
    task_id: str = Path(..., description="Task ID"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get a specific task by ID."""
    service = TaskService(db)
    task = await service.get_task_by_id(task_id, current_user.id)
    if not task:
        raise TaskNotFoundError()

    return ResponseSchema(
        status="success",
        message="Task retrieved successfully",
        data=TaskResponse.model_validate(task).model_dump(mode="json"),
    )


@router.post("/", response_model=ResponseSchema, status_code=201)
async def create_task(
    task_data: TaskCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a new task."""
    service = TaskService(db)
    task = await service.create_task(task_data=task_data, user_id=current_user.id)

    return ResponseSchema(
        status="success",
        message="Task created successfully",
        data=TaskResponse.model_validate(task).model_dump(mode="json"),
    )


@router.put("/{task_id}", response_model=ResponseSchema)
async def update_task(
    task_id: str = Path(..., description="Task ID"),
    task_data: TaskUpdate = Body(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Update a specific task."""
    service = TaskService(db)
    task = await service.update_task(task_id, task_data, current_user.id)

    return ResponseSchema(
        status="success",
        message="Task updated successfully",
        data=TaskResponse.model_validate(task).model_dump(mode="json"),
    )


@router.delete("/{task_id}", response_model=ResponseSchema)
async def delete_task(
    task_id: str = Path(..., description="Task ID"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a specific task."""
    service = TaskService(db)
    await service.delete_task(task_id, current_user.id)

    return ResponseSchema(status="success", message="Task deleted successfully", data=None)
