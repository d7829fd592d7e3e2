"""Task service layer with business logic."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from models.project import Project
from models.task import Task, TaskStatus
from taskify.exceptions.project import ProjectNotFoundError
from taskify.exceptions.task import InvalidTaskOperationError, TaskNotFoundError
from taskify.schemas.task import TaskCreate, TaskFilter, TaskUpdate
from taskify.shared.ownership import get_owned, get_owned_or_404, owned_by

logger = logging.getLogger(__name__)

# A null in an update body only clears these; for the rest it means "leave as is"
NULLABLE_FIELDS = {"description", "project_id"}


def normalize_datetime(dt: Optional[datetime]) -> Optional[datetime]:
    """Convert to UTC and drop tzinfo, matching how timestamps are stored."""
    if dt is None:
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


class TaskService:
    """Service class for task business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_task(self, task_data: TaskCreate, user_id: UUID) -> Task:
        """Create a new task owned by ``user_id``."""

        if task_data.project_id is not None:
            await self._ensure_project_owned(task_data.project_id, user_id)

        task = Task(
            user_id=user_id,
            project_id=task_data.project_id,
            title=task_data.title,
            description=task_data.description,
            status=task_data.status.value,
            priority=task_data.priority.value,
            due_date=normalize_datetime(task_data.due_date),
            labels=list(task_data.labels),
        )

        try:
            self.db.add(task)
            await self.db.commit()
            await self.db.refresh(task)
            return task
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Failed to create task for user %s: %s", user_id, e)
            raise InvalidTaskOperationError("Failed to create task") from e

    async def get_task_by_id(self, task_id: Any, user_id: UUID) -> Optional[Task]:
        """Get a task by ID, or None if it is absent or not the user's."""
        return await get_owned(self.db, Task, task_id, user_id)

    async def get_tasks_list(
        self, user_id: UUID, filters: Optional[TaskFilter] = None
    ) -> List[Task]:
        """All of the user's tasks, newest first, optionally filtered."""

        query = owned_by(Task, user_id)

        if filters:
            if filters.status:
                query = query.where(Task.status == filters.status.value)
            if filters.priority:
                query = query.where(Task.priority == filters.priority.value)
            if filters.project_id:
                query = query.where(Task.project_id == filters.project_id)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def update_task(self, task_id: Any, task_data: TaskUpdate, user_id: UUID) -> Task:
        """Apply a partial update; fields absent from the request keep their values."""

        task = await get_owned_or_404(self.db, Task, task_id, user_id, TaskNotFoundError)

        update_data = {
            field: value
            for field, value in task_data.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_FIELDS
        }

        if update_data.get("project_id") is not None:
            await self._ensure_project_owned(update_data["project_id"], user_id)

        for field, value in update_data.items():
            if field == "due_date":
                value = normalize_datetime(value)
            elif field in ("status", "priority"):
                value = value.value
            setattr(task, field, value)

        try:
            await self.db.commit()
            await self.db.refresh(task)
            return task
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Failed to update task %s: %s", task.id, e)
            raise InvalidTaskOperationError("Failed to update task") from e

    async def delete_task(self, task_id: Any, user_id: UUID) -> bool:
        """Delete one of the user's tasks."""

        task = await get_owned_or_404(self.db, Task, task_id, user_id, TaskNotFoundError)

        try:
            await self.db.delete(task)
            await self.db.commit()
            return True
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Failed to delete task %s: %s", task.id, e)
            raise InvalidTaskOperationError("Failed to delete task") from e

    async def get_user_task_stats(self, user_id: UUID) -> Dict[str, Any]:
        """Get task statistics for a user."""

        tasks = await self.get_tasks_list(user_id)
        now = normalize_datetime(datetime.now(timezone.utc))

        completed = sum(1 for t in tasks if t.status == TaskStatus.completed.value)
        in_progress = sum(1 for t in tasks if t.status == TaskStatus.in_progress.value)
        overdue = sum(
            1 for t in tasks if t.due_date < now and t.status != TaskStatus.completed.value
        )
        total = len(tasks)

        return {
            "total_tasks": total,
            "todo_tasks": total - completed - in_progress,
            "in_progress_tasks": in_progress,
            "completed_tasks": completed,
            "overdue_tasks": overdue,
            "completion_rate": (completed / total * 100) if total > 0 else 0.0,
        }

    # Private helper methods

    async def _ensure_project_owned(self, project_id: UUID, user_id: UUID) -> None:
        """A task may only point at one of its owner's projects."""
        project = await get_owned(self.db, Project, project_id, user_id)
        if project is None:
            raise ProjectNotFoundError()
