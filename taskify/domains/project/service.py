"""Project service layer with business logic."""

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import and_, func, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from models.project import Project
from models.task import Task, TaskStatus
from taskify.exceptions.project import InvalidProjectOperationError, ProjectNotFoundError
from taskify.schemas.project import ProjectCreate, ProjectUpdate
from taskify.shared.ownership import get_owned, get_owned_or_404, owned_by

logger = logging.getLogger(__name__)

PROJECT_FIELDS = ("id", "user_id", "name", "description", "color", "created_at", "updated_at")


class ProjectService:
    """Service class for project business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_project(self, project_data: ProjectCreate, user_id: UUID) -> Project:
        """Create a new project."""

        project = Project(
            user_id=user_id,
            name=project_data.name,
            description=project_data.description,
            color=project_data.color,
        )

        try:
            self.db.add(project)
            await self.db.commit()
            await self.db.refresh(project)
            return project
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Failed to create project for user %s: %s", user_id, e)
            raise InvalidProjectOperationError("Failed to create project") from e

    async def get_project_by_id(self, project_id: Any, user_id: UUID) -> Optional[Project]:
        """Get a project by ID, ensuring it belongs to the user."""
        return await get_owned(self.db, Project, project_id, user_id)

    async def get_projects_list(self, user_id: UUID) -> List[Project]:
        """All of the user's projects, newest first."""
        result = await self.db.execute(owned_by(Project, user_id))
        return list(result.scalars().all())

    async def update_project(
        self, project_id: Any, project_data: ProjectUpdate, user_id: UUID
    ) -> Project:
        """Update a project; only supplied fields change."""

        project = await get_owned_or_404(
            self.db, Project, project_id, user_id, ProjectNotFoundError
        )

        update_data = project_data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            # name and color cannot be cleared
            if value is None and field != "description":
                continue
            setattr(project, field, value)

        try:
            await self.db.commit()
            await self.db.refresh(project)
            return project
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Failed to update project %s: %s", project.id, e)
            raise InvalidProjectOperationError("Failed to update project") from e

    async def delete_project(self, project_id: Any, user_id: UUID) -> int:
        """Delete a project, detaching its tasks. Returns how many tasks were detached."""

        project = await get_owned_or_404(
            self.db, Project, project_id, user_id, ProjectNotFoundError
        )

        try:
            detached = await self._unassign_tasks_from_project(project.id)
            await self.db.delete(project)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Failed to delete project %s: %s", project.id, e)
            raise InvalidProjectOperationError("Failed to delete project") from e

        logger.info("Deleted project %s, detached %d task(s)", project_id, detached)
        return detached

    async def get_project_tasks(self, project_id: Any, user_id: UUID) -> List[Task]:
        """The user's tasks in one of the user's projects, newest first."""

        project = await get_owned_or_404(
            self.db, Project, project_id, user_id, ProjectNotFoundError
        )
        result = await self.db.execute(
            owned_by(Task, user_id).where(Task.project_id == project.id)
        )
        return list(result.scalars().all())

    async def get_task_counts(self, project_ids: List[UUID], user_id: UUID) -> Dict[UUID, tuple]:
        """Map each project id to ``(task_count, completed_task_count)``."""
        if not project_ids:
            return {}

        stmt = (
            select(Task.project_id, Task.status, func.count(Task.id))
            .where(and_(Task.user_id == user_id, Task.project_id.in_(project_ids)))
            .group_by(Task.project_id, Task.status)
        )
        result = await self.db.execute(stmt)

        counts = {project_id: [0, 0] for project_id in project_ids}
        for project_id, task_status, count in result.all():
            counts[project_id][0] += count
            if task_status == TaskStatus.completed.value:
                counts[project_id][1] += count
        return {project_id: tuple(pair) for project_id, pair in counts.items()}

    async def with_task_counts(self, projects: List[Project], user_id: UUID) -> List[Dict[str, Any]]:
        """Project rows as dicts carrying ``task_count`` and ``completed_task_count``."""
        counts = await self.get_task_counts([p.id for p in projects], user_id)

        rows = []
        for project in projects:
            total, completed = counts.get(project.id, (0, 0))
            row = {field: getattr(project, field) for field in PROJECT_FIELDS}
            row["task_count"] = total
            row["completed_task_count"] = completed
            rows.append(row)
        return rows

    # Private helper methods

    async def _unassign_tasks_from_project(self, project_id: UUID) -> int:
        """Set project_id to None for all tasks in the project."""
        stmt = (
            update(Task)
            .where(Task.project_id == project_id)
            .values(project_id=None)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.db.execute(stmt)
        return result.rowcount or 0
