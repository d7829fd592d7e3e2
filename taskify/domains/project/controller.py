"""Project API controller with FastAPI endpoints."""

from fastapi import APIRouter, Body, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from models.user import User
from taskify.core.dependencies import get_current_user, get_db, validate_token
from taskify.domains.project.service import ProjectService
from taskify.exceptions.project import ProjectNotFoundError
from taskify.schemas.base import ResponseSchema
from taskify.schemas.project import (
    ProjectCreate,
    ProjectListResponse,
    ProjectResponse,
    ProjectUpdate,
)
from taskify.schemas.task import TaskListResponse, TaskResponse

router = APIRouter(
    prefix="/api/projects",
    tags=["projects"],
    dependencies=[Depends(validate_token)],  # Global token validation for all routes
)


async def _project_with_counts(service: ProjectService, project, user_id) -> ProjectResponse:
    rows = await service.with_task_counts([project], user_id)
    return ProjectResponse.model_validate(rows[0])


@router.get("/", response_model=ProjectListResponse)
async def get_projects(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get all of the current user's projects, newest first, with task counts."""
    service = ProjectService(db)
    projects = await service.get_projects_list(user_id=current_user.id)
    rows = await service.with_task_counts(projects, current_user.id)

    return ProjectListResponse(
        projects=[ProjectResponse.model_validate(row) for row in rows],
        total=len(rows),
    )


@router.get("/{project_id}", response_model=ResponseSchema)
async def get_project(
    project_id: str = Path(..., description="Project ID"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get a specific project by ID."""
    service = ProjectService(db)
    project = await service.get_project_by_id(project_id, current_user.id)
    if not project:
        raise ProjectNotFoundError()

    project_data = await _project_with_counts(service, project, current_user.id)
    return ResponseSchema(
        status="success",
        message="Project retrieved successfully",
        data=project_data.model_dump(mode="json"),
    )


@router.post("/", response_model=ResponseSchema, status_code=201)
async def create_project(
    project_data: ProjectCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a new project."""
    service = ProjectService(db)
    project = await service.create_project(project_data=project_data, user_id=current_user.id)

    response = ProjectResponse.model_validate(project)
    response.task_count = 0
    response.completed_task_count = 0
    return ResponseSchema(
        status="success",
        message="Project created successfully",
        data=response.model_dump(mode="json"),
    )


@router.put("/{project_id}", response_model=ResponseSchema)
async def update_project(
    project_id: str = Path(..., description="Project ID"),
    project_data: ProjectUpdate = Body(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Update a specific project."""
    service = ProjectService(db)
    project = await service.update_project(project_id, project_data, current_user.id)

    project_response = await _project_with_counts(service, project, current_user.id)
    return ResponseSchema(
        status="success",
        message="Project updated successfully",
        data=project_response.model_dump(mode="json"),
    )


@router.delete("/{project_id}", response_model=ResponseSchema)
async def delete_project(
    project_id: str = Path(..., description="Project ID"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a specific project. Its tasks are kept and lose their project reference."""
    service = ProjectService(db)
    detached = await service.delete_project(project_id, current_user.id)

    return ResponseSchema(
        status="success",
        message="Project deleted successfully",
        data={"detached_tasks": detached},
    )


@router.get("/{project_id}/tasks", response_model=TaskListResponse)
async def get_project_tasks(
    project_id: str = Path(..., description="Project ID"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get all of the current user's tasks in a specific project."""
    service = ProjectService(db)
    tasks = await service.get_project_tasks(project_id, current_user.id)

    return TaskListResponse(
        tasks=[TaskResponse.model_validate(task) for task in tasks],
        total=len(tasks),
    )
