"""Project schemas for request/response serialization."""

from __future__ import annotations

from uuid import UUID

from pydantic import ConfigDict, Field, field_validator

from models.project import DEFAULT_PROJECT_COLOR

from .base import BaseModelSchema, BaseSchema

COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class ProjectBase(BaseSchema):
    """Base project schema with common fields."""

    name: str = Field(..., max_length=255)
    description: str | None = None
    color: str = Field(default=DEFAULT_PROJECT_COLOR, pattern=COLOR_PATTERN)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate and clean the project name."""
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("Project name is required")
        return v


class ProjectCreate(ProjectBase):
    """Schema for creating a new project."""


class ProjectUpdate(BaseSchema):
    """Schema for updating a project."""

    name: str | None = Field(None, max_length=255)
    description: str | None = None
    color: str | None = Field(None, pattern=COLOR_PATTERN)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        """Validate and clean the project name."""
        if v is not None and isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("Project name cannot be empty or only whitespace")
        return v


class ProjectResponse(BaseModelSchema):
    """Schema for project response."""

    user_id: UUID
    name: str
    description: str | None = None
    color: str

    # Computed fields
    task_count: int | None = None
    completed_task_count: int | None = None

    model_config = ConfigDict(from_attributes=True)


class ProjectListResponse(BaseSchema):
    """Schema for project list response."""

    projects: list[ProjectResponse]
    total: int
