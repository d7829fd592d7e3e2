"""Project-related exceptions."""

from .base import BaseAppException


class ProjectNotFoundError(BaseAppException):
    """Raised when a project is absent or belongs to another user."""

    def __init__(self, message: str = "Project not found"):
        super().__init__(message=message, status_code=404, error_code="PROJECT_NOT_FOUND")


class InvalidProjectOperationError(BaseAppException):
    """Raised when a project mutation cannot be persisted."""

    def __init__(self, message: str = "Invalid project operation"):
        super().__init__(message=message, status_code=400, error_code="INVALID_PROJECT_OPERATION")
