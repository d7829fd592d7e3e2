"""Task-related exceptions."""

from .base import BaseAppException


class TaskNotFoundError(BaseAppException):
    """Raised when a task is absent or belongs to another user."""

    def __init__(self, message: str = "Task not found"):
        super().__init__(message=message, status_code=404, error_code="TASK_NOT_FOUND")


class InvalidTaskOperationError(BaseAppException):
    """Raised when a task mutation cannot be persisted."""

    def __init__(self, message: str = "Invalid task operation"):
        super().__init__(message=message, status_code=400, error_code="INVALID_TASK_OPERATION")
