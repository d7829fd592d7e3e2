"""Client-side data layer and view-models for the Taskify API."""

from .api import TaskifyAPIError, TaskifyClient

__all__ = ["TaskifyClient", "TaskifyAPIError"]
