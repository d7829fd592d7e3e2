"""
Models package initialization.
"""

from .base import Base, BaseModel
from .project import Project
from .task import Task, TaskPriority, TaskStatus
from .user import User

__all__ = [
    "Base",
    "BaseModel",
    "User",
    "Project",
    "Task",
    "TaskStatus",
    "TaskPriority",
]
