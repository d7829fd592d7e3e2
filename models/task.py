"""
A module defining the `Task` ORM model representing a tracked piece of work.

Classes:
    TaskStatus: Allowed workflow states.
    TaskPriority: Allowed priority levels.
    Task: A single task with title, status, priority, due date, optional
    project reference and free-text labels.
"""

from enum import Enum

from sqlalchemy import JSON, Column, DateTime, ForeignKey, String, Text

from .base import UUID, BaseModel


class TaskStatus(str, Enum):
    todo = "todo"
    in_progress = "in-progress"
    completed = "completed"


class TaskPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class Task(BaseModel):
    __tablename__ = "tasks"

    user_id = Column(UUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # Detached (set to NULL) when the project is deleted
    project_id = Column(UUID(), ForeignKey("projects.id", ondelete="SET NULL"), index=True)

    title = Column(String(500), nullable=False)
    description = Column(Text)
    status = Column(String(20), nullable=False, default=TaskStatus.todo.value)
    priority = Column(String(10), nullable=False, default=TaskPriority.medium.value)
    due_date = Column(DateTime, nullable=False)
    labels = Column(JSON, nullable=False, default=list)
