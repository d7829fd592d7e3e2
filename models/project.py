"""
Project model for organizing tasks.
"""

from sqlalchemy import Column, ForeignKey, String, Text

from .base import UUID, BaseModel

DEFAULT_PROJECT_COLOR = "#3B82F6"


class Project(BaseModel):
    """
    Represents a project entity owned by a single user.
    """

    __tablename__ = "projects"

    user_id = Column(UUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    color = Column(String(7), nullable=False, default=DEFAULT_PROJECT_COLOR)
