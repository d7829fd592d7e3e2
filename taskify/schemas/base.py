"""Shared schema bases and the response envelopes."""

from datetime import datetime
from typing import Any, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base schema class; reads attributes off ORM objects."""
    model_config = ConfigDict(from_attributes=True)


class BaseModelSchema(BaseSchema):
    """Fields every persisted record carries."""
    id: UUID
    created_at: datetime
    updated_at: datetime


class ResponseSchema(BaseSchema):
    """Envelope for single-record and action responses."""
    status: str
    message: Optional[str] = None
    data: Optional[dict] = None


class ErrorResponseSchema(BaseSchema):
    """Body of every non-2xx response."""
    status: Literal["error"] = "error"
    message: str
    error_code: str
    details: Any = None
    timestamp: datetime
    request_id: Optional[str] = None
