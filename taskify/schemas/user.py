"""User-related Pydantic schemas for request/response validation."""

from pydantic import EmailStr, Field, field_validator

from .base import BaseModelSchema, BaseSchema


class RegisterRequest(BaseSchema):
    """Schema for user registration."""

    name: str = Field(..., max_length=100, description="Display name")
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=6, max_length=128, description="Plaintext password")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate that name is not empty."""
        if not v or not v.strip():
            raise ValueError("Name is required")
        return v.strip()

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class LoginRequest(BaseSchema):
    """Schema for user login."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="Password is required")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class UserResponse(BaseModelSchema):
    """Schema for user response data."""

    name: str
    email: str


class AuthResponse(BaseSchema):
    """Schema for authentication response."""

    token: str
    token_type: str = "bearer"
    user: UserResponse


class UserUpdateRequest(BaseSchema):
    """Schema for updating user information."""

    name: str | None = Field(None, max_length=100, description="Name to update")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                raise ValueError("Name cannot be empty")
        return v
