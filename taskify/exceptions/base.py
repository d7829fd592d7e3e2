# ruff: noqa: D107
"""Base exception classes."""

from typing import Any

from fastapi import HTTPException


class BaseAppException(HTTPException):
    """Base application exception."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(
            status_code=status_code,
            detail={"message": message, "error_code": error_code, "details": details},
            headers=headers,
        )


class NotFoundError(BaseAppException):
    """Exception raised when a resource is absent or not owned by the caller."""

    def __init__(
        self,
        message: str = "Resource not found",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message=message, status_code=404, error_code="NOT_FOUND", details=details)


class AuthenticationError(BaseAppException):
    """Exception raised when the caller cannot be authenticated."""

    def __init__(
        self,
        message: str = "Not authenticated",
        error_code: str = "NOT_AUTHENTICATED",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            status_code=401,
            error_code=error_code,
            details=details,
            headers={"WWW-Authenticate": "Bearer"},
        )

