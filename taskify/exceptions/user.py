"""User and authentication exceptions."""

from .base import AuthenticationError, BaseAppException


class UserAlreadyExistsError(BaseAppException):
    """Raised when registering an email that is already taken."""

    def __init__(self, message: str = "User already exists"):
        super().__init__(message=message, status_code=400, error_code="USER_ALREADY_EXISTS")


class InvalidCredentialsError(AuthenticationError):
    """Raised on login failure.

    The same message is used for an unknown email and a wrong password.
    """

    def __init__(self):
        super().__init__(message="Invalid credentials", error_code="INVALID_CREDENTIALS")


class TokenExpiredError(AuthenticationError):
    """Raised when a bearer token is past its expiry."""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message=message, error_code="TOKEN_EXPIRED")


class InvalidTokenError(AuthenticationError):
    """Raised when a bearer token is missing, malformed or badly signed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message=message, error_code="INVALID_TOKEN")
