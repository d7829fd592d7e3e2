# taskify/core/dependencies.py
import logging
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from models import User
from taskify.core.security import token_manager
from taskify.database import get_db
from taskify.domains.auth.service import AuthService
from taskify.exceptions.user import InvalidTokenError

logger = logging.getLogger(__name__)

# auto_error=False so a missing header becomes our 401 rather than FastAPI's 403
security = HTTPBearer(auto_error=False)


async def validate_token(
    token: HTTPAuthorizationCredentials | None = Depends(security),
) -> dict:
    """Validate and decode the bearer token.

    Returns:
        dict: Decoded token payload

    Raises:
        AuthenticationError: If the token is missing, invalid or expired
    """
    if not token or not token.credentials:
        raise InvalidTokenError("Authentication token is required")

    return token_manager.verify_token(token.credentials)


async def get_current_user(
    request: Request,
    payload: dict = Depends(validate_token),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the authenticated user from the token payload.

    Returns:
        User: Current authenticated user

    Raises:
        AuthenticationError: If the payload is malformed or the user no longer exists
    """
    try:
        user_id = UUID(str(payload.get("id")))
    except ValueError as e:
        raise InvalidTokenError("Invalid token payload - missing user ID") from e

    user = await AuthService(db).get_user_by_id(user_id)
    if user is None:
        logger.warning("Token for unknown user %s", user_id)
        raise InvalidTokenError("User no longer exists")

    # Downstream ownership checks and logging read the caller from request state
    request.state.user_id = user.id

    return user
