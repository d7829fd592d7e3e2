"""User authentication controller endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from models.user import User
from taskify.core.dependencies import get_current_user
from taskify.database import get_db
from taskify.domains.auth.service import AuthService
from taskify.schemas.user import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
    UserUpdateRequest,
)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(register_data: RegisterRequest, db: AsyncSession = Depends(get_db)):
    """Register a new user.

    Fails with 400 when the email is already registered. The response carries
    a bearer token valid for seven days.
    """
    user, token = await AuthService(db).register(
        name=register_data.name,
        email=str(register_data.email),
        password=register_data.password,
    )
    return AuthResponse(token=token, user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse)
async def login(login_data: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Authenticate with email and password.

    An unknown email and a wrong password produce the same 401 response.
    """
    user, token = await AuthService(db).login(str(login_data.email), login_data.password)
    return AuthResponse(token=token, user=UserResponse.model_validate(user))


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current authenticated user information."""
    return UserResponse.model_validate(current_user)


@router.put("/me", response_model=UserResponse)
async def update_current_user(
    update_data: UserUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Update the current user's profile."""
    updated_user = await AuthService(db).update_profile(current_user, name=update_data.name)
    return UserResponse.model_validate(updated_user)
