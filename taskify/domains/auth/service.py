# taskify/domains/auth/service.py
import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from models import User
from taskify.core.security import hash_password, token_manager, verify_password
from taskify.exceptions.user import InvalidCredentialsError, UserAlreadyExistsError

logger = logging.getLogger(__name__)

# Compared against when the email is unknown so both login failures cost a bcrypt check
_DUMMY_HASH = hash_password("taskify-dummy-password")


class AuthService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user_by_email(self, email: str) -> Optional[User]:
        """Get a user by email address (case-insensitive)."""
        result = await self.db.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        """Get a user by ID."""
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def register(self, name: str, email: str, password: str) -> tuple[User, str]:
        """Create a new account and return it with a freshly issued token."""
        if await self.get_user_by_email(email):
            raise UserAlreadyExistsError()

        # bcrypt is CPU bound; keep it off the event loop
        password_hash = await run_in_threadpool(hash_password, password)
        user = User(name=name, email=email.lower(), password_hash=password_hash)

        try:
            self.db.add(user)
            await self.db.commit()
            await self.db.refresh(user)
        except IntegrityError as e:
            # Lost a race with a concurrent registration for the same email
            await self.db.rollback()
            raise UserAlreadyExistsError() from e
        except SQLAlchemyError:
            await self.db.rollback()
            raise

        logger.info("Registered user %s", user.id)
        return user, token_manager.create_access_token(user)

    async def login(self, email: str, password: str) -> tuple[User, str]:
        """Verify credentials and return the user with a new token."""
        user = await self.get_user_by_email(email)
        if user is None:
            await run_in_threadpool(verify_password, password, _DUMMY_HASH)
            raise InvalidCredentialsError()

        if not await run_in_threadpool(verify_password, password, user.password_hash):
            raise InvalidCredentialsError()

        return user, token_manager.create_access_token(user)

    async def update_profile(self, user: User, name: str | None = None) -> User:
        """Update user information."""
        try:
            if name is not None:
                user.name = name

            await self.db.commit()
            await self.db.refresh(user)
            return user
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise e
