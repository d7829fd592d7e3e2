"""Async engine, session factory and the per-request session dependency."""
import os
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from taskify.core.config import Settings, settings


def resolve_database_url(cfg: Settings) -> str:
    """Pick the database URL; ``TESTING=true`` switches to the test database."""
    if os.getenv("TESTING") == "true":
        url = os.getenv("TEST_DATABASE_URL") or cfg.test_database_url
    else:
        url = cfg.database_url

    url = (url or "").strip()
    if not url:
        raise RuntimeError(
            "DATABASE_URL is not configured. Set it in the environment or .env file "
            "(e.g. DATABASE_URL=sqlite+aiosqlite:///./taskify.db)."
        )
    return url


engine = create_async_engine(resolve_database_url(settings), echo=settings.debug)

AsyncSessionLocal = async_sessionmaker(bind=engine, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session
