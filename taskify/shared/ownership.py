"""Owner scoping.

Every read, update and delete of a user-owned record goes through this
module, so there is exactly one place that decides what "belongs to the
caller" means.
"""

from typing import Any, TypeVar
from uuid import UUID

from sqlalchemy import and_, desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.sql import Select

from taskify.exceptions.base import BaseAppException, NotFoundError

M = TypeVar("M")


def parse_id(raw: Any) -> UUID | None:
    """Parse a path identifier; anything that is not a UUID yields ``None``."""
    if isinstance(raw, UUID):
        return raw
    try:
        return UUID(str(raw))
    except (TypeError, ValueError):
        return None


def owned_by(model: type[M], user_id: UUID) -> Select:
    """Base query over ``model`` restricted to rows owned by ``user_id``, newest first."""
    return select(model).where(model.user_id == user_id).order_by(desc(model.created_at))


async def get_owned(db: AsyncSession, model: type[M], record_id: Any, user_id: UUID) -> M | None:
    """Fetch one record by id, or ``None`` when it is absent or owned by someone else."""
    parsed = parse_id(record_id)
    if parsed is None:
        return None
    stmt = select(model).where(and_(model.id == parsed, model.user_id == user_id))
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def get_owned_or_404(
    db: AsyncSession,
    model: type[M],
    record_id: Any,
    user_id: UUID,
    not_found: type[BaseAppException] | None = None,
) -> M:
    """Like :func:`get_owned` but raises a 404 instead of returning ``None``.

    Missing and foreign records raise the same error so existence is not revealed.
    """
    record = await get_owned(db, model, record_id, user_id)
    if record is None:
        raise (not_found or NotFoundError)()
    return record
