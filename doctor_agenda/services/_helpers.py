import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from doctor_agenda.core.exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


async def get_or_raise(db: AsyncSession, model, id: str, what: str, clinic_id: str | None = None):
    """Fetch ``model`` by id; with ``clinic_id`` the row must also belong to that clinic."""
    q = select(model).where(model.id == id)
    if clinic_id is not None:
        q = q.where(model.clinic_id == clinic_id)
    obj = (await db.execute(q)).scalar_one_or_none()
    if not obj:
        raise NotFoundError(f"{what} {id} not found")
    return obj


async def commit_or_conflict(db: AsyncSession, action: str) -> None:
    """Commit; integrity violations are rolled back and re-raised as ConflictError."""
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"Integrity error while trying to {action}: {e.orig}")
        raise ConflictError(f"Could not {action}: the database rejected the change") from e
