import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from doctor_agenda.services._helpers import commit_or_conflict, get_or_raise
from doctor_agenda.models.clinic import Clinic
from doctor_agenda.models.links import UserClinic
from doctor_agenda.models.user import User

logger = logging.getLogger(__name__)


async def create_user(db: AsyncSession, user_id: str | None = None) -> User:
    """Register a user row. ``user_id`` lets the auth provider's identifier be reused."""
    user = User(id=user_id) if user_id else User()
    db.add(user)
    await commit_or_conflict(db, "create user")
    await db.refresh(user)
    logger.info(f"Created user id={user.id}")
    return user


async def get_user(db: AsyncSession, user_id: str) -> User:
    return await get_or_raise(db, User, user_id, "User")


async def list_user_clinics(db: AsyncSession, user_id: str) -> list[Clinic]:
    q = (
        select(Clinic)
        .join(UserClinic, UserClinic.clinic_id == Clinic.id)
        .where(UserClinic.user_id == user_id)
        .order_by(Clinic.name.asc())
    )
    return list((await db.execute(q)).scalars().all())
