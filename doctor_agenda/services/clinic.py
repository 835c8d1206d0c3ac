import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from doctor_agenda.models.clinic import Clinic
from doctor_agenda.models.links import UserClinic
from doctor_agenda.schemas.clinic import ClinicCreate, ClinicUpdate
from doctor_agenda.services._helpers import commit_or_conflict, get_or_raise

logger = logging.getLogger(__name__)


# ---------- create ----------
async def create_clinic(db: AsyncSession, payload: ClinicCreate, user_id: str | None = None) -> Clinic:
    """Create a clinic; when ``user_id`` is given the user becomes a member in the same transaction."""
    clinic = Clinic(**payload.model_dump())
    db.add(clinic)
    if user_id:
        await db.flush()
        db.add(UserClinic(user_id=user_id, clinic_id=clinic.id))
    await commit_or_conflict(db, "create clinic")
    await db.refresh(clinic)
    logger.info(f"Created clinic id={clinic.id} owner={user_id}")
    return clinic


# ---------- read ----------
async def get_clinic(db: AsyncSession, clinic_id: str) -> Clinic:
    return await get_or_raise(db, Clinic, clinic_id, "Clinic")


# ---------- update ----------
async def update_clinic(db: AsyncSession, clinic_id: str, payload: ClinicUpdate) -> Clinic:
    clinic = await get_or_raise(db, Clinic, clinic_id, "Clinic")
    for k, v in payload.model_dump(exclude_unset=True).items():
        setattr(clinic, k, v)
    await commit_or_conflict(db, "update clinic")
    await db.refresh(clinic)
    return clinic


# ---------- delete ----------
async def delete_clinic(db: AsyncSession, clinic_id: str) -> None:
    """Delete a clinic with its doctors, patients and appointments. Fails while it still has members."""
    clinic = await get_or_raise(db, Clinic, clinic_id, "Clinic")
    await db.delete(clinic)
    await commit_or_conflict(db, "delete clinic")
    logger.info(f"Deleted clinic id={clinic_id}")


# ---------- memberships ----------
async def add_user_to_clinic(db: AsyncSession, user_id: str, clinic_id: str) -> UserClinic:
    await get_or_raise(db, Clinic, clinic_id, "Clinic")
    link = (await db.execute(
        select(UserClinic).where(UserClinic.user_id == user_id, UserClinic.clinic_id == clinic_id)
    )).scalar_one_or_none()
    if link:
        return link
    link = UserClinic(user_id=user_id, clinic_id=clinic_id)
    db.add(link)
    await commit_or_conflict(db, "add user to clinic")
    await db.refresh(link)
    return link


async def remove_user_from_clinic(db: AsyncSession, user_id: str, clinic_id: str) -> None:
    link = (await db.execute(
        select(UserClinic).where(UserClinic.user_id == user_id, UserClinic.clinic_id == clinic_id)
    )).scalar_one_or_none()
    if not link:
        return
    await db.delete(link)
    await commit_or_conflict(db, "remove user from clinic")
