import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from doctor_agenda.models.clinic import Clinic
from doctor_agenda.models.doctor import Doctor
from doctor_agenda.schemas.doctor import DoctorUpsert
from doctor_agenda.services._helpers import commit_or_conflict, get_or_raise

logger = logging.getLogger(__name__)


async def upsert_doctor(db: AsyncSession, clinic_id: str, payload: DoctorUpsert) -> Doctor:
    """Insert a doctor into ``clinic_id``, or update it when ``payload.id`` names one of its doctors."""
    await get_or_raise(db, Clinic, clinic_id, "Clinic")
    data = payload.model_dump(exclude={"id"})
    if payload.id:
        doctor = await get_or_raise(db, Doctor, payload.id, "Doctor", clinic_id=clinic_id)
        for k, v in data.items():
            setattr(doctor, k, v)
        action = "update doctor"
    else:
        doctor = Doctor(clinic_id=clinic_id, **data)
        db.add(doctor)
        action = "create doctor"

    await commit_or_conflict(db, action)
    await db.refresh(doctor)
    logger.info(f"{action}: id={doctor.id} clinic={clinic_id}")
    return doctor


async def get_doctor(db: AsyncSession, doctor_id: str, clinic_id: str | None = None) -> Doctor:
    return await get_or_raise(db, Doctor, doctor_id, "Doctor", clinic_id=clinic_id)


async def list_doctors(db: AsyncSession, clinic_id: str) -> list[Doctor]:
    q = select(Doctor).where(Doctor.clinic_id == clinic_id).order_by(Doctor.name.asc())
    return list((await db.execute(q)).scalars().all())


async def delete_doctor(db: AsyncSession, doctor_id: str, clinic_id: str | None = None) -> None:
    """Delete a doctor; its appointments go with it."""
    doctor = await get_or_raise(db, Doctor, doctor_id, "Doctor", clinic_id=clinic_id)
    await db.delete(doctor)
    await commit_or_conflict(db, "delete doctor")
    logger.info(f"Deleted doctor id={doctor_id}")
