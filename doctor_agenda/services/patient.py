import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from doctor_agenda.models.clinic import Clinic
from doctor_agenda.models.patient import Patient
from doctor_agenda.schemas.patient import PatientUpsert
from doctor_agenda.services._helpers import commit_or_conflict, get_or_raise

logger = logging.getLogger(__name__)


async def upsert_patient(db: AsyncSession, clinic_id: str, payload: PatientUpsert) -> Patient:
    await get_or_raise(db, Clinic, clinic_id, "Clinic")
    data = payload.model_dump(exclude={"id"})
    if payload.id:
        patient = await get_or_raise(db, Patient, payload.id, "Patient", clinic_id=clinic_id)
        for k, v in data.items():
            setattr(patient, k, v)
        action = "update patient"
    else:
        patient = Patient(clinic_id=clinic_id, **data)
        db.add(patient)
        action = "create patient"

    await commit_or_conflict(db, action)
    await db.refresh(patient)
    logger.info(f"{action}: id={patient.id} clinic={clinic_id}")
    return patient


async def get_patient(db: AsyncSession, patient_id: str, clinic_id: str | None = None) -> Patient:
    return await get_or_raise(db, Patient, patient_id, "Patient", clinic_id=clinic_id)


async def list_patients(db: AsyncSession, clinic_id: str, email: str | None = None) -> list[Patient]:
    q = select(Patient).where(Patient.clinic_id == clinic_id)
    if email:
        # several patients may share an address
        q = q.where(Patient.email == email)
    res = await db.execute(q.order_by(Patient.name.asc()))
    return list(res.scalars().all())


async def delete_patient(db: AsyncSession, patient_id: str, clinic_id: str | None = None) -> None:
    patient = await get_or_raise(db, Patient, patient_id, "Patient", clinic_id=clinic_id)
    await db.delete(patient)
    await commit_or_conflict(db, "delete patient")
    logger.info(f"Deleted patient id={patient_id}")
