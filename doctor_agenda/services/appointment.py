import logging
from datetime import date, datetime, time, timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from doctor_agenda.core.config import settings
from doctor_agenda.core.exceptions import UnavailableError
from doctor_agenda.models.appointment import Appointment
from doctor_agenda.models.doctor import Doctor
from doctor_agenda.models.patient import Patient
from doctor_agenda.schemas.appointment import AppointmentCreate, AvailableSlot
from doctor_agenda.services._helpers import commit_or_conflict, get_or_raise
from doctor_agenda.services.availability import generate_time_slots, is_available, week_day, works_on

logger = logging.getLogger(__name__)


# ---------- helpers ----------
async def _booked_times(db: AsyncSession, doctor_id: str, day: date) -> set[time]:
    start = datetime.combine(day, time.min)
    q = select(Appointment.date).where(
        Appointment.doctor_id == doctor_id,
        Appointment.date >= start,
        Appointment.date < start + timedelta(days=1),
    )
    return {d.time() for d in (await db.execute(q)).scalars().all()}


# ---------- create ----------
async def add_appointment(db: AsyncSession, clinic_id: str, payload: AppointmentCreate) -> Appointment:
    """Book ``payload.date`` with a doctor of ``clinic_id``.

    The doctor and the patient must both belong to the clinic, the doctor must
    work on that week day, the start must be one of the doctor's slots, and no
    other appointment of the doctor may start less than one slot away.
    """
    doctor = await get_or_raise(db, Doctor, payload.doctor_id, "Doctor", clinic_id=clinic_id)
    await get_or_raise(db, Patient, payload.patient_id, "Patient", clinic_id=clinic_id)

    if not is_available(doctor, payload.date):
        logger.warning(f"Doctor {doctor.id} does not work at {payload.date}")
        raise UnavailableError(f"Doctor {doctor.id} is not available at {payload.date:%Y-%m-%d %H:%M}")

    step = settings.SLOT_INTERVAL_MINUTES
    slots = generate_time_slots(doctor.available_from_time, doctor.available_to_time, step)
    if payload.date.time() not in slots:
        logger.warning(f"{payload.date} is not a slot start for doctor {doctor.id}")
        raise UnavailableError(f"{payload.date:%H:%M} is not a bookable slot for doctor {doctor.id}")

    gap = timedelta(minutes=step)
    overlap_q = select(Appointment.id).where(
        Appointment.doctor_id == doctor.id,
        Appointment.date > payload.date - gap,   # started less than one slot before
        Appointment.date < payload.date + gap,   # or starts before this one ends
    )
    if (await db.execute(overlap_q)).first():
        logger.warning(f"Slot {payload.date} already booked for doctor {doctor.id}")
        raise UnavailableError(f"Doctor {doctor.id} already has an appointment at {payload.date:%Y-%m-%d %H:%M}")

    ap = Appointment(
        date=payload.date,
        patient_id=payload.patient_id,
        doctor_id=doctor.id,
        clinic_id=clinic_id,
    )
    db.add(ap)
    await commit_or_conflict(db, "create appointment")
    await db.refresh(ap)
    logger.info(f"Booked appointment id={ap.id} doctor={doctor.id} at {ap.date}")
    return ap


# ---------- list ----------
async def list_appointments(
    db: AsyncSession,
    clinic_id: str,
    doctor_id: str | None = None,
    patient_id: str | None = None,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
) -> list[Appointment]:
    q = select(Appointment).options(
        selectinload(Appointment.doctor),
        selectinload(Appointment.patient),
    ).where(Appointment.clinic_id == clinic_id)

    if doctor_id:
        q = q.where(Appointment.doctor_id == doctor_id)
    if patient_id:
        q = q.where(Appointment.patient_id == patient_id)
    if date_from:
        q = q.where(Appointment.date >= date_from)
    if date_to:
        q = q.where(Appointment.date < date_to)

    res = await db.execute(q.order_by(Appointment.date))
    return list(res.scalars().all())


# ---------- delete ----------
async def delete_appointment(db: AsyncSession, appointment_id: str, clinic_id: str | None = None) -> None:
    ap = await get_or_raise(db, Appointment, appointment_id, "Appointment", clinic_id=clinic_id)
    await db.delete(ap)
    await commit_or_conflict(db, "delete appointment")
    logger.info(f"Deleted appointment id={appointment_id}")


# ---------- availability ----------
async def get_available_times(
    db: AsyncSession,
    doctor_id: str,
    day: date,
    clinic_id: str | None = None,
) -> list[AvailableSlot]:
    """Slots of ``day`` inside the doctor's hours; booked ones come back with ``available=False``."""
    doctor = await get_or_raise(db, Doctor, doctor_id, "Doctor", clinic_id=clinic_id)
    if not works_on(doctor, week_day(day)):
        return []

    booked = [datetime.combine(day, b) for b in await _booked_times(db, doctor.id, day)]
    gap = timedelta(minutes=settings.SLOT_INTERVAL_MINUTES)
    slots = generate_time_slots(
        doctor.available_from_time, doctor.available_to_time, settings.SLOT_INTERVAL_MINUTES
    )
    # a slot is taken when any appointment starts less than one slot away from it
    return [
        AvailableSlot(
            value=t,
            available=all(abs(datetime.combine(day, t) - b) >= gap for b in booked),
            label=t.strftime("%H:%M"),
        )
        for t in slots
    ]
