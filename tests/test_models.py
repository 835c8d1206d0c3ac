import uuid
from datetime import datetime

import pytest
from sqlalchemy import func, select, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from doctor_agenda.core.db import Base
from doctor_agenda.models import Appointment, Clinic, Doctor, Patient, User, UserClinic


async def _count(db, model) -> int:
    return (await db.execute(select(func.count()).select_from(model))).scalar_one()


# ---------- layout ----------
def test_tables_and_columns():
    expected = {
        "users": {"id"},
        "users_to_clinics": {"user_id", "clinic_id", "created_at", "updated_at"},
        "clinics": {"id", "name", "created_at", "updated_at"},
        "doctors": {
            "id", "name", "avatar_image_url", "speciality", "appointment_price_in_cents",
            "available_from_week_day", "available_to_week_day",
            "available_from_time", "available_to_time",
            "clinic_id", "created_at", "updated_at",
        },
        "patients": {"id", "name", "email", "phone", "sex", "clinic_id", "created_at", "updated_at"},
        "appointments": {"id", "date", "patient_id", "doctor_id", "clinic_id", "created_at", "updated_at"},
    }
    tables = Base.metadata.tables
    assert set(tables) == set(expected)
    for name, cols in expected.items():
        assert {c.name for c in tables[name].columns} == cols


def test_foreign_key_delete_rules():
    def rules(table):
        return {
            fk.parent.name: (fk.column.table.name, fk.ondelete)
            for fk in Base.metadata.tables[table].foreign_keys
        }

    assert rules("users_to_clinics") == {"user_id": ("users", None), "clinic_id": ("clinics", None)}
    assert rules("doctors") == {"clinic_id": ("clinics", "CASCADE")}
    assert rules("patients") == {"clinic_id": ("clinics", "CASCADE")}
    assert rules("appointments") == {
        "patient_id": ("patients", "CASCADE"),
        "doctor_id": ("doctors", "CASCADE"),
        "clinic_id": ("clinics", "CASCADE"),
    }


def test_optional_and_required_columns():
    doctors = Base.metadata.tables["doctors"]
    assert doctors.c.avatar_image_url.nullable
    assert not doctors.c.speciality.nullable
    assert not Base.metadata.tables["clinics"].c.name.nullable
    assert not Base.metadata.tables["patients"].c.email.unique
    assert [c.name for c in Base.metadata.tables["users_to_clinics"].primary_key] == ["user_id", "clinic_id"]


# ---------- behaviour against a live database ----------
async def test_ids_and_timestamps_are_generated(db, clinic):
    uuid.UUID(clinic.id)
    assert isinstance(clinic.created_at, datetime)
    assert clinic.updated_at is not None


async def test_deleting_clinic_removes_its_doctors(db, clinic, doctor):
    assert await _count(db, Doctor) == 1
    await db.delete(clinic)
    await db.commit()
    assert await _count(db, Doctor) == 0


async def test_patient_sex_outside_enum_is_rejected(db, clinic):
    with pytest.raises(IntegrityError):
        await db.execute(
            text(
                "INSERT INTO patients (id, name, email, phone, sex, clinic_id) "
                "VALUES (:id, 'X', 'x@example.com', '1', 'other', :clinic_id)"
            ),
            {"id": str(uuid.uuid4()), "clinic_id": clinic.id},
        )
    await db.rollback()


async def test_appointment_with_unknown_doctor_is_rejected(db, clinic, patient):
    db.add(Appointment(
        date=datetime(2026, 10, 19, 9, 0),
        patient_id=patient.id,
        doctor_id=str(uuid.uuid4()),
        clinic_id=clinic.id,
    ))
    with pytest.raises(IntegrityError):
        await db.commit()
    await db.rollback()
    assert await _count(db, Appointment) == 0


async def test_patients_may_share_an_email(db, clinic, patient_data):
    db.add_all([
        Patient(clinic_id=clinic.id, **patient_data),
        Patient(clinic_id=clinic.id, **patient_data),
    ])
    await db.commit()
    assert await _count(db, Patient) == 2


async def test_update_moves_updated_at_forward(db, clinic):
    before = clinic.updated_at
    clinic.name = "Clinica Norte"
    await db.commit()
    await db.refresh(clinic)
    assert clinic.name == "Clinica Norte"
    assert clinic.updated_at >= before
    assert clinic.updated_at >= clinic.created_at


async def test_deleting_doctor_removes_only_its_appointments(db, clinic, doctor, patient):
    db.add(Appointment(
        date=datetime(2026, 10, 19, 9, 0),
        patient_id=patient.id, doctor_id=doctor.id, clinic_id=clinic.id,
    ))
    await db.commit()

    await db.delete(doctor)
    await db.commit()

    assert await _count(db, Appointment) == 0
    assert await _count(db, Patient) == 1
    assert await _count(db, Clinic) == 1


async def test_clinic_with_members_cannot_be_deleted(db, clinic):
    user = User()
    db.add(user)
    await db.flush()
    db.add(UserClinic(user_id=user.id, clinic_id=clinic.id))
    await db.commit()

    await db.delete(clinic)
    with pytest.raises(IntegrityError):
        await db.commit()
    await db.rollback()
    assert await _count(db, Clinic) == 1


async def test_relationships_load_on_demand(db, clinic, doctor, patient):
    db.add(Appointment(
        date=datetime(2026, 10, 20, 10, 0),
        patient_id=patient.id, doctor_id=doctor.id, clinic_id=clinic.id,
    ))
    await db.commit()
    db.expunge_all()

    q = select(Clinic).options(
        selectinload(Clinic.doctors),
        selectinload(Clinic.patients),
        selectinload(Clinic.appointments).selectinload(Appointment.doctor),
    ).where(Clinic.id == clinic.id)
    c = (await db.execute(q)).scalar_one()

    assert [d.name for d in c.doctors] == [doctor.name]
    assert [p.id for p in c.patients] == [patient.id]
    assert c.appointments[0].doctor.id == doctor.id


async def test_deleting_patient_removes_its_appointments(db, clinic, doctor, patient):
    db.add(Appointment(
        date=datetime(2026, 10, 19, 9, 0),
        patient_id=patient.id, doctor_id=doctor.id, clinic_id=clinic.id,
    ))
    await db.commit()

    await db.delete(patient)
    await db.commit()

    assert await _count(db, Appointment) == 0
    assert await _count(db, Doctor) == 1
    assert await _count(db, Clinic) == 1


async def test_deleting_clinic_removes_patients_and_appointments(db, clinic, doctor, patient, patient_data):
    other = Clinic(name="Clinica Oeste")
    db.add(other)
    await db.flush()
    db.add_all([
        Appointment(
            date=datetime(2026, 10, 19, 9, 0),
            patient_id=patient.id, doctor_id=doctor.id, clinic_id=clinic.id,
        ),
        Appointment(
            date=datetime(2026, 10, 19, 9, 30),
            patient_id=patient.id, doctor_id=doctor.id, clinic_id=clinic.id,
        ),
        Patient(clinic_id=other.id, **patient_data),
    ])
    await db.commit()

    await db.delete(clinic)
    await db.commit()

    assert await _count(db, Appointment) == 0
    assert await _count(db, Doctor) == 0
    # only the other clinic and its patient are left
    assert await _count(db, Patient) == 1
    assert await _count(db, Clinic) == 1


async def test_doctor_cannot_have_two_appointments_at_the_same_instant(db, clinic, doctor, patient):
    for _ in range(2):
        db.add(Appointment(
            date=datetime(2026, 10, 19, 9, 0),
            patient_id=patient.id, doctor_id=doctor.id, clinic_id=clinic.id,
        ))
    with pytest.raises(IntegrityError):
        await db.commit()
    await db.rollback()
    assert await _count(db, Appointment) == 0
