# tests/conftest.py
import os

# must be set before doctor_agenda.core.db builds its module-level engine
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

from datetime import time

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from doctor_agenda.core.db import init_models, make_engine
from doctor_agenda.models import Clinic, Doctor, Patient, PatientSex


@pytest_asyncio.fixture
async def engine():
    # one in-memory database per test, shared by every session of that test
    eng = make_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    await init_models(eng)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine):
    Session = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    async with Session() as session:
        yield session


@pytest.fixture
def doctor_data():
    # Monday to Friday, 08:00 to 12:00
    return dict(
        name="Dra. Ana Souza",
        speciality="Cardiology",
        appointment_price_in_cents=15000,
        available_from_week_day=1,
        available_to_week_day=5,
        available_from_time=time(8, 0),
        available_to_time=time(12, 0),
    )


@pytest.fixture
def patient_data():
    return dict(
        name="Joao Lima",
        email="joao@example.com",
        phone_number="+55 11 99999-0000",
        sex=PatientSex.male,
    )


@pytest_asyncio.fixture
async def clinic(db) -> Clinic:
    c = Clinic(name="Clinica Central")
    db.add(c)
    await db.commit()
    await db.refresh(c)
    return c


@pytest_asyncio.fixture
async def doctor(db, clinic, doctor_data) -> Doctor:
    d = Doctor(clinic_id=clinic.id, **doctor_data)
    db.add(d)
    await db.commit()
    await db.refresh(d)
    return d


@pytest_asyncio.fixture
async def patient(db, clinic, patient_data) -> Patient:
    p = Patient(clinic_id=clinic.id, **patient_data)
    db.add(p)
    await db.commit()
    await db.refresh(p)
    return p
