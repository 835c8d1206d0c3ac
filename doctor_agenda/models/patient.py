from __future__ import annotations
import uuid
import enum
from datetime import datetime
from typing import TYPE_CHECKING
from sqlalchemy import String, Enum, DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from doctor_agenda.core.db import Base

if TYPE_CHECKING:
    from doctor_agenda.models.appointment import Appointment
    from doctor_agenda.models.clinic import Clinic


class PatientSex(str, enum.Enum):
    male = "male"
    female = "female"


class Patient(Base):
    __tablename__ = "patients"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # not unique: the same e-mail may be registered more than once
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone_number: Mapped[str] = mapped_column("phone", String(50), nullable=False)
    sex: Mapped[PatientSex] = mapped_column(
        Enum(PatientSex, name="patient_sex", create_constraint=True), nullable=False
    )

    clinic_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("clinics.id", ondelete="CASCADE"), nullable=False, index=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    clinic: Mapped[Clinic] = relationship(back_populates="patients")
    appointments: Mapped[list[Appointment]] = relationship(
        back_populates="patient", cascade="all, delete", passive_deletes=True
    )
