from __future__ import annotations
import uuid
from datetime import datetime
from typing import TYPE_CHECKING
from sqlalchemy import String, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from doctor_agenda.core.db import Base

if TYPE_CHECKING:
    from doctor_agenda.models.appointment import Appointment
    from doctor_agenda.models.doctor import Doctor
    from doctor_agenda.models.links import UserClinic
    from doctor_agenda.models.patient import Patient


class Clinic(Base):
    __tablename__ = "clinics"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    # ON DELETE CASCADE removes children; the ORM only deletes the ones already loaded
    doctors: Mapped[list[Doctor]] = relationship(
        back_populates="clinic", cascade="all, delete", passive_deletes=True
    )
    patients: Mapped[list[Patient]] = relationship(
        back_populates="clinic", cascade="all, delete", passive_deletes=True
    )
    appointments: Mapped[list[Appointment]] = relationship(
        back_populates="clinic", cascade="all, delete", passive_deletes=True
    )
    users_to_clinics: Mapped[list[UserClinic]] = relationship(
        back_populates="clinic", passive_deletes="all"
    )
