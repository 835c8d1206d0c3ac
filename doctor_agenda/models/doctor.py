from __future__ import annotations
import uuid
from datetime import datetime, time
from typing import TYPE_CHECKING
from sqlalchemy import String, Integer, Time, DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from doctor_agenda.core.db import Base

if TYPE_CHECKING:
    from doctor_agenda.models.appointment import Appointment
    from doctor_agenda.models.clinic import Clinic


class Doctor(Base):
    __tablename__ = "doctors"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    avatar_image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    speciality: Mapped[str] = mapped_column(String(100), nullable=False)  # e.g. cardiology, pediatrics
    appointment_price_in_cents: Mapped[int] = mapped_column(Integer, nullable=False)

    # 0 = Sunday ... 6 = Saturday; from=1, to=5 reads "Monday to Friday"
    available_from_week_day: Mapped[int] = mapped_column(Integer, nullable=False)
    available_to_week_day: Mapped[int] = mapped_column(Integer, nullable=False)
    available_from_time: Mapped[time] = mapped_column(Time, nullable=False)
    available_to_time: Mapped[time] = mapped_column(Time, nullable=False)

    clinic_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("clinics.id", ondelete="CASCADE"), nullable=False, index=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    clinic: Mapped[Clinic] = relationship(back_populates="doctors")
    appointments: Mapped[list[Appointment]] = relationship(
        back_populates="doctor", cascade="all, delete", passive_deletes=True
    )
