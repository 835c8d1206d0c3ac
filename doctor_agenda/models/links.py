from __future__ import annotations
from datetime import datetime
from typing import TYPE_CHECKING
from sqlalchemy import String, ForeignKey, DateTime, Index, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from doctor_agenda.core.db import Base

if TYPE_CHECKING:
    from doctor_agenda.models.user import User
    from doctor_agenda.models.clinic import Clinic


class UserClinic(Base):
    """Membership of a user in a clinic. (user_id, clinic_id) is the natural key."""
    __tablename__ = "users_to_clinics"

    # no ON DELETE: a clinic (or user) with members cannot be removed
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), primary_key=True)
    clinic_id: Mapped[str] = mapped_column(String(36), ForeignKey("clinics.id"), primary_key=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    user: Mapped[User] = relationship(back_populates="users_to_clinics")
    clinic: Mapped[Clinic] = relationship(back_populates="users_to_clinics")

    __table_args__ = (
        Index("ix_users_to_clinics_clinic", "clinic_id"),
    )

    def __repr__(self) -> str:
        return f"<UserClinic user={self.user_id} clinic={self.clinic_id}>"
