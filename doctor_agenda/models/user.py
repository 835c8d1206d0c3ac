from __future__ import annotations
import uuid
from typing import TYPE_CHECKING
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from doctor_agenda.core.db import Base

if TYPE_CHECKING:
    from doctor_agenda.models.links import UserClinic


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # memberships are never rewritten by the ORM; deleting a member user fails in the DB
    users_to_clinics: Mapped[list[UserClinic]] = relationship(
        back_populates="user", passive_deletes="all"
    )
