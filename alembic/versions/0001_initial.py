"""initial schema: users, clinics, memberships, doctors, patients, appointments

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 10:12:41.305118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
    )
    op.create_table(
        "clinics",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        *_timestamps(),
    )
    # membership FKs have no ON DELETE on purpose
    op.create_table(
        "users_to_clinics",
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id"), primary_key=True),
        sa.Column("clinic_id", sa.String(length=36), sa.ForeignKey("clinics.id"), primary_key=True),
        *_timestamps(),
    )
    op.create_index("ix_users_to_clinics_clinic", "users_to_clinics", ["clinic_id"])

    op.create_table(
        "doctors",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("avatar_image_url", sa.String(length=1024), nullable=True),
        sa.Column("speciality", sa.String(length=100), nullable=False),
        sa.Column("appointment_price_in_cents", sa.Integer(), nullable=False),
        sa.Column("available_from_week_day", sa.Integer(), nullable=False),
        sa.Column("available_to_week_day", sa.Integer(), nullable=False),
        sa.Column("available_from_time", sa.Time(), nullable=False),
        sa.Column("available_to_time", sa.Time(), nullable=False),
        sa.Column(
            "clinic_id", sa.String(length=36),
            sa.ForeignKey("clinics.id", ondelete="CASCADE"), nullable=False,
        ),
        *_timestamps(),
    )
    op.create_index("ix_doctors_clinic_id", "doctors", ["clinic_id"])

    op.create_table(
        "patients",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),   # not unique
        sa.Column("phone", sa.String(length=50), nullable=False),
        sa.Column(
            "sex", sa.Enum("male", "female", name="patient_sex", create_constraint=True),
            nullable=False,
        ),
        sa.Column(
            "clinic_id", sa.String(length=36),
            sa.ForeignKey("clinics.id", ondelete="CASCADE"), nullable=False,
        ),
        *_timestamps(),
    )
    op.create_index("ix_patients_clinic_id", "patients", ["clinic_id"])

    op.create_table(
        "appointments",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column(
            "patient_id", sa.String(length=36),
            sa.ForeignKey("patients.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "doctor_id", sa.String(length=36),
            sa.ForeignKey("doctors.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "clinic_id", sa.String(length=36),
            sa.ForeignKey("clinics.id", ondelete="CASCADE"), nullable=False,
        ),
        *_timestamps(),
    )
    op.create_index("ix_appointments_patient_id", "appointments", ["patient_id"])
    op.create_index("ix_appointments_clinic_id", "appointments", ["clinic_id"])
    op.create_index("ix_appt_doctor_date", "appointments", ["doctor_id", "date"], unique=True)


def downgrade() -> None:
    # reverse order of the foreign keys
    op.drop_index("ix_appt_doctor_date", table_name="appointments")
    op.drop_index("ix_appointments_clinic_id", table_name="appointments")
    op.drop_index("ix_appointments_patient_id", table_name="appointments")
    op.drop_table("appointments")

    op.drop_index("ix_patients_clinic_id", table_name="patients")
    op.drop_table("patients")
    sa.Enum(name="patient_sex").drop(op.get_bind(), checkfirst=True)

    op.drop_index("ix_doctors_clinic_id", table_name="doctors")
    op.drop_table("doctors")

    op.drop_index("ix_users_to_clinics_clinic", table_name="users_to_clinics")
    op.drop_table("users_to_clinics")
    op.drop_table("clinics")
    op.drop_table("users")
