from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime, time

from doctor_agenda.schemas.doctor import DoctorOut
from doctor_agenda.schemas.patient import PatientOut

class AppointmentCreate(BaseModel):
    patient_id: str
    doctor_id: str
    date: datetime = Field(..., description="start of the appointment, naive and in the clinic's clock")

    @field_validator("date")
    @classmethod
    def _wall_clock_minute(cls, v: datetime) -> datetime:
        # stored naive, in the clinic's wall clock, to the minute
        return v.replace(tzinfo=None, second=0, microsecond=0)

class AppointmentOut(BaseModel):
    id: str
    date: datetime
    patient_id: str
    doctor_id: str
    clinic_id: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class AppointmentDetailOut(AppointmentOut):
    doctor: DoctorOut
    patient: PatientOut

class AvailableSlot(BaseModel):
    value: time
    available: bool
    label: str   # "HH:MM"
