from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime
from doctor_agenda.models.patient import PatientSex

class PatientUpsert(BaseModel):
    id: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone_number: str = Field(..., min_length=1, max_length=50)
    sex: PatientSex

class PatientOut(BaseModel):
    id: str
    clinic_id: str
    name: str
    email: str
    phone_number: str
    sex: PatientSex
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
