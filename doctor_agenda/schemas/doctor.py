from pydantic import BaseModel, Field, model_validator
from typing import Annotated, Optional
from datetime import datetime, time

WeekDay = Annotated[int, Field(ge=0, le=6, description="0 = Sunday ... 6 = Saturday")]

class DoctorUpsert(BaseModel):
    id: Optional[str] = None              # without id a new doctor is created
    name: str = Field(..., min_length=1, max_length=255)
    avatar_image_url: Optional[str] = None
    speciality: str = Field(..., min_length=1, max_length=100)
    appointment_price_in_cents: int = Field(..., ge=0)
    available_from_week_day: WeekDay
    available_to_week_day: WeekDay
    available_from_time: time
    available_to_time: time

    @model_validator(mode="after")
    def _check_hours(self) -> "DoctorUpsert":
        if self.available_to_time <= self.available_from_time:
            raise ValueError("available_to_time must be after available_from_time")
        return self

class DoctorOut(BaseModel):
    id: str
    clinic_id: str
    name: str
    avatar_image_url: Optional[str] = None
    speciality: str
    appointment_price_in_cents: int
    available_from_week_day: int
    available_to_week_day: int
    available_from_time: time
    available_to_time: time
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True  # built straight from the ORM row
