from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

class ClinicCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)

class ClinicUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)

class ClinicOut(ClinicCreate):
    id: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
