# parking_api/schemas/vehicle_entry.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from uuid import UUID


class VehicleEntryCreate(BaseModel):
    plate_number: str = Field(..., max_length=50)


class VehicleEntryOut(BaseModel):
    id: UUID
    plate_number: str
    parking_code: str
    entry_time: datetime
    exit_time: Optional[datetime]
    charged_amount: Optional[int]
    vehicle_id: Optional[UUID]
    user_id: Optional[UUID]

    class Config:
        from_attributes = True
