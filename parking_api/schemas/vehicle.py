# parking_api/schemas/vehicle.py
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional
from uuid import UUID
from parking_api.models.enums import VehicleType


def _normalise_plate(value: str) -> str:
    plate = value.strip().upper()
    if not plate:
        raise ValueError("Plate number is required")
    return plate


class VehicleCreate(BaseModel):
    plate_number: str = Field(..., min_length=1, max_length=50)
    vehicle_type: VehicleType = VehicleType.CAR
    make: Optional[str] = Field(None, max_length=100)
    model: Optional[str] = Field(None, max_length=100)
    color: Optional[str] = Field(None, max_length=50)

    @field_validator("plate_number")
    @classmethod
    def _plate(cls, value):
        return _normalise_plate(value)


class VehicleUpdate(BaseModel):
    plate_number: Optional[str] = Field(None, min_length=1, max_length=50)
    vehicle_type: Optional[VehicleType] = None
    make: Optional[str] = Field(None, max_length=100)
    model: Optional[str] = Field(None, max_length=100)
    color: Optional[str] = Field(None, max_length=50)

    @field_validator("plate_number")
    @classmethod
    def _plate(cls, value):
        return _normalise_plate(value) if value is not None else value


class VehicleOut(BaseModel):
    id: UUID
    plate_number: str
    vehicle_type: VehicleType
    make: Optional[str]
    model: Optional[str]
    color: Optional[str]
    user_id: UUID
    created_at: datetime

    class Config:
        from_attributes = True


class VehicleBrief(BaseModel):
    id: UUID
    plate_number: str

    class Config:
        from_attributes = True
