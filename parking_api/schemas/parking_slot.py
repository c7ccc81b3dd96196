# parking_api/schemas/parking_slot.py
"""ParkingSlot schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from parking_api.models.enums import SlotSize, SlotType, VehicleType


class ParkingSlotCreate(BaseModel):
    """Schema for creating a parking slot."""

    slot_number: str = Field(..., min_length=1, max_length=50)
    type: SlotType = SlotType.REGULAR
    size: SlotSize
    vehicle_type: VehicleType
    charge_per_hour: int = Field(2000, ge=0)
    available_spaces: int = Field(1, ge=1)
    is_available: bool = True
    parking_name: Optional[str] = Field(None, max_length=200)
    location: Optional[str] = Field(None, max_length=255)


class ParkingSlotUpdate(BaseModel):
    """Schema for updating a parking slot."""

    slot_number: Optional[str] = Field(None, min_length=1, max_length=50)
    type: Optional[SlotType] = None
    size: Optional[SlotSize] = None
    vehicle_type: Optional[VehicleType] = None
    charge_per_hour: Optional[int] = None
    available_spaces: Optional[int] = None
    is_available: Optional[bool] = None
    parking_name: Optional[str] = Field(None, max_length=200)
    location: Optional[str] = Field(None, max_length=255)


class ParkingSlotResponse(BaseModel):
    """Schema for parking slot response."""

    id: UUID
    slot_number: str
    type: SlotType
    size: SlotSize
    vehicle_type: VehicleType
    charge_per_hour: int
    available_spaces: int
    is_available: bool
    parking_name: Optional[str]
    location: Optional[str]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class SlotFilters(BaseModel):
    """Optional filters shared by the list and availability queries."""

    type: Optional[SlotType] = None
    size: Optional[SlotSize] = None
    vehicle_type: Optional[VehicleType] = None
    is_available: Optional[bool] = None
    slot_number: Optional[str] = None
    parking_name: Optional[str] = None
    location: Optional[str] = None

