# parking_api/schemas/booking.py
from pydantic import BaseModel, model_validator
from datetime import datetime
from typing import Optional
from uuid import UUID
from parking_api.models.enums import BookingStatus, PaymentStatus
from parking_api.schemas.parking_slot import ParkingSlotResponse
from parking_api.schemas.timestamps import UtcDateTime
from parking_api.schemas.user import UserSummary
from parking_api.schemas.vehicle import VehicleBrief


class BookingCreate(BaseModel):
    slot_id: UUID
    vehicle_id: UUID
    start_time: UtcDateTime
    end_time: UtcDateTime

    @model_validator(mode="after")
    def _ordered(self):
        if self.start_time >= self.end_time:
            raise ValueError("Start time must be before end time")
        return self


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class PaymentOut(BaseModel):
    id: UUID
    amount: int
    status: PaymentStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class BookingOut(BaseModel):
    id: UUID
    user_id: UUID
    vehicle_id: UUID
    slot_id: Optional[UUID]
    start_time: datetime
    end_time: datetime
    expires_at: datetime
    status: BookingStatus
    is_paid: bool
    created_at: datetime
    updated_at: datetime
    slot: Optional[ParkingSlotResponse]
    vehicle: Optional[VehicleBrief]
    user: Optional[UserSummary]
    payment: Optional[PaymentOut]

    class Config:
        from_attributes = True


class ApprovalOut(BaseModel):
    message: str
    booking: BookingOut
