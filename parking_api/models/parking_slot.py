# parking_api/models/parking_slot.py
"""
Parking slot inventory.
is_available / available_spaces are the static flags set by admins;
time-window availability also depends on overlapping active bookings.
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Enum, Integer, String, Uuid
from sqlalchemy.orm import relationship

from parking_api.database import Base
from parking_api.models.enums import SlotSize, SlotType, VehicleType


class ParkingSlot(Base):
    __tablename__ = "parking_slots"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    slot_number = Column(String(50), unique=True, nullable=False, index=True)
    type = Column(Enum(SlotType, native_enum=False, length=20), nullable=False, default=SlotType.REGULAR)
    size = Column(Enum(SlotSize, native_enum=False, length=20), nullable=False, default=SlotSize.MEDIUM)
    vehicle_type = Column(Enum(VehicleType, native_enum=False, length=20), nullable=False, default=VehicleType.CAR)
    charge_per_hour = Column(Integer, nullable=False, default=2000)
    available_spaces = Column(Integer, nullable=False, default=1)
    is_available = Column(Boolean, nullable=False, default=True)
    parking_name = Column(String(200))
    location = Column(String(255))
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    bookings = relationship("Booking", back_populates="slot")

    def __repr__(self):
        return f"<ParkingSlot {self.slot_number} type={self.type} available={self.is_available}>"
