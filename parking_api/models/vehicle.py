# parking_api/models/vehicle.py
"""
Registered vehicles table.
Plate numbers are unique; every vehicle belongs to one user.
Referenced by bookings and by walk-in entries (lookup by plate).
"""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Enum, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from parking_api.database import Base
from parking_api.models.enums import VehicleType


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    plate_number = Column(String(50), unique=True, nullable=False, index=True)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    vehicle_type = Column(Enum(VehicleType, native_enum=False, length=20), nullable=False, default=VehicleType.CAR)
    make = Column(String(100))
    model = Column(String(100))
    color = Column(String(50))
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="vehicles")
    bookings = relationship("Booking", back_populates="vehicle")

    def __repr__(self):
        return f"<Vehicle {self.plate_number} user={self.user_id}>"
