# parking_api/models/vehicle_entry.py
"""
Walk-in parking sessions, independent of bookings.
Created at the entry gate; exit_time and charged_amount are written once at exit.
"""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Uuid

from parking_api.database import Base


class VehicleEntry(Base):
    __tablename__ = "vehicle_entries"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    plate_number = Column(String(50), nullable=False, index=True)
    parking_code = Column(String(8), nullable=False, index=True)
    entry_time = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    exit_time = Column(DateTime)
    charged_amount = Column(Integer)
    vehicle_id = Column(Uuid, ForeignKey("vehicles.id", ondelete="SET NULL"))
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), index=True)

    def __repr__(self):
        return f"<VehicleEntry {self.id} plate={self.plate_number} code={self.parking_code}>"
