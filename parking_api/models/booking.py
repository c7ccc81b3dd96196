# parking_api/models/booking.py
"""
Slot reservations.
Active (PENDING/APPROVED) bookings of one slot never overlap on [start_time, end_time);
booking_service enforces this under a row lock on the slot.
expires_at is recorded at creation and not enforced.
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship

from parking_api.database import Base
from parking_api.models.enums import BookingStatus


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        Index("ix_bookings_slot_window", "slot_id", "start_time", "end_time"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    vehicle_id = Column(Uuid, ForeignKey("vehicles.id"), nullable=False)
    # Nulled when an admin deletes a slot that only has finished bookings
    slot_id = Column(Uuid, ForeignKey("parking_slots.id", ondelete="SET NULL"))
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    expires_at = Column(DateTime, nullable=False)
    status = Column(
        Enum(BookingStatus, native_enum=False, length=20),
        nullable=False,
        default=BookingStatus.PENDING,
        index=True,
    )
    is_paid = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="bookings")
    vehicle = relationship("Vehicle", back_populates="bookings")
    slot = relationship("ParkingSlot", back_populates="bookings")
    # Always present: create_booking opens the payment in the same commit
    payment = relationship("Payment", back_populates="booking", uselist=False, cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Booking {self.id} slot={self.slot_id} status={self.status}>"
