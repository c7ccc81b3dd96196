# parking_api/services/slot_service.py
"""
Slot inventory: admin CRUD, filtered listing, and time-window availability.
A slot is bookable for [start, end) when it is flagged available, has at least
one space, and no PENDING/APPROVED booking overlaps the window.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Query, Session

from parking_api.exceptions import Conflict, NotFound, ValidationFailed
from parking_api.models.booking import Booking
from parking_api.models.enums import ACTIVE_BOOKING_STATUSES
from parking_api.models.parking_slot import ParkingSlot
from parking_api.schemas.parking_slot import ParkingSlotCreate, ParkingSlotUpdate, SlotFilters
from parking_api.services.audit_service import record_action
from parking_api.utils.logger import get_logger
from parking_api.utils.pagination import paginate

logger = get_logger(__name__)


def overlapping_bookings(db: Session, start: datetime, end: datetime) -> Query:
    """Active bookings whose [start_time, end_time) intersects [start, end)."""
    return db.query(Booking).filter(
        Booking.status.in_(ACTIVE_BOOKING_STATUSES),
        Booking.start_time < end,
        Booking.end_time > start,
    )


def _apply_filters(q: Query, filters: SlotFilters) -> Query:
    if filters.type:
        q = q.filter(ParkingSlot.type == filters.type)
    if filters.size:
        q = q.filter(ParkingSlot.size == filters.size)
    if filters.vehicle_type:
        q = q.filter(ParkingSlot.vehicle_type == filters.vehicle_type)
    if filters.is_available is not None:
        q = q.filter(ParkingSlot.is_available == filters.is_available)
    if filters.slot_number:
        q = q.filter(ParkingSlot.slot_number.ilike(f"%{filters.slot_number}%"))
    if filters.parking_name:
        q = q.filter(ParkingSlot.parking_name.ilike(f"%{filters.parking_name}%"))
    if filters.location:
        q = q.filter(ParkingSlot.location.ilike(f"%{filters.location}%"))
    return q


def list_slots(db: Session, filters: SlotFilters, page: int, limit: int) -> dict:
    q = _apply_filters(db.query(ParkingSlot), filters)
    return paginate(q.order_by(ParkingSlot.slot_number.asc()), page, limit)


def get_slot(db: Session, slot_id: UUID) -> ParkingSlot:
    slot = db.query(ParkingSlot).filter(ParkingSlot.id == slot_id).first()
    if not slot:
        raise NotFound("Parking slot not found")
    return slot


def _slot_number_taken(db: Session, slot_number: str, exclude_id: Optional[UUID] = None) -> bool:
    q = db.query(ParkingSlot).filter(ParkingSlot.slot_number == slot_number)
    if exclude_id is not None:
        q = q.filter(ParkingSlot.id != exclude_id)
    return q.first() is not None


def create_slot(db: Session, body: ParkingSlotCreate, actor_id: UUID) -> ParkingSlot:
    if _slot_number_taken(db, body.slot_number):
        raise Conflict("Parking slot with this number already exists")
    slot = ParkingSlot(**body.model_dump())
    db.add(slot)
    db.flush()
    record_action(db, "SLOT_CREATED", {"slot_id": slot.id, "slot_number": slot.slot_number}, actor_id)
    db.commit()
    db.refresh(slot)
    return slot


def update_slot(db: Session, slot_id: UUID, body: ParkingSlotUpdate, actor_id: UUID) -> ParkingSlot:
    slot = get_slot(db, slot_id)
    changes = body.model_dump(exclude_unset=True)

    new_number = changes.get("slot_number")
    if new_number and new_number != slot.slot_number and _slot_number_taken(db, new_number, slot.id):
        raise Conflict("Parking slot with this number already exists")
    if changes.get("available_spaces") is not None and changes["available_spaces"] < 0:
        raise ValidationFailed("Available spaces cannot be negative")
    if changes.get("charge_per_hour") is not None and changes["charge_per_hour"] < 0:
        raise ValidationFailed("Charge per hour cannot be negative")

    for field, value in changes.items():
        setattr(slot, field, value)
    record_action(db, "SLOT_UPDATED", {"slot_id": slot.id, "changes": sorted(changes)}, actor_id)
    db.commit()
    db.refresh(slot)
    return slot


def delete_slot(db: Session, slot_id: UUID, actor_id: UUID) -> None:
    slot = get_slot(db, slot_id)
    active = db.query(Booking).filter(
        Booking.slot_id == slot.id,
        Booking.status.in_(ACTIVE_BOOKING_STATUSES),
    ).count()
    if active:
        raise Conflict("Cannot delete slot with active bookings")
    record_action(db, "SLOT_DELETED", {"slot_id": slot.id, "slot_number": slot.slot_number}, actor_id)
    db.delete(slot)
    db.commit()
    logger.info(f"Slot {slot.slot_number} deleted")


def available_slots(db: Session, start: datetime, end: datetime, filters: SlotFilters) -> list[ParkingSlot]:
    if start >= end:
        raise ValidationFailed("Start time must be before end time")
    booked = select(Booking.slot_id).where(
        Booking.status.in_(ACTIVE_BOOKING_STATUSES),
        Booking.start_time < end,
        Booking.end_time > start,
        Booking.slot_id.isnot(None),
    )
    q = db.query(ParkingSlot).filter(
        ParkingSlot.is_available.is_(True),
        ParkingSlot.available_spaces >= 1,
        ParkingSlot.id.notin_(booked),
    )
    # The window query always wants bookable slots, so the flag filter is not user-controlled here
    q = _apply_filters(q, filters.model_copy(update={"is_available": None}))
    return q.order_by(ParkingSlot.slot_number.asc()).all()
