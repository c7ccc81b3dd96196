# parking_api/services/booking_service.py
"""
Booking lifecycle: create → PENDING → APPROVED → COMPLETED, or → CANCELLED/REJECTED.

Create locks the slot row before the overlap check, so two concurrent requests
for the same slot are serialized by the database and the second one sees the
first one's booking. Notifications are not sent from here; callers dispatch
them after the commit (see notification_service).
"""

from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from parking_api.config import settings
from parking_api.exceptions import Conflict, NotFound, PermissionDenied
from parking_api.models.booking import Booking
from parking_api.models.enums import ACTIVE_BOOKING_STATUSES, BookingStatus, REFUNDING_BOOKING_STATUSES
from parking_api.models.parking_slot import ParkingSlot
from parking_api.models.user import User
from parking_api.models.vehicle import Vehicle
from parking_api.schemas.booking import BookingCreate
from parking_api.services import payment_service
from parking_api.services.audit_service import record_action
from parking_api.services.pricing import booking_amount
from parking_api.services.slot_service import overlapping_bookings
from parking_api.utils.logger import get_logger
from parking_api.utils.pagination import paginate

logger = get_logger(__name__)


def find_conflict(db: Session, slot_id: UUID, start: datetime, end: datetime,
                  exclude_id: Optional[UUID] = None) -> Optional[Booking]:
    q = overlapping_bookings(db, start, end).filter(Booking.slot_id == slot_id)
    if exclude_id is not None:
        q = q.filter(Booking.id != exclude_id)
    return q.first()


def _ensure_slot_free(db: Session, booking: Booking) -> None:
    """Reactivating a finished booking re-runs the overlap check under the slot lock."""
    if booking.slot_id is None:
        raise Conflict("Parking slot no longer exists")
    db.query(ParkingSlot).filter(ParkingSlot.id == booking.slot_id).with_for_update().first()
    if find_conflict(db, booking.slot_id, booking.start_time, booking.end_time, exclude_id=booking.id):
        raise Conflict("This slot is already booked for the selected time")


def create_booking(db: Session, user: User, body: BookingCreate) -> Booking:
    start, end = body.start_time, body.end_time

    # Row lock on the slot: the overlap check and insert below run as one unit
    slot = db.query(ParkingSlot).filter(ParkingSlot.id == body.slot_id).with_for_update().first()
    if not slot:
        raise NotFound("Parking slot not found")
    if not slot.is_available or slot.available_spaces < 1:
        raise Conflict("Parking slot is not available")

    if find_conflict(db, slot.id, start, end):
        raise Conflict("This slot is already booked for the selected time")

    vehicle = db.query(Vehicle).filter(Vehicle.id == body.vehicle_id).first()
    if not vehicle:
        raise NotFound("Vehicle not found")
    if vehicle.user_id != user.id:
        raise PermissionDenied("Not authorized to book with this vehicle")

    amount = booking_amount(start, end, slot.charge_per_hour)
    booking = Booking(
        user_id=user.id,
        vehicle_id=vehicle.id,
        slot_id=slot.id,
        start_time=start,
        end_time=end,
        expires_at=datetime.utcnow() + timedelta(hours=settings.BOOKING_HOLD_HOURS),
        status=BookingStatus.PENDING,
        is_paid=False,
    )
    booking.payment = payment_service.open_payment(amount, user.id)
    db.add(booking)
    db.flush()
    record_action(db, "BOOKING_CREATED", {
        "booking_id": booking.id, "slot_number": slot.slot_number,
        "plate_number": vehicle.plate_number, "amount": amount,
    }, user.id)
    db.commit()
    db.refresh(booking)
    logger.info(f"Booking {booking.id} created: slot={slot.slot_number} {start}→{end} amount={amount}")
    return booking


def list_bookings(db: Session, user: User, page: int, limit: int,
                  status: Optional[BookingStatus] = None) -> dict:
    q = db.query(Booking)
    if not user.is_admin:
        q = q.filter(Booking.user_id == user.id)
    if status:
        q = q.filter(Booking.status == status)
    return paginate(q.order_by(Booking.created_at.desc()), page, limit)


def _get(db: Session, booking_id: UUID) -> Booking:
    booking = db.query(Booking).filter(Booking.id == booking_id).first()
    if not booking:
        raise NotFound("Booking not found")
    return booking


def get_booking_for(db: Session, user: User, booking_id: UUID) -> Booking:
    booking = _get(db, booking_id)
    if booking.user_id != user.id and not user.is_admin:
        raise PermissionDenied("Not authorized to access this booking")
    return booking


def _owned(db: Session, user: User, booking_id: UUID, message: str) -> Booking:
    booking = _get(db, booking_id)
    if booking.user_id != user.id:
        raise PermissionDenied(message)
    return booking


def update_status(db: Session, user: User, booking_id: UUID, new_status: BookingStatus) -> Booking:
    """
    Admins may set any status. Owners may only cancel, and only while PENDING.
    Cancelling or rejecting a paid booking refunds its payment in the same commit.
    """
    booking = _get(db, booking_id)

    if not user.is_admin:
        if booking.user_id != user.id:
            raise PermissionDenied("Not authorized to update this booking")
        if new_status != BookingStatus.CANCELLED:
            raise PermissionDenied("Users can only cancel bookings")
        if booking.status != BookingStatus.PENDING:
            raise Conflict("Only pending bookings can be cancelled")

    previous = booking.status
    if new_status in ACTIVE_BOOKING_STATUSES and previous not in ACTIVE_BOOKING_STATUSES:
        _ensure_slot_free(db, booking)
    booking.status = new_status
    refunded = False
    if new_status in REFUNDING_BOOKING_STATUSES:
        refunded = payment_service.refund_if_paid(booking.payment)

    record_action(db, "BOOKING_STATUS_UPDATED", {
        "booking_id": booking.id, "from": previous.value, "to": new_status.value,
    }, user.id)
    if refunded:
        record_action(db, "PAYMENT_REFUNDED", {
            "booking_id": booking.id, "payment_id": booking.payment.id, "amount": booking.payment.amount,
        }, user.id)
    db.commit()
    db.refresh(booking)
    logger.info(f"Booking {booking.id}: {previous.value} → {new_status.value} by {user.role.value}")
    return booking


def cancel_booking(db: Session, user: User, booking_id: UUID) -> Booking:
    return update_status(db, user, booking_id, BookingStatus.CANCELLED)


def approve_booking(db: Session, admin: User, booking_id: UUID) -> Booking:
    if not admin.is_admin:
        raise PermissionDenied("Not authorized, admin access required")
    booking = _get(db, booking_id)
    if booking.status != BookingStatus.PENDING:
        raise Conflict("Booking is not in PENDING status")
    booking.status = BookingStatus.APPROVED
    record_action(db, "BOOKING_APPROVED", {"booking_id": booking.id}, admin.id)
    db.commit()
    db.refresh(booking)
    logger.info(f"Booking {booking.id} approved")
    return booking


def complete_booking(db: Session, user: User, booking_id: UUID) -> Booking:
    booking = _owned(db, user, booking_id, "Not authorized to modify this booking")
    if booking.status != BookingStatus.APPROVED:
        raise Conflict("Only approved bookings can be marked as completed")
    booking.status = BookingStatus.COMPLETED
    record_action(db, "BOOKING_COMPLETED", {"booking_id": booking.id}, user.id)
    db.commit()
    db.refresh(booking)
    return booking


def pay_booking(db: Session, user: User, booking_id: UUID) -> Booking:
    booking = _owned(db, user, booking_id, "Not authorized to pay for this booking")
    if booking.status != BookingStatus.APPROVED:
        raise Conflict("Can only pay for approved bookings")
    if booking.is_paid:
        raise Conflict("Booking is already paid")
    payment_service.mark_paid(booking.payment)
    booking.is_paid = True
    record_action(db, "BOOKING_PAID", {"booking_id": booking.id, "amount": booking.payment.amount}, user.id)
    db.commit()
    db.refresh(booking)
    return booking
