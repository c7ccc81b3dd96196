# parking_api/services/admin_service.py
"""Read-side aggregates for the admin dashboard and listings."""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from parking_api.models.booking import Booking
from parking_api.models.enums import BookingStatus, PaymentStatus, Role
from parking_api.models.parking_slot import ParkingSlot
from parking_api.models.payment import Payment
from parking_api.models.user import User
from parking_api.models.vehicle import Vehicle
from parking_api.models.vehicle_entry import VehicleEntry
from parking_api.utils.pagination import paginate


def dashboard_stats(db: Session) -> dict:
    by_status = {s.value: 0 for s in BookingStatus}
    for status, count in db.query(Booking.status, func.count(Booking.id)).group_by(Booking.status).all():
        by_status[BookingStatus(status).value] = count

    revenue = db.query(func.coalesce(func.sum(Payment.amount), 0)).filter(
        Payment.status == PaymentStatus.PAID,
    ).scalar()

    return {
        "total_users": db.query(func.count(User.id)).filter(User.role == Role.USER).scalar(),
        "total_vehicles": db.query(func.count(Vehicle.id)).scalar(),
        "total_slots": db.query(func.count(ParkingSlot.id)).scalar(),
        "available_slots": db.query(func.count(ParkingSlot.id)).filter(
            ParkingSlot.is_available.is_(True), ParkingSlot.available_spaces >= 1,
        ).scalar(),
        "bookings_by_status": by_status,
        "total_revenue": int(revenue or 0),
        "active_entries": db.query(func.count(VehicleEntry.id)).filter(VehicleEntry.exit_time.is_(None)).scalar(),
    }


def _user_row(user: User) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "verification_status": user.verification_status,
        "plate_numbers": [v.plate_number for v in user.vehicles],
        "booking_count": len(user.bookings),
        "created_at": user.created_at,
    }


def list_users(db: Session, page: int, limit: int, name: Optional[str] = None,
               email: Optional[str] = None, plate_number: Optional[str] = None,
               role: Optional[Role] = None) -> dict:
    q = db.query(User).options(selectinload(User.vehicles), selectinload(User.bookings))
    if name:
        q = q.filter(User.name.ilike(f"%{name}%"))
    if email:
        q = q.filter(User.email.ilike(f"%{email}%"))
    if plate_number:
        q = q.filter(User.vehicles.any(Vehicle.plate_number.ilike(f"%{plate_number}%")))
    if role:
        q = q.filter(User.role == role)
    return paginate(q.order_by(User.created_at.desc()), page, limit, transform=_user_row)


def list_bookings(db: Session, page: int, limit: int, status: Optional[BookingStatus] = None) -> dict:
    q = db.query(Booking)
    if status:
        q = q.filter(Booking.status == status)
    return paginate(q.order_by(Booking.created_at.desc()), page, limit)
