# parking_api/services/export_service.py
"""CSV exports for the admin console."""

import csv
import io

from sqlalchemy.orm import Session, selectinload

from parking_api.models.booking import Booking
from parking_api.models.user import User


def _to_csv(header: list[str], rows) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(header)
    writer.writerows(rows)
    return buffer.getvalue()


def export_users_csv(db: Session) -> str:
    users = db.query(User).options(selectinload(User.vehicles)).order_by(User.created_at.asc()).all()
    return _to_csv(
        ["ID", "Name", "Email", "Role", "Verification", "Plate Numbers", "Created At"],
        (
            [u.id, u.name, u.email, u.role.value, u.verification_status.value,
             " ".join(v.plate_number for v in u.vehicles), u.created_at.isoformat()]
            for u in users
        ),
    )


def export_bookings_csv(db: Session) -> str:
    bookings = (
        db.query(Booking)
        .options(selectinload(Booking.user), selectinload(Booking.vehicle),
                 selectinload(Booking.slot), selectinload(Booking.payment))
        .order_by(Booking.created_at.desc())
        .all()
    )
    return _to_csv(
        ["ID", "User", "Email", "Plate", "Slot", "Start", "End", "Status", "Paid", "Amount", "Payment Status"],
        (
            [
                b.id,
                b.user.name if b.user else "",
                b.user.email if b.user else "",
                b.vehicle.plate_number if b.vehicle else "",
                b.slot.slot_number if b.slot else "",
                b.start_time.isoformat(),
                b.end_time.isoformat(),
                b.status.value,
                "yes" if b.is_paid else "no",
                b.payment.amount if b.payment else "",
                b.payment.status.value if b.payment else "",
            ]
            for b in bookings
        ),
    )
