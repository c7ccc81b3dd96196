# parking_api/services/vehicle_service.py
"""
Vehicle registry helpers.
Used by the vehicles router, booking_service (ownership) and
entry_exit_service (plate lookup).
"""

from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from parking_api.exceptions import Conflict, NotFound, PermissionDenied
from parking_api.models.booking import Booking
from parking_api.models.user import User
from parking_api.models.vehicle import Vehicle
from parking_api.schemas.vehicle import VehicleCreate, VehicleUpdate
from parking_api.services.audit_service import record_action
from parking_api.utils.logger import get_logger
from parking_api.utils.pagination import paginate

logger = get_logger(__name__)


def lookup_vehicle_by_plate(db: Session, plate_number: str) -> Optional[Vehicle]:
    """Find a registered vehicle by plate number. Returns None if not found."""
    return db.query(Vehicle).filter(Vehicle.plate_number == plate_number).first()


def is_registered(db: Session, plate_number: str) -> bool:
    """Check if a plate number is registered in the system."""
    return lookup_vehicle_by_plate(db, plate_number) is not None


def register_vehicle(db: Session, user: User, body: VehicleCreate) -> Vehicle:
    if is_registered(db, body.plate_number):
        raise Conflict(f"Plate {body.plate_number} already registered")
    vehicle = Vehicle(user_id=user.id, **body.model_dump())
    db.add(vehicle)
    db.flush()
    record_action(db, "VEHICLE_REGISTERED", {"vehicle_id": vehicle.id, "plate_number": vehicle.plate_number}, user.id)
    db.commit()
    db.refresh(vehicle)
    return vehicle


def list_vehicles(db: Session, user: User, page: int, limit: int, plate_number: Optional[str] = None) -> dict:
    q = db.query(Vehicle)
    if not user.is_admin:
        q = q.filter(Vehicle.user_id == user.id)
    if plate_number:
        q = q.filter(Vehicle.plate_number.ilike(f"%{plate_number}%"))
    return paginate(q.order_by(Vehicle.created_at.desc()), page, limit)


def get_vehicle_for(db: Session, user: User, vehicle_id: UUID) -> Vehicle:
    vehicle = db.query(Vehicle).filter(Vehicle.id == vehicle_id).first()
    if not vehicle:
        raise NotFound("Vehicle not found")
    if vehicle.user_id != user.id and not user.is_admin:
        raise PermissionDenied("Not authorized to access this vehicle")
    return vehicle


def update_vehicle(db: Session, user: User, vehicle_id: UUID, body: VehicleUpdate) -> Vehicle:
    vehicle = get_vehicle_for(db, user, vehicle_id)
    changes = body.model_dump(exclude_unset=True)
    plate = changes.get("plate_number")
    if plate and plate != vehicle.plate_number and is_registered(db, plate):
        raise Conflict(f"Plate {plate} already registered")
    previous_plate = vehicle.plate_number
    for field, value in changes.items():
        setattr(vehicle, field, value)
    record_action(db, "VEHICLE_UPDATED", {
        "vehicle_id": vehicle.id, "plate_number": vehicle.plate_number,
        "previous_plate": previous_plate, "changes": sorted(changes),
    }, user.id)
    db.commit()
    db.refresh(vehicle)
    return vehicle


def delete_vehicle(db: Session, user: User, vehicle_id: UUID) -> None:
    vehicle = get_vehicle_for(db, user, vehicle_id)
    # Bookings keep a hard reference to their vehicle
    if db.query(Booking).filter(Booking.vehicle_id == vehicle.id).count():
        raise Conflict("Cannot delete vehicle with existing bookings")
    record_action(db, "VEHICLE_REMOVED", {"vehicle_id": vehicle.id, "plate_number": vehicle.plate_number}, user.id)
    db.delete(vehicle)
    db.commit()
