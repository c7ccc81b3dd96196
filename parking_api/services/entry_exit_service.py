# parking_api/services/entry_exit_service.py
"""
Walk-in parking sessions (no reservation).

How it works:
  - Gate operator registers an ENTRY by plate → plate must belong to a registered
    vehicle; an 8-char parking code is issued and the session is left open
  - Gate operator registers the EXIT by entry id → exit time and charge are
    written once; a second exit on the same entry is rejected
  - Both actions are written to the audit log
"""

import secrets
from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from parking_api.exceptions import Conflict, NotFound, ValidationFailed
from parking_api.models.user import User
from parking_api.models.vehicle_entry import VehicleEntry
from parking_api.services.audit_service import record_action
from parking_api.services.pricing import entry_charge
from parking_api.services.vehicle_service import lookup_vehicle_by_plate
from parking_api.utils.logger import get_logger

logger = get_logger(__name__)


def generate_parking_code() -> str:
    """4 random bytes as uppercase hex, e.g. '9F03A1C2'."""
    return secrets.token_hex(4).upper()


def register_entry(db: Session, plate_number: Optional[str], operator: User) -> VehicleEntry:
    plate = (plate_number or "").strip().upper()
    if not plate:
        raise ValidationFailed("Plate number is required")

    vehicle = lookup_vehicle_by_plate(db, plate)
    if not vehicle:
        logger.warning(f"[ENTRY] Unregistered plate {plate} refused")
        raise NotFound("Vehicle not found")

    entry = VehicleEntry(
        plate_number=plate,
        parking_code=generate_parking_code(),
        entry_time=datetime.utcnow(),
        vehicle_id=vehicle.id,
        user_id=vehicle.user_id,
    )
    db.add(entry)
    db.flush()
    record_action(db, "VEHICLE_ENTRY_REGISTERED", {
        "entry_id": entry.id, "plate_number": plate, "parking_code": entry.parking_code,
    }, operator.id)
    db.commit()
    db.refresh(entry)
    logger.info(f"[ENTRY] Plate={plate} code={entry.parking_code}")
    return entry


def register_exit(db: Session, entry_id: UUID, operator: User,
                  exit_time: Optional[datetime] = None) -> VehicleEntry:
    entry = (
        db.query(VehicleEntry)
        .filter(VehicleEntry.id == entry_id)
        .with_for_update()
        .first()
    )
    if not entry:
        raise NotFound("Vehicle entry not found")
    if entry.exit_time is not None:
        raise Conflict("Vehicle already exited")

    exit_time = exit_time or datetime.utcnow()
    charged = entry_charge(entry.entry_time, exit_time)
    entry.exit_time = exit_time
    entry.charged_amount = charged

    record_action(db, "VEHICLE_EXIT_UPDATED", {
        "entry_id": entry.id, "plate_number": entry.plate_number, "charged_amount": charged,
    }, operator.id)
    db.commit()
    db.refresh(entry)
    minutes = int((exit_time - entry.entry_time).total_seconds() // 60)
    logger.info(f"[EXIT] Plate={entry.plate_number} parked {minutes} min, charged {charged}")
    return entry


def list_entries_for_user(db: Session, user_id: UUID) -> list[VehicleEntry]:
    return (
        db.query(VehicleEntry)
        .filter(VehicleEntry.user_id == user_id)
        .order_by(VehicleEntry.entry_time.desc())
        .all()
    )
