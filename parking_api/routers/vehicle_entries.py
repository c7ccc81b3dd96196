# parking_api/routers/vehicle_entries.py
"""Walk-in entry/exit endpoints, used by the gate operator."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from parking_api.database import get_db
from parking_api.dependencies import get_current_user
from parking_api.models.user import User
from parking_api.schemas.vehicle_entry import VehicleEntryCreate, VehicleEntryOut
from parking_api.services import entry_exit_service

router = APIRouter()


@router.post("/vehicle-entries", response_model=VehicleEntryOut, status_code=status.HTTP_201_CREATED,
             summary="Register a vehicle entry")
def register_vehicle_entry(body: VehicleEntryCreate,
                           current_user: User = Depends(get_current_user),
                           db: Session = Depends(get_db)):
    return entry_exit_service.register_entry(db, body.plate_number, current_user)


@router.put("/vehicle-entries/{entry_id}/exit", response_model=VehicleEntryOut,
            summary="Register the exit and charge the stay")
def update_vehicle_exit(entry_id: UUID,
                        current_user: User = Depends(get_current_user),
                        db: Session = Depends(get_db)):
    return entry_exit_service.register_exit(db, entry_id, current_user)
