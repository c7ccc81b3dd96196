# parking_api/routers/vehicles.py
"""Vehicle registry: users manage their own vehicles, admins see all."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from parking_api.database import get_db
from parking_api.dependencies import PageParams, get_current_user, page_params
from parking_api.models.user import User
from parking_api.schemas.common import Page
from parking_api.schemas.vehicle import VehicleCreate, VehicleOut, VehicleUpdate
from parking_api.services import vehicle_service

router = APIRouter()


@router.get("/vehicles", response_model=Page[VehicleOut], summary="List vehicles")
def list_vehicles(plate_number: Optional[str] = None,
                  paging: PageParams = Depends(page_params),
                  current_user: User = Depends(get_current_user),
                  db: Session = Depends(get_db)):
    return vehicle_service.list_vehicles(db, current_user, paging.page, paging.limit, plate_number)


@router.post("/vehicles", response_model=VehicleOut, status_code=status.HTTP_201_CREATED,
             summary="Register a new vehicle")
def register_vehicle(body: VehicleCreate,
                     current_user: User = Depends(get_current_user),
                     db: Session = Depends(get_db)):
    return vehicle_service.register_vehicle(db, current_user, body)


@router.get("/vehicles/{vehicle_id}", response_model=VehicleOut)
def get_vehicle(vehicle_id: UUID,
                current_user: User = Depends(get_current_user),
                db: Session = Depends(get_db)):
    return vehicle_service.get_vehicle_for(db, current_user, vehicle_id)


@router.put("/vehicles/{vehicle_id}", response_model=VehicleOut)
def update_vehicle(vehicle_id: UUID, body: VehicleUpdate,
                   current_user: User = Depends(get_current_user),
                   db: Session = Depends(get_db)):
    return vehicle_service.update_vehicle(db, current_user, vehicle_id, body)


@router.delete("/vehicles/{vehicle_id}", summary="Remove a vehicle")
def remove_vehicle(vehicle_id: UUID,
                   current_user: User = Depends(get_current_user),
                   db: Session = Depends(get_db)):
    vehicle_service.delete_vehicle(db, current_user, vehicle_id)
    return {"message": "Vehicle removed"}
