# parking_api/routers/parking_slots.py
"""
Parking slot inventory.
Reads are open to any signed-in user; create/update/delete are admin-only.
GET /parking-slots/available answers "what can I book for this window".
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from parking_api.database import get_db
from parking_api.dependencies import PageParams, get_current_user, page_params, require_admin
from parking_api.models.enums import SlotSize, SlotType, VehicleType
from parking_api.models.user import User
from parking_api.schemas.common import MessageOut, Page
from parking_api.schemas.parking_slot import (
    ParkingSlotCreate,
    ParkingSlotResponse,
    ParkingSlotUpdate,
    SlotFilters,
)
from parking_api.schemas.timestamps import to_naive_utc
from parking_api.services import slot_service

router = APIRouter()


def slot_filters(
    type: Optional[SlotType] = None,
    size: Optional[SlotSize] = None,
    vehicle_type: Optional[VehicleType] = None,
    is_available: Optional[bool] = None,
    slot_number: Optional[str] = None,
    parking_name: Optional[str] = None,
    location: Optional[str] = None,
) -> SlotFilters:
    return SlotFilters(type=type, size=size, vehicle_type=vehicle_type, is_available=is_available,
                       slot_number=slot_number, parking_name=parking_name, location=location)


@router.get("/parking-slots", response_model=Page[ParkingSlotResponse], summary="List parking slots")
def list_parking_slots(filters: SlotFilters = Depends(slot_filters),
                       paging: PageParams = Depends(page_params),
                       current_user: User = Depends(get_current_user),
                       db: Session = Depends(get_db)):
    return slot_service.list_slots(db, filters, paging.page, paging.limit)


@router.get("/parking-slots/available", response_model=List[ParkingSlotResponse],
            summary="Slots free for a time window")
def available_parking_slots(start_time: datetime = Query(...),
                            end_time: datetime = Query(...),
                            filters: SlotFilters = Depends(slot_filters),
                            current_user: User = Depends(get_current_user),
                            db: Session = Depends(get_db)):
    return slot_service.available_slots(db, to_naive_utc(start_time), to_naive_utc(end_time), filters)


@router.get("/parking-slots/{slot_id}", response_model=ParkingSlotResponse)
def get_parking_slot(slot_id: UUID,
                     current_user: User = Depends(get_current_user),
                     db: Session = Depends(get_db)):
    return slot_service.get_slot(db, slot_id)


@router.post("/parking-slots", response_model=ParkingSlotResponse, status_code=status.HTTP_201_CREATED)
def create_parking_slot(body: ParkingSlotCreate,
                        admin: User = Depends(require_admin),
                        db: Session = Depends(get_db)):
    return slot_service.create_slot(db, body, admin.id)


@router.put("/parking-slots/{slot_id}", response_model=ParkingSlotResponse)
def update_parking_slot(slot_id: UUID, body: ParkingSlotUpdate,
                        admin: User = Depends(require_admin),
                        db: Session = Depends(get_db)):
    return slot_service.update_slot(db, slot_id, body, admin.id)


@router.delete("/parking-slots/{slot_id}", response_model=MessageOut)
def delete_parking_slot(slot_id: UUID,
                        admin: User = Depends(require_admin),
                        db: Session = Depends(get_db)):
    slot_service.delete_slot(db, slot_id, admin.id)
    return {"message": "Parking slot deleted successfully"}
