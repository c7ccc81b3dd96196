# parking_api/routers/admin.py
"""Admin console: dashboard, user/booking listings, CSV exports, audit log."""

from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from parking_api.database import get_db
from parking_api.dependencies import PageParams, page_params, require_admin
from parking_api.models.enums import BookingStatus, Role
from parking_api.models.user import User
from parking_api.schemas.admin import AdminUserOut, DashboardStatsOut
from parking_api.schemas.booking import BookingOut, BookingStatusUpdate
from parking_api.schemas.common import Page
from parking_api.schemas.log import LogOut
from parking_api.schemas.vehicle_entry import VehicleEntryOut
from parking_api.services import admin_service, audit_service, booking_service, entry_exit_service, export_service

router = APIRouter(prefix="/admin")


def _csv_response(content: str, stem: str) -> Response:
    filename = f"{stem}-{date.today().isoformat()}.csv"
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/dashboard", response_model=DashboardStatsOut, summary="Dashboard counters")
def dashboard(admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    return admin_service.dashboard_stats(db)


@router.get("/users", response_model=Page[AdminUserOut])
def list_users(name: Optional[str] = None, email: Optional[str] = None,
               plate_number: Optional[str] = None, role: Optional[Role] = None,
               paging: PageParams = Depends(page_params),
               admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    return admin_service.list_users(db, paging.page, paging.limit, name, email, plate_number, role)


@router.get("/users/export", summary="Download users as CSV")
def export_users(admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    return _csv_response(export_service.export_users_csv(db), "users")


@router.get("/users/{user_id}/vehicle-entries", response_model=List[VehicleEntryOut])
def user_vehicle_entries(user_id: UUID, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    return entry_exit_service.list_entries_for_user(db, user_id)


@router.get("/bookings", response_model=Page[BookingOut])
def list_bookings(status: Optional[BookingStatus] = None,
                  paging: PageParams = Depends(page_params),
                  admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    return admin_service.list_bookings(db, paging.page, paging.limit, status)


@router.get("/bookings/export", summary="Download bookings as CSV")
def export_bookings(admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    return _csv_response(export_service.export_bookings_csv(db), "bookings")


@router.put("/bookings/{booking_id}/status", response_model=BookingOut)
def update_booking_status(booking_id: UUID, body: BookingStatusUpdate,
                          admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    return booking_service.update_status(db, admin, booking_id, body.status)


@router.get("/logs", response_model=Page[LogOut], summary="Audit log")
def list_logs(action: Optional[str] = None,
              paging: PageParams = Depends(page_params),
              admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    return audit_service.list_logs(db, paging.page, paging.limit, action)
