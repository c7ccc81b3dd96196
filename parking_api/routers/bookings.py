# parking_api/routers/bookings.py
"""
Booking lifecycle endpoints.
POST /bookings                  — reserve a slot (admins are notified in the background)
PUT  /bookings/{id}/approve     — admin approval; mails the PDF ticket
PUT  /bookings/{id}             — status change (owner: cancel only; admin: any)
PUT  /bookings/{id}/cancel|complete|pay
GET  /bookings/{id}/pdf         — ticket download
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from parking_api.database import get_db
from parking_api.dependencies import PageParams, get_current_user, page_params, require_admin
from parking_api.models.enums import BookingStatus
from parking_api.models.user import User
from parking_api.schemas.booking import ApprovalOut, BookingCreate, BookingOut, BookingStatusUpdate
from parking_api.schemas.common import Page
from parking_api.services import booking_service, notification_service
from parking_api.services.notification_service import TicketDelivery
from parking_api.services.ticket_service import render_ticket, ticket_filename
from parking_api.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)

APPROVAL_MESSAGES = {
    TicketDelivery.SENT: "Booking approved and ticket sent",
    TicketDelivery.PDF_FAILED: "Booking approved, but failed to generate PDF",
    TicketDelivery.MAIL_FAILED: "Booking approved, but failed to send email",
}


@router.post("/bookings", response_model=BookingOut, status_code=status.HTTP_201_CREATED,
             summary="Create a booking")
def create_booking(body: BookingCreate, background_tasks: BackgroundTasks,
                   current_user: User = Depends(get_current_user),
                   db: Session = Depends(get_db)):
    booking = booking_service.create_booking(db, current_user, body)
    # Collected now; the DB session is gone by the time background tasks run
    notice = notification_service.build_admin_notice(db, booking)
    background_tasks.add_task(notification_service.notify_admins, notice)
    return booking


@router.get("/bookings", response_model=Page[BookingOut], summary="List bookings")
def list_bookings(status: Optional[BookingStatus] = None,
                  paging: PageParams = Depends(page_params),
                  current_user: User = Depends(get_current_user),
                  db: Session = Depends(get_db)):
    """Admins see every booking; users see their own."""
    return booking_service.list_bookings(db, current_user, paging.page, paging.limit, status)


@router.get("/bookings/{booking_id}", response_model=BookingOut)
def get_booking(booking_id: UUID,
                current_user: User = Depends(get_current_user),
                db: Session = Depends(get_db)):
    return booking_service.get_booking_for(db, current_user, booking_id)


@router.put("/bookings/{booking_id}", response_model=BookingOut, summary="Update booking status")
def update_booking(booking_id: UUID, body: BookingStatusUpdate,
                   current_user: User = Depends(get_current_user),
                   db: Session = Depends(get_db)):
    return booking_service.update_status(db, current_user, booking_id, body.status)


@router.put("/bookings/{booking_id}/cancel", response_model=BookingOut)
def cancel_booking(booking_id: UUID,
                   current_user: User = Depends(get_current_user),
                   db: Session = Depends(get_db)):
    return booking_service.cancel_booking(db, current_user, booking_id)


@router.put("/bookings/{booking_id}/approve", response_model=ApprovalOut, summary="Approve and send ticket")
def approve_booking(booking_id: UUID,
                    admin: User = Depends(require_admin),
                    db: Session = Depends(get_db)):
    """
    The approval is committed before the ticket is rendered and mailed.
    A ticket failure answers 500 but still carries the approved booking.
    """
    booking = booking_service.approve_booking(db, admin, booking_id)
    delivery = notification_service.send_ticket(booking)
    body = ApprovalOut(message=APPROVAL_MESSAGES[delivery], booking=BookingOut.model_validate(booking))
    if delivery is not TicketDelivery.SENT:
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=jsonable_encoder(body))
    return body


@router.put("/bookings/{booking_id}/complete", response_model=BookingOut)
def complete_booking(booking_id: UUID,
                     current_user: User = Depends(get_current_user),
                     db: Session = Depends(get_db)):
    return booking_service.complete_booking(db, current_user, booking_id)


@router.put("/bookings/{booking_id}/pay", response_model=BookingOut)
def pay_booking(booking_id: UUID,
                current_user: User = Depends(get_current_user),
                db: Session = Depends(get_db)):
    return booking_service.pay_booking(db, current_user, booking_id)


@router.get("/bookings/{booking_id}/pdf", summary="Download the booking ticket")
def download_booking_pdf(booking_id: UUID,
                         current_user: User = Depends(get_current_user),
                         db: Session = Depends(get_db)):
    booking = booking_service.get_booking_for(db, current_user, booking_id)
    return Response(
        content=render_ticket(booking),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{ticket_filename(booking)}"'},
    )
