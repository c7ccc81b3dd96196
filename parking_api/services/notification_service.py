# parking_api/services/notification_service.py
"""
Post-commit notifications. Never raises into the caller: the state change
that triggered a notification is already committed, so failures are logged
and reported back as an outcome value.

  - new booking  → admin notice, run as a FastAPI background task
  - approval     → PDF ticket mailed to the booking owner, inline
"""

import enum
from dataclasses import dataclass
from typing import List

from sqlalchemy.orm import Session

from parking_api.models.booking import Booking
from parking_api.models.enums import Role
from parking_api.models.user import User
from parking_api.services.mail_service import send_email
from parking_api.services.pricing import billable_hours, format_amount
from parking_api.services.ticket_service import render_ticket, ticket_filename
from parking_api.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class AdminNotice:
    """Plain data so the notice can outlive the request's DB session."""
    recipients: List[str]
    requester_name: str
    slot_number: str
    slot_type: str
    plate_number: str
    amount: str
    start_time: str
    end_time: str
    booking_id: str = ""


class TicketDelivery(str, enum.Enum):
    SENT = "sent"
    PDF_FAILED = "pdf_failed"
    MAIL_FAILED = "mail_failed"


def build_admin_notice(db: Session, booking: Booking) -> AdminNotice:
    admins = db.query(User.email).filter(User.role == Role.ADMIN).all()
    recipients = [row.email for row in admins]
    if not recipients:
        logger.warning("No admin emails found to notify")
    return AdminNotice(
        recipients=recipients,
        requester_name=booking.user.name,
        slot_number=booking.slot.slot_number,
        slot_type=booking.slot.type.value,
        plate_number=booking.vehicle.plate_number,
        amount=format_amount(booking.payment.amount),
        start_time=booking.start_time.isoformat(),
        end_time=booking.end_time.isoformat(),
        booking_id=str(booking.id),
    )


def notify_admins(notice: AdminNotice) -> bool:
    if not notice.recipients:
        return False
    html = f"""
        <h2>New Parking Slot Request</h2>
        <p>{notice.requester_name} requested a parking slot.</p>
        <ul>
          <li>Slot: {notice.slot_number} ({notice.slot_type})</li>
          <li>Plate Number: {notice.plate_number}</li>
          <li>From: {notice.start_time}</li>
          <li>To: {notice.end_time}</li>
          <li>Amount: {notice.amount}</li>
        </ul>
        <p>Booking {notice.booking_id} is waiting for approval.</p>
    """
    try:
        send_email(notice.recipients, "New Parking Slot Request", html)
        return True
    except Exception as e:
        logger.error(f"Failed to send admin notification for booking {notice.booking_id}: {e}", exc_info=True)
        return False


def _ticket_html(booking: Booking) -> str:
    return f"""
        <h2>Your Parking Booking</h2>
        <p>Dear {booking.user.name},</p>
        <p>Your booking has been approved. Please find your ticket attached.</p>
        <ul>
          <li>Plate Number: {booking.vehicle.plate_number}</li>
          <li>Parking Slot: {booking.slot.slot_number}</li>
          <li>Start Time: {booking.start_time:%Y-%m-%d %H:%M} UTC</li>
          <li>End Time: {booking.end_time:%Y-%m-%d %H:%M} UTC</li>
          <li>Duration: {billable_hours(booking.start_time, booking.end_time)} hour(s)</li>
          <li>Amount: {format_amount(booking.payment.amount)}</li>
        </ul>
        <p>Best regards,<br>Parking Management Team</p>
    """


def send_ticket(booking: Booking) -> TicketDelivery:
    """Render the ticket and mail it to the booking owner. One attempt, no retry."""
    try:
        pdf = render_ticket(booking)
    except Exception as e:
        logger.error(f"Failed to generate PDF for booking {booking.id}: {e}", exc_info=True)
        return TicketDelivery.PDF_FAILED

    # send_email returns False when mail is disabled; only a raised error is a failure
    try:
        send_email(
            [booking.user.email],
            "Your Parking Ticket",
            _ticket_html(booking),
            attachments=[(ticket_filename(booking), pdf, "application/pdf")],
        )
    except Exception as e:
        logger.error(f"Failed to send ticket for booking {booking.id}: {e}", exc_info=True)
        return TicketDelivery.MAIL_FAILED
    return TicketDelivery.SENT
