# tests/test_notification_service.py
"""Ticket delivery and admin notices never raise into the caller."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import uuid
from unittest.mock import MagicMock, patch
from datetime import datetime
from parking_api.models.enums import BookingStatus, PaymentStatus, SlotType
from parking_api.services import notification_service
from parking_api.services.notification_service import AdminNotice, TicketDelivery
from parking_api.services.ticket_service import render_ticket, ticket_lines

SERVICE = "parking_api.services.notification_service"


def make_booking():
    booking = MagicMock()
    booking.id = uuid.uuid4()
    booking.start_time = datetime(2030, 1, 1, 10, 0)
    booking.end_time = datetime(2030, 1, 1, 12, 0)
    booking.status = BookingStatus.APPROVED
    booking.user.name = "Driver One"
    booking.user.email = "driver@parking.com"
    booking.vehicle.plate_number = "RAB123A"
    booking.slot.slot_number = "A1"
    booking.slot.type = SlotType.REGULAR
    booking.slot.parking_name = None
    booking.slot.location = "Level 1"
    booking.payment.amount = 4000
    booking.payment.status = PaymentStatus.PENDING
    return booking


def make_notice(recipients=("admin@parking.com",)):
    return AdminNotice(
        recipients=list(recipients), requester_name="Driver One", slot_number="A1", slot_type="REGULAR",
        plate_number="RAB123A", amount="4,000 RWF", start_time="2030-01-01T10:00:00",
        end_time="2030-01-01T12:00:00", booking_id="b-1",
    )


class TestSendTicket:
    def test_ticket_is_mailed_to_owner_with_pdf(self):
        booking = make_booking()
        with patch(f"{SERVICE}.render_ticket", return_value=b"%PDF-1.4"), \
             patch(f"{SERVICE}.send_email") as mock_send:
            assert notification_service.send_ticket(booking) is TicketDelivery.SENT

        recipients, subject, html = mock_send.call_args.args
        assert recipients == ["driver@parking.com"]
        assert "RAB123A" in html and "4,000 RWF" in html and "2 hour(s)" in html
        filename, content, mime = mock_send.call_args.kwargs["attachments"][0]
        assert filename == f"ticket-{booking.id}.pdf"
        assert content == b"%PDF-1.4"
        assert mime == "application/pdf"

    def test_pdf_failure_skips_mail(self):
        with patch(f"{SERVICE}.render_ticket", side_effect=RuntimeError("font missing")), \
             patch(f"{SERVICE}.send_email") as mock_send:
            assert notification_service.send_ticket(make_booking()) is TicketDelivery.PDF_FAILED
        mock_send.assert_not_called()

    def test_mail_failure_is_reported(self):
        with patch(f"{SERVICE}.render_ticket", return_value=b"%PDF"), \
             patch(f"{SERVICE}.send_email", side_effect=OSError("connection refused")):
            assert notification_service.send_ticket(make_booking()) is TicketDelivery.MAIL_FAILED


class TestAdminNotice:
    def test_notice_sent_to_all_admins(self):
        with patch(f"{SERVICE}.send_email") as mock_send:
            assert notification_service.notify_admins(make_notice(["a@parking.com", "b@parking.com"])) is True
        assert mock_send.call_args.args[0] == ["a@parking.com", "b@parking.com"]
        assert mock_send.call_args.args[1] == "New Parking Slot Request"

    def test_no_admins_means_no_mail(self):
        with patch(f"{SERVICE}.send_email") as mock_send:
            assert notification_service.notify_admins(make_notice([])) is False
        mock_send.assert_not_called()

    def test_mail_error_is_swallowed(self):
        with patch(f"{SERVICE}.send_email", side_effect=OSError("timeout")):
            assert notification_service.notify_admins(make_notice()) is False


class TestTicketRendering:
    def test_lines_carry_booking_details(self):
        lines = dict(ticket_lines(make_booking()))
        assert lines["Plate Number"] == "RAB123A"
        assert lines["Parking"] == "N/A"
        assert lines["Location"] == "Level 1"
        assert lines["Duration"] == "2 hour(s)"
        assert lines["Amount"] == "4,000 RWF"

    def test_renders_pdf_bytes(self):
        booking = make_booking()
        pdf = render_ticket(booking)
        assert pdf.startswith(b"%PDF")


class TestMailDisabled:
    def test_disabled_mail_counts_as_sent(self):
        # MAIL_ENABLED is off in tests: send_email logs and returns False without raising
        with patch(f"{SERVICE}.render_ticket", return_value=b"%PDF"):
            assert notification_service.send_ticket(make_booking()) is TicketDelivery.SENT
