# parking_api/services/ticket_service.py
"""PDF parking ticket for an approved booking, rendered with reportlab."""

import io

from reportlab.lib import colors
from reportlab.lib.pagesizes import A5
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from parking_api.config import settings
from parking_api.models.booking import Booking
from parking_api.services.pricing import billable_hours, format_amount

DATE_FMT = "%Y-%m-%d %H:%M UTC"


def ticket_filename(booking: Booking) -> str:
    return f"ticket-{booking.id}.pdf"


def ticket_lines(booking: Booking) -> list[tuple[str, str]]:
    slot = booking.slot
    payment = booking.payment
    return [
        ("Booking ID", str(booking.id)),
        ("Name", booking.user.name if booking.user else "-"),
        ("Email", booking.user.email if booking.user else "-"),
        ("Plate Number", booking.vehicle.plate_number if booking.vehicle else "-"),
        ("Parking Slot", slot.slot_number if slot else "-"),
        ("Slot Type", slot.type.value if slot else "-"),
        ("Parking", (slot.parking_name or "N/A") if slot else "-"),
        ("Location", (slot.location or "N/A") if slot else "-"),
        ("Start Time", booking.start_time.strftime(DATE_FMT)),
        ("End Time", booking.end_time.strftime(DATE_FMT)),
        ("Duration", f"{billable_hours(booking.start_time, booking.end_time)} hour(s)"),
        ("Amount", format_amount(payment.amount) if payment else "-"),
        ("Status", booking.status.value),
        ("Payment", payment.status.value if payment else "-"),
    ]


def render_ticket(booking: Booking) -> bytes:
    buffer = io.BytesIO()
    width, height = A5
    pdf = canvas.Canvas(buffer, pagesize=A5)
    pdf.setTitle(f"Parking Ticket {booking.id}")

    pdf.setFont("Helvetica-Bold", 18)
    pdf.drawCentredString(width / 2, height - 20 * mm, "Parking Ticket")
    pdf.setFont("Helvetica", 9)
    pdf.setFillColor(colors.grey)
    pdf.drawCentredString(width / 2, height - 27 * mm, settings.APP_NAME)
    pdf.setFillColor(colors.black)
    pdf.line(12 * mm, height - 31 * mm, width - 12 * mm, height - 31 * mm)

    y = height - 40 * mm
    for label, value in ticket_lines(booking):
        pdf.setFont("Helvetica-Bold", 10)
        pdf.drawString(14 * mm, y, f"{label}:")
        pdf.setFont("Helvetica", 10)
        pdf.drawString(50 * mm, y, value)
        y -= 7 * mm

    pdf.setFont("Helvetica-Oblique", 8)
    pdf.drawCentredString(width / 2, 12 * mm, "Present this ticket at the parking entrance.")
    pdf.showPage()
    pdf.save()
    return buffer.getvalue()
