# tests/test_booking_service.py
"""Booking lifecycle against a real (SQLite) session."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import datetime, timedelta
from uuid import uuid4
from parking_api.exceptions import Conflict, NotFound, PermissionDenied
from parking_api.models.enums import BookingStatus, PaymentStatus
from parking_api.models.log import Log
from parking_api.schemas.booking import BookingCreate
from parking_api.services import booking_service
from conftest import make_booking, make_slot, make_vehicle

T10 = datetime(2030, 1, 1, 10, 0)


def hours(n):
    return T10 + timedelta(hours=n)


def request(slot, vehicle, start, end):
    return BookingCreate(slot_id=slot.id, vehicle_id=vehicle.id, start_time=start, end_time=end)


class TestCreateBooking:
    def test_reservation_is_priced_and_pending(self, db_session, driver, vehicle, slot):
        booking = booking_service.create_booking(db_session, driver, request(slot, vehicle, T10, hours(2)))

        assert booking.status == BookingStatus.PENDING
        assert booking.is_paid is False
        assert booking.payment.amount == 4000
        assert booking.payment.status == PaymentStatus.PENDING
        assert booking.payment.user_id == driver.id
        hold = booking.expires_at - datetime.utcnow()
        assert timedelta(hours=1, minutes=59) < hold <= timedelta(hours=2)

    def test_overlapping_request_is_rejected(self, db_session, driver, vehicle, slot):
        booking_service.create_booking(db_session, driver, request(slot, vehicle, T10, hours(2)))

        with pytest.raises(Conflict, match="already booked"):
            booking_service.create_booking(db_session, driver, request(slot, vehicle, hours(1), hours(3)))

    def test_back_to_back_windows_do_not_overlap(self, db_session, driver, vehicle, slot):
        booking_service.create_booking(db_session, driver, request(slot, vehicle, T10, hours(2)))
        second = booking_service.create_booking(db_session, driver, request(slot, vehicle, hours(2), hours(4)))
        assert second.status == BookingStatus.PENDING

    @pytest.mark.parametrize("status", [BookingStatus.CANCELLED, BookingStatus.REJECTED, BookingStatus.COMPLETED])
    def test_finished_bookings_release_the_window(self, db_session, driver, vehicle, slot, status):
        make_booking(db_session, driver, vehicle, slot, T10, hours(2), status=status)
        booking = booking_service.create_booking(db_session, driver, request(slot, vehicle, T10, hours(2)))
        assert booking.status == BookingStatus.PENDING

    def test_other_slots_are_independent(self, db_session, driver, vehicle, slot):
        other = make_slot(db_session, "B2")
        booking_service.create_booking(db_session, driver, request(slot, vehicle, T10, hours(2)))
        booking = booking_service.create_booking(db_session, driver, request(other, vehicle, T10, hours(2)))
        assert booking.slot_id == other.id

    def test_missing_slot(self, db_session, driver, vehicle, slot):
        body = BookingCreate(slot_id=uuid4(), vehicle_id=vehicle.id, start_time=T10, end_time=hours(1))
        with pytest.raises(NotFound, match="Parking slot"):
            booking_service.create_booking(db_session, driver, body)

    def test_unavailable_slot(self, db_session, driver, vehicle):
        closed = make_slot(db_session, "C1", available=False)
        with pytest.raises(Conflict, match="not available"):
            booking_service.create_booking(db_session, driver, request(closed, vehicle, T10, hours(1)))

    def test_slot_without_spaces(self, db_session, driver, vehicle):
        full = make_slot(db_session, "C2", spaces=0)
        with pytest.raises(Conflict, match="not available"):
            booking_service.create_booking(db_session, driver, request(full, vehicle, T10, hours(1)))

    def test_vehicle_must_belong_to_requester(self, db_session, driver, other_driver, slot):
        foreign = make_vehicle(db_session, other_driver, plate="RAC999Z")
        with pytest.raises(PermissionDenied):
            booking_service.create_booking(db_session, driver, request(slot, foreign, T10, hours(1)))

    def test_creation_is_audited(self, db_session, driver, vehicle, slot):
        booking = booking_service.create_booking(db_session, driver, request(slot, vehicle, T10, hours(1)))
        log = db_session.query(Log).filter(Log.action == "BOOKING_CREATED").one()
        assert log.details["booking_id"] == str(booking.id)
        assert log.user_id == driver.id


class TestTransitions:
    def test_owner_cancels_pending(self, db_session, driver, vehicle, slot):
        booking = make_booking(db_session, driver, vehicle, slot, T10, hours(1))
        updated = booking_service.cancel_booking(db_session, driver, booking.id)
        assert updated.status == BookingStatus.CANCELLED

    def test_owner_cannot_cancel_approved(self, db_session, driver, vehicle, slot):
        booking = make_booking(db_session, driver, vehicle, slot, T10, hours(1), status=BookingStatus.APPROVED)
        with pytest.raises(Conflict, match="Only pending"):
            booking_service.cancel_booking(db_session, driver, booking.id)

    def test_owner_may_only_cancel(self, db_session, driver, vehicle, slot):
        booking = make_booking(db_session, driver, vehicle, slot, T10, hours(1))
        with pytest.raises(PermissionDenied, match="only cancel"):
            booking_service.update_status(db_session, driver, booking.id, BookingStatus.APPROVED)

    def test_stranger_cannot_cancel(self, db_session, driver, other_driver, vehicle, slot):
        booking = make_booking(db_session, driver, vehicle, slot, T10, hours(1))
        with pytest.raises(PermissionDenied):
            booking_service.cancel_booking(db_session, other_driver, booking.id)

    @pytest.mark.parametrize("target", [BookingStatus.CANCELLED, BookingStatus.REJECTED])
    def test_admin_cancel_or_reject_refunds_paid(self, db_session, admin, driver, vehicle, slot, target):
        booking = make_booking(db_session, driver, vehicle, slot, T10, hours(1),
                               status=BookingStatus.APPROVED, payment_status=PaymentStatus.PAID)
        updated = booking_service.update_status(db_session, admin, booking.id, target)
        assert updated.status == target
        assert updated.payment.status == PaymentStatus.REFUNDED
        assert db_session.query(Log).filter(Log.action == "PAYMENT_REFUNDED").count() == 1

    @pytest.mark.parametrize("target", [BookingStatus.PENDING, BookingStatus.APPROVED])
    def test_reactivation_rechecks_overlap(self, db_session, admin, driver, vehicle, slot, target):
        cancelled = make_booking(db_session, driver, vehicle, slot, T10, hours(2), status=BookingStatus.CANCELLED)
        make_booking(db_session, driver, vehicle, slot, hours(1), hours(3))

        with pytest.raises(Conflict, match="already booked"):
            booking_service.update_status(db_session, admin, cancelled.id, target)

        db_session.refresh(cancelled)
        assert cancelled.status == BookingStatus.CANCELLED
        active = booking_service.overlapping_bookings(db_session, T10, hours(3)).filter_by(slot_id=slot.id).count()
        assert active == 1

    def test_reactivation_allowed_when_window_is_free(self, db_session, admin, driver, vehicle, slot):
        rejected = make_booking(db_session, driver, vehicle, slot, T10, hours(2), status=BookingStatus.REJECTED)
        make_booking(db_session, driver, vehicle, slot, hours(2), hours(3))
        updated = booking_service.update_status(db_session, admin, rejected.id, BookingStatus.APPROVED)
        assert updated.status == BookingStatus.APPROVED

    def test_active_to_active_does_not_conflict_with_itself(self, db_session, admin, driver, vehicle, slot):
        booking = make_booking(db_session, driver, vehicle, slot, T10, hours(2))
        updated = booking_service.update_status(db_session, admin, booking.id, BookingStatus.APPROVED)
        assert updated.status == BookingStatus.APPROVED

    def test_reactivation_needs_a_slot(self, db_session, admin, driver, vehicle, slot):
        booking = make_booking(db_session, driver, vehicle, slot, T10, hours(2), status=BookingStatus.COMPLETED)
        booking.slot_id = None
        db_session.commit()
        with pytest.raises(Conflict, match="no longer exists"):
            booking_service.update_status(db_session, admin, booking.id, BookingStatus.PENDING)

    def test_unpaid_rejection_leaves_payment_pending(self, db_session, admin, driver, vehicle, slot):
        booking = make_booking(db_session, driver, vehicle, slot, T10, hours(1))
        updated = booking_service.update_status(db_session, admin, booking.id, BookingStatus.REJECTED)
        assert updated.payment.status == PaymentStatus.PENDING

    def test_approve_requires_pending(self, db_session, admin, driver, vehicle, slot):
        booking = make_booking(db_session, driver, vehicle, slot, T10, hours(1))
        assert booking_service.approve_booking(db_session, admin, booking.id).status == BookingStatus.APPROVED
        with pytest.raises(Conflict, match="PENDING"):
            booking_service.approve_booking(db_session, admin, booking.id)

    def test_approve_is_admin_only(self, db_session, driver, vehicle, slot):
        booking = make_booking(db_session, driver, vehicle, slot, T10, hours(1))
        with pytest.raises(PermissionDenied):
            booking_service.approve_booking(db_session, driver, booking.id)

    def test_complete_requires_approved(self, db_session, driver, vehicle, slot):
        booking = make_booking(db_session, driver, vehicle, slot, T10, hours(1))
        with pytest.raises(Conflict, match="approved"):
            booking_service.complete_booking(db_session, driver, booking.id)

        booking.status = BookingStatus.APPROVED
        db_session.commit()
        assert booking_service.complete_booking(db_session, driver, booking.id).status == BookingStatus.COMPLETED

    def test_complete_is_owner_only(self, db_session, admin, driver, vehicle, slot):
        booking = make_booking(db_session, driver, vehicle, slot, T10, hours(1), status=BookingStatus.APPROVED)
        with pytest.raises(PermissionDenied):
            booking_service.complete_booking(db_session, admin, booking.id)

    def test_pay_once(self, db_session, driver, vehicle, slot):
        booking = make_booking(db_session, driver, vehicle, slot, T10, hours(1), status=BookingStatus.APPROVED)
        paid = booking_service.pay_booking(db_session, driver, booking.id)
        assert paid.is_paid is True
        assert paid.payment.status == PaymentStatus.PAID

        with pytest.raises(Conflict, match="already paid"):
            booking_service.pay_booking(db_session, driver, booking.id)

    def test_pay_requires_approval(self, db_session, driver, vehicle, slot):
        booking = make_booking(db_session, driver, vehicle, slot, T10, hours(1))
        with pytest.raises(Conflict, match="approved"):
            booking_service.pay_booking(db_session, driver, booking.id)

    def test_unknown_booking(self, db_session, admin):
        with pytest.raises(NotFound):
            booking_service.update_status(db_session, admin, uuid4(), BookingStatus.REJECTED)
