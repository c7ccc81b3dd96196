# parking_api/models/enums.py
"""Closed enumerations shared by models and schemas. Stored by value."""

import enum


class Role(str, enum.Enum):
    ADMIN = "ADMIN"
    USER = "USER"


class VerificationStatus(str, enum.Enum):
    PENDING = "PENDING"
    VERIFIED = "VERIFIED"


class SlotType(str, enum.Enum):
    REGULAR = "REGULAR"
    VIP = "VIP"


class SlotSize(str, enum.Enum):
    SMALL = "SMALL"
    MEDIUM = "MEDIUM"
    LARGE = "LARGE"


class VehicleType(str, enum.Enum):
    CAR = "CAR"
    BIKE = "BIKE"
    MOTORCYCLE = "MOTORCYCLE"
    TRUCK = "TRUCK"


class BookingStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    REJECTED = "REJECTED"


class PaymentStatus(str, enum.Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    REFUNDED = "REFUNDED"


# Bookings in these states hold their slot for [start_time, end_time)
ACTIVE_BOOKING_STATUSES = (BookingStatus.PENDING, BookingStatus.APPROVED)
TERMINAL_BOOKING_STATUSES = (BookingStatus.COMPLETED, BookingStatus.CANCELLED, BookingStatus.REJECTED)
# Entering one of these refunds a paid booking
REFUNDING_BOOKING_STATUSES = (BookingStatus.CANCELLED, BookingStatus.REJECTED)
