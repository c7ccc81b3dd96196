# parking_api/services/pricing.py
"""
Fee rules.
Bookings: every started hour is billed at the slot's hourly rate, minimum one hour.
Walk-in entries: flat rate per started hour with a minimum charge.
"""

import math
from datetime import datetime
from parking_api.config import settings
from parking_api.exceptions import ValidationFailed

SECONDS_PER_HOUR = 3600


def billable_hours(start: datetime, end: datetime) -> int:
    """Hours between start and end, rounded up. 1h10m → 2."""
    if end <= start:
        raise ValidationFailed("Start time must be before end time")
    return max(1, math.ceil((end - start).total_seconds() / SECONDS_PER_HOUR))


def booking_amount(start: datetime, end: datetime, charge_per_hour: int) -> int:
    return billable_hours(start, end) * charge_per_hour


def entry_charge(entry_time: datetime, exit_time: datetime) -> int:
    """max(minimum, ceil(hours) × rate). A 10-minute stay pays the minimum; 3h05m pays 4 hours."""
    hours = max(0.0, (exit_time - entry_time).total_seconds() / SECONDS_PER_HOUR)
    return max(settings.ENTRY_MINIMUM_CHARGE, math.ceil(hours) * settings.ENTRY_HOURLY_RATE)


def format_amount(amount: int) -> str:
    return f"{amount:,} {settings.CURRENCY}"
