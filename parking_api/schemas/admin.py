# parking_api/schemas/admin.py
from pydantic import BaseModel
from datetime import datetime
from typing import Dict, List
from uuid import UUID
from parking_api.models.enums import Role, VerificationStatus


class DashboardStatsOut(BaseModel):
    total_users: int
    total_vehicles: int
    total_slots: int
    available_slots: int
    bookings_by_status: Dict[str, int]
    total_revenue: int
    active_entries: int


class AdminUserOut(BaseModel):
    id: UUID
    name: str
    email: str
    role: Role
    verification_status: VerificationStatus
    plate_numbers: List[str]
    booking_count: int
    created_at: datetime
