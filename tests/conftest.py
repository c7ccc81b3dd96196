# tests/conftest.py
"""Pytest configuration and fixtures: in-memory SQLite shared by the app and the tests."""

import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Must be set before parking_api.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["MAIL_ENABLED"] = "false"

from datetime import datetime
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from parking_api.database import Base, create_tables, get_db
from parking_api.main import app
from parking_api.models.booking import Booking
from parking_api.models.enums import BookingStatus, PaymentStatus, Role, SlotSize, SlotType, VehicleType
from parking_api.models.parking_slot import ParkingSlot
from parking_api.models.payment import Payment
from parking_api.models.user import User
from parking_api.models.vehicle import Vehicle
from parking_api.services.auth_service import create_access_token, hash_password

PASSWORD = "secret123"

test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(bind=test_engine, autocommit=False, autoflush=False)

# Hashing is slow on purpose; hash once for every fixture user
_PASSWORD_HASH = hash_password(PASSWORD)


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Create a clean database for each test."""
    create_tables(bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Test client with the database session override."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# ── Factories ────────────────────────────────────────────────────────────────

def make_user(db: Session, email: str, role: Role = Role.USER, name: str = "Test User") -> User:
    user = User(name=name, email=email, password_hash=_PASSWORD_HASH, role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_vehicle(db: Session, owner: User, plate: str = "RAB123A") -> Vehicle:
    vehicle = Vehicle(plate_number=plate, user_id=owner.id, vehicle_type=VehicleType.CAR)
    db.add(vehicle)
    db.commit()
    db.refresh(vehicle)
    return vehicle


def make_slot(db: Session, number: str = "A1", rate: int = 2000, spaces: int = 1,
              available: bool = True, **extra) -> ParkingSlot:
    slot = ParkingSlot(
        slot_number=number,
        type=extra.pop("type", SlotType.REGULAR),
        size=extra.pop("size", SlotSize.MEDIUM),
        vehicle_type=extra.pop("vehicle_type", VehicleType.CAR),
        charge_per_hour=rate,
        available_spaces=spaces,
        is_available=available,
        **extra,
    )
    db.add(slot)
    db.commit()
    db.refresh(slot)
    return slot


def make_booking(db: Session, user: User, vehicle: Vehicle, slot: ParkingSlot,
                 start: datetime, end: datetime,
                 status: BookingStatus = BookingStatus.PENDING,
                 payment_status: PaymentStatus = PaymentStatus.PENDING,
                 amount: int = 2000) -> Booking:
    booking = Booking(
        user_id=user.id, vehicle_id=vehicle.id, slot_id=slot.id,
        start_time=start, end_time=end, expires_at=start,
        status=status, is_paid=payment_status == PaymentStatus.PAID,
    )
    booking.payment = Payment(amount=amount, user_id=user.id, status=payment_status)
    db.add(booking)
    db.commit()
    db.refresh(booking)
    return booking


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user)}"}


# ── Common fixtures ──────────────────────────────────────────────────────────

@pytest.fixture
def admin(db_session: Session) -> User:
    return make_user(db_session, "admin@parking.com", role=Role.ADMIN, name="Admin")


@pytest.fixture
def driver(db_session: Session) -> User:
    return make_user(db_session, "driver@parking.com", name="Driver One")


@pytest.fixture
def other_driver(db_session: Session) -> User:
    return make_user(db_session, "other@parking.com", name="Driver Two")


@pytest.fixture
def vehicle(db_session: Session, driver: User) -> Vehicle:
    return make_vehicle(db_session, driver)


@pytest.fixture
def slot(db_session: Session) -> ParkingSlot:
    return make_slot(db_session, "A1", rate=2000)
