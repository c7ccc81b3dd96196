"""
Seed the default ADMIN account (verified) from DEFAULT_ADMIN_* settings.
Idempotent: an existing account with that email is left untouched.
Usage: python scripts/setup/seed_admin.py
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from parking_api.config import settings
from parking_api.database import SessionLocal, create_tables
from parking_api.models.enums import Role, VerificationStatus
from parking_api.models.user import User
from parking_api.services.auth_service import register_user


def seed_admin(db) -> User:
    existing = db.query(User).filter(User.email == settings.DEFAULT_ADMIN_EMAIL.lower()).first()
    if existing:
        return existing
    return register_user(
        db,
        settings.DEFAULT_ADMIN_NAME,
        settings.DEFAULT_ADMIN_EMAIL,
        settings.DEFAULT_ADMIN_PASSWORD,
        role=Role.ADMIN,
        verification_status=VerificationStatus.VERIFIED,
    )


def main():
    create_tables()
    db = SessionLocal()
    try:
        admin = seed_admin(db)
        print(f"✅ Admin ready: {admin.email} (role={admin.role.value})")
    except Exception as e:
        print(f"❌ Seeding failed: {e}")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
