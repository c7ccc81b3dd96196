# parking_api/models/log.py
"""
Audit log: append-only record of administrative and booking actions.
Written by audit_service only; never updated or deleted.
"""

import uuid
from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, ForeignKey, String, Uuid

from parking_api.database import Base


class Log(Base):
    __tablename__ = "logs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    action = Column(String(100), nullable=False, index=True)
    details = Column(JSON)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<Log {self.action} user={self.user_id}>"
