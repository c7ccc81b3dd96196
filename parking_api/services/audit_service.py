# parking_api/services/audit_service.py
"""
Shared audit log service.
Used by booking, slot, vehicle and entry/exit services.
Entries join the caller's transaction: they are added, never committed here,
so an action and its audit row land (or roll back) together.
"""

from typing import Optional
from uuid import UUID
from sqlalchemy.orm import Session
from parking_api.models.log import Log
from parking_api.utils.logger import get_logger
from parking_api.utils.pagination import paginate

logger = get_logger(__name__)


def _jsonable(details: dict) -> dict:
    return {k: (str(v) if isinstance(v, UUID) else v) for k, v in details.items()}


def record_action(db: Session, action: str, details: Optional[dict], user_id: Optional[UUID]) -> Log:
    """Append one audit row. There is no update or delete counterpart."""
    entry = Log(action=action, details=_jsonable(details or {}), user_id=user_id)
    db.add(entry)
    logger.info(f"[AUDIT][{action}] user={user_id} {entry.details}")
    return entry


def list_logs(db: Session, page: int, limit: int, action: Optional[str] = None) -> dict:
    q = db.query(Log)
    if action:
        q = q.filter(Log.action == action)
    return paginate(q.order_by(Log.created_at.desc()), page, limit)
