# parking_api/schemas/log.py
from pydantic import BaseModel
from datetime import datetime
from typing import Any, Optional
from uuid import UUID


class LogOut(BaseModel):
    id: UUID
    action: str
    details: Optional[Any]
    user_id: Optional[UUID]
    created_at: datetime

    class Config:
        from_attributes = True
