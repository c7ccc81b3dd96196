# parking_api/dependencies.py
"""
Request-scoped dependencies: current user from the bearer token, role gate,
and pagination parameters.
"""

from dataclasses import dataclass

from fastapi import Depends, Query
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from parking_api.config import settings
from parking_api.database import get_db
from parking_api.exceptions import AuthenticationFailed, PermissionDenied
from parking_api.models.user import User
from parking_api.services.auth_service import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX}/auth/token", auto_error=False)


def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    if not token:
        raise AuthenticationFailed("Not authenticated")
    user = db.query(User).filter(User.id == decode_access_token(token)).first()
    if not user:
        raise AuthenticationFailed("Invalid user")
    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_admin:
        raise PermissionDenied("Not authorized, admin access required")
    return current_user


@dataclass
class PageParams:
    page: int
    limit: int


def page_params(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
) -> PageParams:
    return PageParams(page=page, limit=limit)
