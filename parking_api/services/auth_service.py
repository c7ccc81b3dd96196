# parking_api/services/auth_service.py
"""
Password hashing (passlib/argon2), JWT issuing/decoding (python-jose) and
user registration/login.
"""

from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from parking_api.config import settings
from parking_api.exceptions import AuthenticationFailed, Conflict
from parking_api.models.enums import Role, VerificationStatus
from parking_api.models.user import User
from parking_api.utils.logger import get_logger

logger = get_logger(__name__)

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    return pwd_context.verify(plain_password, password_hash)


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    payload = {"sub": str(user.id), "role": user.role.value, "exp": expire}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> UUID:
    """Return the user id carried by a valid token."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        return UUID(payload["sub"])
    except (JWTError, KeyError, ValueError):
        raise AuthenticationFailed("Invalid or expired token")


def register_user(db: Session, name: str, email: str, password: str,
                  role: Role = Role.USER,
                  verification_status: VerificationStatus = VerificationStatus.PENDING) -> User:
    email = email.strip().lower()
    if db.query(User).filter(User.email == email).first():
        raise Conflict("Email already registered")
    user = User(name=name.strip(), email=email, password_hash=hash_password(password),
                role=role, verification_status=verification_status)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Registered {role.value} {email}")
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    user = db.query(User).filter(User.email == email.strip().lower()).first()
    if not user or not verify_password(password, user.password_hash):
        raise AuthenticationFailed("Invalid credentials")
    return user
