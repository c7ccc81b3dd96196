# parking_api/routers/auth.py
"""Registration, login (JSON or OAuth2 form) and the current-user profile."""

from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from parking_api.database import get_db
from parking_api.dependencies import get_current_user
from parking_api.models.user import User
from parking_api.schemas.user import LoginRequest, TokenOut, UserOut, UserRegister
from parking_api.services import auth_service

router = APIRouter()


@router.post("/auth/register", response_model=UserOut, status_code=status.HTTP_201_CREATED,
             summary="Register a new user")
def register(body: UserRegister, db: Session = Depends(get_db)):
    return auth_service.register_user(db, body.name, body.email, body.password)


@router.post("/auth/login", response_model=TokenOut, summary="Log in with email + password")
def login(body: LoginRequest, db: Session = Depends(get_db)):
    user = auth_service.authenticate(db, body.email, body.password)
    return TokenOut(access_token=auth_service.create_access_token(user), role=user.role)


@router.post("/auth/token", response_model=TokenOut, summary="OAuth2 password flow (Swagger UI)")
def token(form: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    user = auth_service.authenticate(db, form.username, form.password)
    return TokenOut(access_token=auth_service.create_access_token(user), role=user.role)


@router.get("/auth/me", response_model=UserOut, summary="Current user")
def me(current_user: User = Depends(get_current_user)):
    return current_user
