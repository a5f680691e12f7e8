"""Authentication and account endpoints"""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from tracker.config import settings
from tracker.database import get_db
from tracker.dependencies import get_current_user
from tracker.models import User
from tracker.schemas import CurrentUser, PasswordChange, SSOStatus, Token, UserLogin, UserResponse, UserSummary
from tracker.security import create_access_token
from tracker.services import user_service

router = APIRouter()


@router.post("/login", response_model=Token)
def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """Check credentials and issue a bearer token valid for 24 hours."""
    user = user_service.authenticate(db, credentials.username, credentials.password)
    token = create_access_token(data={"sub": str(user.id), "username": user.username, "isAdmin": user.is_admin})
    return Token(token=token, user=UserResponse.model_validate(user))


@router.get("/me", response_model=CurrentUser)
def read_current_user(current_user: User = Depends(get_current_user)):
    return CurrentUser(user=UserResponse.model_validate(current_user))


@router.put("/me/password", status_code=status.HTTP_204_NO_CONTENT)
def change_password(
    password_in: PasswordChange,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    user_service.change_password(db, current_user, password_in.current_password, password_in.new_password)


@router.get("/auth/sso/status", response_model=SSOStatus)
def sso_status():
    """Whether an external identity provider is configured. Needs no token."""
    return SSOStatus(enabled=settings.sso_enabled)


@router.get("/users", response_model=List[UserSummary])
def list_users(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return user_service.list_users(db)
