"""Admin user management endpoints"""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from tracker.database import get_db
from tracker.dependencies import require_admin
from tracker.models import User
from tracker.schemas import EmailUpdate, PasswordReset, UserCreate, UserResponse
from tracker.services import user_service

router = APIRouter()


@router.get("/users", response_model=List[UserResponse])
def list_users(db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    return user_service.list_users(db)


@router.post("/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(user_in: UserCreate, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    return user_service.create_user(db, user_in.username, user_in.password, user_in.is_admin, user_in.email)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    user_service.delete_user(db, user_id, admin)


@router.put("/users/{user_id}/password", status_code=status.HTTP_204_NO_CONTENT)
def reset_password(
    user_id: int,
    password_in: PasswordReset,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    user_service.reset_password(db, user_id, password_in.password)


@router.put("/users/{user_id}/email", response_model=UserResponse)
def set_email(
    user_id: int,
    email_in: EmailUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """Link an email so SSO logins from the identity provider map to this user."""
    return user_service.set_email(db, user_id, email_in.email)
