"""Schemas for users and authentication"""
from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from tracker.schemas.common import CamelModel


class UserLogin(CamelModel):
    username: str
    password: str


class UserSummary(CamelModel):
    id: int
    username: str


class UserResponse(CamelModel):
    id: int
    username: str
    is_admin: bool
    email: Optional[str] = None
    auth_provider: str
    created_at: datetime


class Token(CamelModel):
    token: str
    token_type: str = "bearer"
    user: UserResponse


class UserCreate(CamelModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str
    is_admin: bool = False
    email: Optional[EmailStr] = None


class PasswordChange(CamelModel):
    current_password: str
    new_password: str


class PasswordReset(CamelModel):
    password: str


class EmailUpdate(CamelModel):
    email: Optional[EmailStr] = None


class SSOStatus(CamelModel):
    enabled: bool


class CurrentUser(CamelModel):
    user: UserResponse
