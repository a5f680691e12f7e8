"""Accounts: login, passwords, admin user management and SSO email linkage."""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from tracker.config import settings
from tracker.database import unit_of_work
from tracker.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from tracker.models import AuthProvider, ProjectLink, ProjectTemplate, User
from tracker.security import get_password_hash, verify_password
from tracker.services import workspace_service

logger = logging.getLogger(__name__)


def _check_password_length(password: str) -> None:
    if not password or len(password) < settings.MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters",
            reason="password_too_short",
        )


def get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFoundError("User", user_id)
    return user


def get_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def authenticate(db: Session, username: str, password: str) -> User:
    """Check credentials and make sure the user owns at least one workspace."""
    if not username or not password:
        raise ValidationError("Username and password required")
    user = get_by_username(db, username)
    if user is None or not verify_password(password, user.password_hash):
        raise AuthenticationError("Invalid credentials", reason="invalid_credentials")
    workspace_service.ensure_default_workspace(db, user)
    db.commit()
    return user


def list_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.username.asc()).all()


def create_user(
    db: Session,
    username: str,
    password: str,
    is_admin: bool = False,
    email: Optional[str] = None,
) -> User:
    username = (username or "").strip()
    email = email.strip().lower() if email else None
    if not username:
        raise ValidationError("Username and password required")
    _check_password_length(password)
    if get_by_username(db, username):
        raise ValidationError("Username already exists", reason="duplicate_username")
    if email and db.query(User).filter(User.email == email).first():
        raise ConflictError("Email already linked to another user", reason="duplicate_email")

    user = User(
        username=username,
        password_hash=get_password_hash(password),
        is_admin=bool(is_admin),
        email=email or None,
        auth_provider=AuthProvider.LOCAL.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created user %s (admin=%s)", user.username, user.is_admin)
    return user


def ensure_admin(db: Session) -> Optional[User]:
    """Create the bootstrap admin account if it does not exist yet."""
    if get_by_username(db, settings.ADMIN_USERNAME):
        return None
    user = User(
        username=settings.ADMIN_USERNAME,
        password_hash=get_password_hash(settings.ADMIN_PASSWORD),
        is_admin=True,
    )
    db.add(user)
    db.commit()
    logger.info("Default admin user created (username: %s)", user.username)
    return user


def delete_user(db: Session, user_id: int, acting_user: User) -> None:
    """Delete a user with their workspaces, projects, shares and personal templates."""
    if user_id == acting_user.id:
        raise ValidationError("Cannot delete yourself", reason="self_delete")
    user = get_user(db, user_id)
    username = user.username

    with unit_of_work(db):
        for workspace in list(user.owned_workspaces):
            workspace_service.purge_workspace(db, workspace, acting_user)
        db.query(ProjectTemplate).filter(ProjectTemplate.owner_user_id == user.id).delete(
            synchronize_session=False
        )
        db.query(ProjectTemplate).filter(ProjectTemplate.created_by_user_id == user.id).update(
            {ProjectTemplate.created_by_user_id: None}, synchronize_session=False
        )
        db.query(ProjectLink).filter(ProjectLink.linked_by_user_id == user.id).update(
            {ProjectLink.linked_by_user_id: None}, synchronize_session=False
        )
        db.expire(user)
        db.delete(user)
    logger.info("User %s deleted by %s", username, acting_user.username)


def change_password(db: Session, user: User, current_password: str, new_password: str) -> None:
    if not current_password or not new_password:
        raise ValidationError("Current and new password required")
    _check_password_length(new_password)
    if not verify_password(current_password, user.password_hash):
        raise ValidationError("Current password is incorrect", reason="wrong_password")
    user.password_hash = get_password_hash(new_password)
    db.commit()


def reset_password(db: Session, user_id: int, password: str) -> None:
    _check_password_length(password)
    user = get_user(db, user_id)
    user.password_hash = get_password_hash(password)
    db.commit()
    logger.info("Password reset for user %s", user.username)


def set_email(db: Session, user_id: int, email: Optional[str]) -> User:
    """Link (or with ``None`` unlink) the email used to match SSO logins."""
    user = get_user(db, user_id)
    email = email.strip().lower() if email else None
    if email:
        existing = db.query(User).filter(User.email == email, User.id != user.id).first()
        if existing:
            raise ConflictError("Email already linked to another user", reason="duplicate_email")
    user.email = email
    db.commit()
    db.refresh(user)
    return user
