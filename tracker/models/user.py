"""
User Model
"""
import enum

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from tracker.database import Base
from tracker.utils.dates import utcnow


class AuthProvider(str, enum.Enum):
    LOCAL = "local"
    EXTERNAL = "external"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    username = Column(String(100), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=True)
    auth_provider = Column(String(20), default=AuthProvider.LOCAL.value, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    owned_workspaces = relationship(
        "Workspace",
        back_populates="owner",
        cascade="all, delete",
        foreign_keys="Workspace.owner_user_id",
    )
    received_shares = relationship(
        "WorkspaceShare",
        back_populates="grantee",
        cascade="all, delete",
        foreign_keys="WorkspaceShare.grantee_user_id",
    )
    granted_shares = relationship(
        "WorkspaceShare",
        back_populates="granted_by",
        cascade="all, delete",
        foreign_keys="WorkspaceShare.granted_by_user_id",
    )
