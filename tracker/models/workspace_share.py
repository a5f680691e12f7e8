"""
Workspace Share Model
"""
import enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from tracker.database import Base
from tracker.utils.dates import utcnow


class SharePermission(str, enum.Enum):
    VIEWER = "viewer"
    EDITOR = "editor"


class WorkspaceShare(Base):
    __tablename__ = "workspace_shares"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    workspace_id = Column(Integer, ForeignKey("workspaces.id"), nullable=False, index=True)
    grantee_user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    permission = Column(String(20), default=SharePermission.VIEWER.value, nullable=False)  # viewer, editor
    granted_by_user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    workspace = relationship("Workspace", back_populates="shares")
    grantee = relationship("User", back_populates="received_shares", foreign_keys=[grantee_user_id])
    granted_by = relationship("User", back_populates="granted_shares", foreign_keys=[granted_by_user_id])

    __table_args__ = (
        UniqueConstraint("workspace_id", "grantee_user_id", name="unique_workspace_share"),
    )
