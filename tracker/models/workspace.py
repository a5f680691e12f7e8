"""
Workspace Model
"""
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from tracker.database import Base
from tracker.utils.dates import utcnow


class Workspace(Base):
    __tablename__ = "workspaces"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    owner_user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    owner = relationship("User", back_populates="owned_workspaces", foreign_keys=[owner_user_id])
    projects = relationship("Project", back_populates="home_workspace", cascade="all, delete")
    shares = relationship("WorkspaceShare", back_populates="workspace", cascade="all, delete")
    inbound_links = relationship("ProjectLink", back_populates="target_workspace", cascade="all, delete")
