"""
Project Link Model

A link makes a project, still homed in its own workspace, visible and
editable from ``target_workspace_id``. It references the project by odid.
"""
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from tracker.database import Base
from tracker.utils.dates import utcnow


class ProjectLink(Base):
    __tablename__ = "project_links"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    project_odid = Column(String(64), ForeignKey("projects.odid"), nullable=False, index=True)
    target_workspace_id = Column(Integer, ForeignKey("workspaces.id"), nullable=False, index=True)
    linked_by_user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    project = relationship("Project", back_populates="links")
    target_workspace = relationship("Workspace", back_populates="inbound_links")
    linked_by = relationship("User")

    __table_args__ = (
        UniqueConstraint("project_odid", "target_workspace_id", name="unique_project_link"),
    )
