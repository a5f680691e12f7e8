"""
Project Model
"""
import enum
import random
import string
import time

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from tracker.database import Base
from tracker.utils.dates import utcnow


class ProjectStatus(str, enum.Enum):
    ACTIVE = "active"
    ON_TRACK = "on-track"
    BEHIND = "behind"
    ON_PAUSE = "on-pause"
    DISCOVERY = "discovery"
    COMPLETE = "complete"


_BASE36 = string.digits + string.ascii_lowercase


def _to_base36(value: int) -> str:
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits)) or "0"


def generate_odid() -> str:
    """Opaque external id: base36 epoch millis followed by a random base36 suffix."""
    suffix = "".join(random.choices(_BASE36, k=11))
    return _to_base36(int(time.time() * 1000)) + suffix


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    odid = Column(String(64), unique=True, index=True, nullable=False, default=generate_odid)
    home_workspace_id = Column(Integer, ForeignKey("workspaces.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, default="", nullable=False)
    owner = Column(String(255), nullable=False)
    team = Column(String(255), default="", nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    status = Column(String(20), default=ProjectStatus.ACTIVE.value, nullable=False)
    progress = Column(Integer, default=0, nullable=False)
    priority = Column(Integer, default=3, nullable=False)
    completed_date = Column(DateTime, nullable=True)
    last_updated_by = Column(String(100), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    home_workspace = relationship("Workspace", back_populates="projects")
    tasks = relationship(
        "ProjectTask",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="ProjectTask.position",
    )
    notes = relationship(
        "ProjectNote",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="ProjectNote.position",
    )
    links = relationship("ProjectLink", back_populates="project", cascade="all, delete")


class ProjectTask(Base):
    __tablename__ = "project_tasks"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False, index=True)
    position = Column(Integer, default=0, nullable=False)
    name = Column(String(255), nullable=False)
    completed = Column(Boolean, default=False, nullable=False)

    project = relationship("Project", back_populates="tasks")


class ProjectNote(Base):
    __tablename__ = "project_notes"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False, index=True)
    position = Column(Integer, default=0, nullable=False)
    text = Column(Text, nullable=False)
    timestamp = Column(DateTime, nullable=True)

    project = relationship("Project", back_populates="notes")
