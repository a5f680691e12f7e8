"""
Audit Entry Model

Rows are keyed by project odid and carry the acting username as text, with
no foreign keys, so history outlives both the project and the user.
"""
import enum

from sqlalchemy import JSON, Column, DateTime, Integer, String

from tracker.database import Base
from tracker.utils.dates import utcnow


class AuditAction(str, enum.Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    STATUS_CHANGE = "STATUS_CHANGE"
    PROGRESS_UPDATE = "PROGRESS_UPDATE"
    TIMELINE_CHANGE = "TIMELINE_CHANGE"
    NOTE_ADDED = "NOTE_ADDED"
    TASK_CHANGE = "TASK_CHANGE"
    REACTIVATE = "REACTIVATE"
    DELETE = "DELETE"
    LINK = "LINK"
    UNLINK = "UNLINK"


class AuditEntry(Base):
    __tablename__ = "audit_entries"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    project_odid = Column(String(64), nullable=False, index=True)
    acting_user_id = Column(Integer, nullable=True)
    acting_username = Column(String(100), nullable=False)
    action = Column(String(32), nullable=False)
    changes = Column(JSON, nullable=True)
    timestamp = Column(DateTime, default=utcnow, nullable=False, index=True)
