"""Schemas for audit entries"""
from datetime import datetime
from typing import Any, Dict, Optional

from tracker.schemas.common import CamelModel


class AuditEntryResponse(CamelModel):
    id: int
    project_odid: str
    user_id: Optional[int] = None
    username: str
    action: str
    changes: Optional[Dict[str, Any]] = None
    timestamp: datetime
