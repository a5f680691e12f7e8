"""Schemas for project links"""
from datetime import datetime
from typing import Optional

from tracker.schemas.common import CamelModel


class LinkCreate(CamelModel):
    workspace_id: int


class LinkResponse(CamelModel):
    id: int
    project_odid: str
    workspace_id: int
    workspace_name: str
    linked_by: Optional[str] = None
    created_at: datetime


class LinkableWorkspace(CamelModel):
    id: int
    name: str
    permission: str
