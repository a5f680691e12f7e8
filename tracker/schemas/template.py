"""Schemas for project templates"""
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from tracker.schemas.common import CamelModel
from tracker.schemas.project import TaskItem


class TemplateCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = ""
    tasks: List[TaskItem] = Field(default_factory=list)
    is_global: bool = False


class TemplateFromProject(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    is_global: bool = False


class TemplateUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    tasks: Optional[List[TaskItem]] = None
    is_global: Optional[bool] = None


class TemplateResponse(CamelModel):
    id: int
    name: str
    description: Optional[str] = ""
    tasks: List[TaskItem]
    is_global: bool
    owner_user_id: Optional[int] = None
    created_at: datetime
