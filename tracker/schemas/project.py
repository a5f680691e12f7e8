"""Schemas for projects, tasks and notes"""
from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import Field, field_validator

from tracker.schemas.common import CamelModel

StatusValue = Literal["active", "on-track", "behind", "on-pause", "discovery", "complete"]


class TaskItem(CamelModel):
    name: str = Field(..., max_length=255)
    completed: bool = False

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Task name cannot be empty")
        return value


class NoteItem(CamelModel):
    text: str
    timestamp: Optional[datetime] = None

    @field_validator("text")
    @classmethod
    def _text_present(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Note text cannot be empty")
        return value


class ProjectPayload(CamelModel):
    """Full project body. Required fields are checked by the service so a
    missing one is reported as a plain 400 like the rest of the API."""

    name: Optional[str] = None
    description: Optional[str] = ""
    owner: Optional[str] = None
    team: Optional[str] = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: StatusValue = "active"
    progress: int = Field(0, ge=0, le=100)
    priority: int = Field(3, ge=1, le=5)
    completed_date: Optional[datetime] = None
    tasks: List[TaskItem] = Field(default_factory=list)
    notes: List[NoteItem] = Field(default_factory=list)


class ProjectCreate(ProjectPayload):
    workspace_id: Optional[int] = None


class ProjectUpdate(ProjectPayload):
    pass


class ProjectResponse(CamelModel):
    id: str
    odid: str
    workspace_id: int
    name: str
    description: str
    owner: str
    team: str
    start_date: date
    end_date: date
    status: str
    progress: int
    priority: int
    completed_date: Optional[datetime] = None
    is_finished: bool = False
    tasks: List[TaskItem] = Field(default_factory=list)
    notes: List[NoteItem] = Field(default_factory=list)
    is_linked: bool = False
    source_workspace_name: Optional[str] = None
    permission: Optional[str] = None
    last_updated_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime
