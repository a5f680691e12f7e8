"""Schemas for workspaces and shares"""
from datetime import datetime
from typing import Literal, Optional

from pydantic import Field, model_validator

from tracker.schemas.common import CamelModel


class WorkspaceCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)


class WorkspaceUpdate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)


class WorkspaceResponse(CamelModel):
    id: int
    name: str
    owner_user_id: int
    owner_username: Optional[str] = None
    permission: str
    is_owner: bool
    created_at: datetime


class ShareCreate(CamelModel):
    user_id: Optional[int] = None
    username: Optional[str] = None
    permission: Literal["viewer", "editor"] = "viewer"

    @model_validator(mode="after")
    def _grantee_given(self):
        if self.user_id is None and not self.username:
            raise ValueError("userId or username is required")
        return self


class ShareUpdate(CamelModel):
    permission: Literal["viewer", "editor"]


class ShareResponse(CamelModel):
    id: int
    workspace_id: int
    user_id: int
    username: str
    permission: str
    granted_by: Optional[str] = None
    created_at: datetime
