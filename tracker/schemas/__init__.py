"""
Pydantic schemas for request/response validation
"""
from tracker.schemas.user import (
    EmailUpdate,
    PasswordChange,
    PasswordReset,
    SSOStatus,
    Token,
    CurrentUser,
    UserCreate,
    UserLogin,
    UserResponse,
    UserSummary,
)
from tracker.schemas.workspace import (
    ShareCreate,
    ShareResponse,
    ShareUpdate,
    WorkspaceCreate,
    WorkspaceResponse,
    WorkspaceUpdate,
)
from tracker.schemas.project import NoteItem, ProjectCreate, ProjectResponse, ProjectUpdate, TaskItem
from tracker.schemas.link import LinkableWorkspace, LinkCreate, LinkResponse
from tracker.schemas.audit import AuditEntryResponse
from tracker.schemas.template import TemplateCreate, TemplateFromProject, TemplateResponse, TemplateUpdate

__all__ = [
    "EmailUpdate",
    "PasswordChange",
    "PasswordReset",
    "SSOStatus",
    "Token",
    "CurrentUser",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "UserSummary",
    "ShareCreate",
    "ShareResponse",
    "ShareUpdate",
    "WorkspaceCreate",
    "WorkspaceResponse",
    "WorkspaceUpdate",
    "NoteItem",
    "ProjectCreate",
    "ProjectResponse",
    "ProjectUpdate",
    "TaskItem",
    "LinkableWorkspace",
    "LinkCreate",
    "LinkResponse",
    "AuditEntryResponse",
    "TemplateCreate",
    "TemplateFromProject",
    "TemplateResponse",
    "TemplateUpdate",
]
