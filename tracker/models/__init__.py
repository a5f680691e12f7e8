"""Tracker Database Models"""
from tracker.models.user import AuthProvider, User
from tracker.models.workspace import Workspace
from tracker.models.workspace_share import SharePermission, WorkspaceShare
from tracker.models.project import Project, ProjectNote, ProjectStatus, ProjectTask, generate_odid
from tracker.models.project_link import ProjectLink
from tracker.models.audit_entry import AuditAction, AuditEntry
from tracker.models.project_template import ProjectTemplate

__all__ = [
    "AuthProvider",
    "User",
    "Workspace",
    "SharePermission",
    "WorkspaceShare",
    "Project",
    "ProjectNote",
    "ProjectStatus",
    "ProjectTask",
    "generate_odid",
    "ProjectLink",
    "AuditAction",
    "AuditEntry",
    "ProjectTemplate",
]
