"""Workspace permission resolution.

Roles rank ``viewer < editor < owner``. ``None`` means no access at all and is
reported as "not found" so callers cannot probe for workspaces they cannot see.
"""
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from tracker.exceptions import AuthorizationError, NotFoundError
from tracker.models import Project, ProjectLink, User, Workspace, WorkspaceShare
from tracker.repositories import WorkspaceRepository

OWNER = "owner"
EDITOR = "editor"
VIEWER = "viewer"

ROLE_RANK = {VIEWER: 1, EDITOR: 2, OWNER: 3}


def resolve_permission(db: Session, workspace: Workspace, user_id: int) -> Optional[str]:
    if workspace.owner_user_id == user_id:
        return OWNER
    share = (
        db.query(WorkspaceShare)
        .filter(WorkspaceShare.workspace_id == workspace.id, WorkspaceShare.grantee_user_id == user_id)
        .first()
    )
    return share.permission if share else None


def satisfies(role: Optional[str], minimum: str) -> bool:
    return role is not None and ROLE_RANK[role] >= ROLE_RANK[minimum]


def strongest(roles: Iterable[Optional[str]]) -> Optional[str]:
    best = None
    for role in roles:
        if role is not None and (best is None or ROLE_RANK[role] > ROLE_RANK[best]):
            best = role
    return best


def get_workspace(db: Session, workspace_id: int) -> Workspace:
    workspace = WorkspaceRepository(db).get(workspace_id)
    if workspace is None:
        raise NotFoundError("Workspace", workspace_id)
    return workspace


def require_workspace_access(db: Session, workspace_id: int, user: User, minimum: str = VIEWER):
    """Load a workspace and check the caller holds at least ``minimum`` on it.

    Returns ``(workspace, role)``.
    """
    workspace = get_workspace(db, workspace_id)
    role = resolve_permission(db, workspace, user.id)
    if role is None:
        raise NotFoundError("Workspace", workspace_id)
    if not satisfies(role, minimum):
        raise AuthorizationError(required=minimum, actual=role)
    return workspace, role


def project_permission(db: Session, project: Project, user: User) -> Optional[str]:
    """Strongest role the user holds on the project's home or any linked workspace."""
    roles = [resolve_permission(db, project.home_workspace, user.id)]
    links = db.query(ProjectLink).filter(ProjectLink.project_odid == project.odid).all()
    for link in links:
        if link.target_workspace is not None:
            roles.append(resolve_permission(db, link.target_workspace, user.id))
    return strongest(roles)


def accessible_workspaces(db: Session, user: User):
    """Workspaces the user owns or has been shared, each paired with the user's role."""
    owned = (
        db.query(Workspace)
        .filter(Workspace.owner_user_id == user.id)
        .order_by(Workspace.created_at.asc(), Workspace.id.asc())
        .all()
    )
    shared = (
        db.query(Workspace, WorkspaceShare.permission)
        .join(WorkspaceShare, WorkspaceShare.workspace_id == Workspace.id)
        .filter(WorkspaceShare.grantee_user_id == user.id)
        .order_by(Workspace.name.asc())
        .all()
    )
    return [(workspace, OWNER) for workspace in owned] + [(workspace, role) for workspace, role in shared]
