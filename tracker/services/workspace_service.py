"""Workspaces and sharing."""
import logging
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tracker.config import settings
from tracker.database import unit_of_work
from tracker.exceptions import ConflictError, NotFoundError, ValidationError
from tracker.models import AuditAction, SharePermission, User, Workspace, WorkspaceShare
from tracker.repositories import ProjectRepository, WorkspaceRepository
from tracker.services import audit
from tracker.services.permissions import EDITOR, OWNER, VIEWER, accessible_workspaces, require_workspace_access

logger = logging.getLogger(__name__)


def _clean_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Workspace name is required")
    return name


def ensure_default_workspace(db: Session, user: User) -> Optional[Workspace]:
    """Give a user who owns nothing a "Default" workspace. Caller commits."""
    repo = WorkspaceRepository(db)
    if repo.count_owned(user.id):
        return None
    workspace = repo.add(Workspace(owner_user_id=user.id, name=settings.DEFAULT_WORKSPACE_NAME))
    logger.info("Created default workspace for %s", user.username)
    return workspace


def list_workspaces(db: Session, user: User) -> List[Tuple[Workspace, str]]:
    return accessible_workspaces(db, user)


def create_workspace(db: Session, name: str, user: User) -> Workspace:
    workspace = WorkspaceRepository(db).add(Workspace(owner_user_id=user.id, name=_clean_name(name)))
    db.commit()
    db.refresh(workspace)
    return workspace


def rename_workspace(db: Session, workspace_id: int, name: str, user: User) -> Workspace:
    workspace, _ = require_workspace_access(db, workspace_id, user, OWNER)
    workspace.name = _clean_name(name)
    db.commit()
    db.refresh(workspace)
    return workspace


def purge_workspace(db: Session, workspace: Workspace, acting_user: User) -> int:
    """Delete a workspace with its projects, shares and inbound links.

    Flushes only; the caller owns the transaction. Returns the number of
    projects removed.
    """
    projects = ProjectRepository(db).list_native(workspace.id)
    for project in projects:
        audit.record(
            db,
            project.odid,
            acting_user,
            AuditAction.DELETE.value,
            {"name": project.name, "workspaceId": workspace.id, "reason": "workspace_deleted"},
        )
        db.delete(project)
    db.flush()
    # Reload collections so the cascade sees only live shares and links
    db.expire(workspace)
    WorkspaceRepository(db).delete(workspace)
    return len(projects)


def delete_workspace_cascade(db: Session, workspace_id: int, user: User) -> None:
    """Delete a workspace and everything homed in it, all or nothing.

    Rejected when it is the owner's only workspace.
    """
    workspace, _ = require_workspace_access(db, workspace_id, user, OWNER)
    if WorkspaceRepository(db).count_owned(user.id) <= 1:
        raise ValidationError("Cannot delete your only workspace", reason="last_workspace")

    with unit_of_work(db):
        removed = purge_workspace(db, workspace, user)
    logger.info("Workspace %s deleted by %s (%d projects)", workspace_id, user.username, removed)


def _resolve_grantee(db: Session, user_id: Optional[int], username: Optional[str]) -> User:
    query = db.query(User)
    grantee = (
        query.filter(User.id == user_id).first()
        if user_id is not None
        else query.filter(User.username == (username or "").strip()).first()
    )
    if grantee is None:
        raise NotFoundError("User", user_id if user_id is not None else username)
    return grantee


def list_shares(db: Session, workspace_id: int, user: User) -> List[WorkspaceShare]:
    require_workspace_access(db, workspace_id, user, VIEWER)
    return WorkspaceRepository(db).list_shares(workspace_id)


def share_workspace(
    db: Session,
    workspace_id: int,
    user: User,
    permission: str,
    grantee_id: Optional[int] = None,
    grantee_username: Optional[str] = None,
) -> WorkspaceShare:
    workspace, _ = require_workspace_access(db, workspace_id, user, OWNER)
    if permission not in (SharePermission.VIEWER.value, SharePermission.EDITOR.value):
        raise ValidationError("Permission must be viewer or editor")
    grantee = _resolve_grantee(db, grantee_id, grantee_username)
    if grantee.id == workspace.owner_user_id:
        raise ValidationError("Cannot share a workspace with yourself", reason="self_share")

    repo = WorkspaceRepository(db)
    if repo.find_share(workspace.id, grantee.id):
        raise ConflictError("Workspace already shared with this user", reason="already_shared")

    share = WorkspaceShare(
        workspace_id=workspace.id,
        grantee_user_id=grantee.id,
        permission=permission,
        granted_by_user_id=user.id,
    )
    db.add(share)
    try:
        db.commit()
    except IntegrityError as exc:
        # Lost a race with a concurrent share of the same user
        db.rollback()
        raise ConflictError("Workspace already shared with this user", reason="already_shared") from exc
    db.refresh(share)
    logger.info("Workspace %s shared with %s as %s", workspace.id, grantee.username, permission)
    return share


def _owned_share(db: Session, workspace_id: int, share_id: int, user: User) -> WorkspaceShare:
    require_workspace_access(db, workspace_id, user, OWNER)
    share = WorkspaceRepository(db).get_share(workspace_id, share_id)
    if share is None:
        raise NotFoundError("Share", share_id)
    return share


def update_share(db: Session, workspace_id: int, share_id: int, permission: str, user: User) -> WorkspaceShare:
    if permission not in (SharePermission.VIEWER.value, SharePermission.EDITOR.value):
        raise ValidationError("Permission must be viewer or editor")
    share = _owned_share(db, workspace_id, share_id, user)
    share.permission = permission
    db.commit()
    db.refresh(share)
    return share


def remove_share(db: Session, workspace_id: int, share_id: int, user: User) -> None:
    share = _owned_share(db, workspace_id, share_id, user)
    db.delete(share)
    db.commit()
    logger.info("Share %s removed from workspace %s", share_id, workspace_id)


def leave_workspace(db: Session, workspace_id: int, user: User) -> None:
    workspace, role = require_workspace_access(db, workspace_id, user, VIEWER)
    if role == OWNER:
        raise ValidationError("Owners cannot leave their own workspace", reason="owner_cannot_leave")
    share = WorkspaceRepository(db).find_share(workspace.id, user.id)
    db.delete(share)
    db.commit()


def list_linkable_workspaces(db: Session, user: User, exclude: Optional[int] = None) -> List[Tuple[Workspace, str]]:
    """Workspaces the user may add projects to, i.e. holds editor or better on."""
    return [
        (workspace, role)
        for workspace, role in accessible_workspaces(db, user)
        if role in (OWNER, EDITOR) and workspace.id != exclude
    ]
