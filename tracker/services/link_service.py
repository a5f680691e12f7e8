"""Project links: one project shown in several workspaces without copying it."""
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tracker.exceptions import ConflictError, NotFoundError, ValidationError
from tracker.models import AuditAction, ProjectLink, User
from tracker.repositories import ProjectRepository
from tracker.services import audit
from tracker.services.permissions import (
    EDITOR,
    VIEWER,
    project_permission,
    require_workspace_access,
    resolve_permission,
)
from tracker.services.project_service import get_visible_project

logger = logging.getLogger(__name__)


def find_link(db: Session, odid: str, workspace_id: int) -> Optional[ProjectLink]:
    return (
        db.query(ProjectLink)
        .filter(ProjectLink.project_odid == odid, ProjectLink.target_workspace_id == workspace_id)
        .first()
    )


def list_links(db: Session, odid: str, user: User) -> List[ProjectLink]:
    get_visible_project(db, odid, user, VIEWER)
    return (
        db.query(ProjectLink)
        .filter(ProjectLink.project_odid == odid)
        .order_by(ProjectLink.created_at.asc(), ProjectLink.id.asc())
        .all()
    )


def link_project(db: Session, odid: str, target_workspace_id: int, user: User) -> ProjectLink:
    """Make the project visible in ``target_workspace_id``.

    The caller must be able to see the project's home workspace and edit the
    target workspace.
    """
    project = ProjectRepository(db).get_by_odid(odid)
    if project is None or resolve_permission(db, project.home_workspace, user.id) is None:
        raise NotFoundError("Project", odid)
    target, _ = require_workspace_access(db, target_workspace_id, user, EDITOR)

    if target.id == project.home_workspace_id:
        raise ValidationError("Project already belongs to this workspace", reason="home_workspace")
    if find_link(db, odid, target.id):
        raise ConflictError("Project already linked to this workspace", reason="already_linked")

    link = ProjectLink(project_odid=odid, target_workspace_id=target.id, linked_by_user_id=user.id)
    db.add(link)
    try:
        db.flush()
    except IntegrityError as exc:
        # Lost a race with a concurrent link into the same workspace
        db.rollback()
        raise ConflictError("Project already linked to this workspace", reason="already_linked") from exc
    audit.record(
        db,
        odid,
        user,
        AuditAction.LINK.value,
        {"targetWorkspace": target.name, "targetWorkspaceId": target.id},
    )
    db.commit()
    db.refresh(link)
    logger.info("Project %s linked into workspace %s by %s", odid, target.id, user.username)
    return link


def unlink_project(db: Session, odid: str, workspace_id: int, user: User) -> None:
    """Remove the project from ``workspace_id``.

    Only editor rights on that workspace are needed, so a workspace can drop a
    sync it received without any rights on the project's home.
    """
    workspace, _ = require_workspace_access(db, workspace_id, user, EDITOR)
    link = find_link(db, odid, workspace.id)
    if link is None:
        raise NotFoundError("Link", odid)

    db.delete(link)
    db.flush()
    audit.record(
        db,
        odid,
        user,
        AuditAction.UNLINK.value,
        {"targetWorkspace": workspace.name, "targetWorkspaceId": workspace.id},
    )
    db.commit()
    logger.info("Project %s unlinked from workspace %s by %s", odid, workspace.id, user.username)


def can_view_history(db: Session, odid: str, user: User) -> bool:
    """Whether the user may read the audit trail of a live or deleted project."""
    project = ProjectRepository(db).get_by_odid(odid)
    if project is not None:
        return project_permission(db, project, user) is not None
    workspace_id = audit.home_workspace_from_history(db, odid)
    if workspace_id is None:
        return False
    try:
        require_workspace_access(db, workspace_id, user, VIEWER)
    except NotFoundError:
        return False
    return True
