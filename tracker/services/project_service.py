"""Projects: CRUD, the linked-project read overlay and derived status on read."""
import logging
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from tracker.exceptions import AuthorizationError, NotFoundError, ValidationError
from tracker.models import AuditAction, Project, ProjectNote, ProjectTask, User
from tracker.repositories import ProjectRepository, WorkspaceRepository
from tracker.schemas.project import NoteItem, ProjectCreate, ProjectPayload, ProjectResponse, ProjectUpdate, TaskItem
from tracker.services import audit, status
from tracker.services.permissions import (
    EDITOR,
    VIEWER,
    project_permission,
    require_workspace_access,
    resolve_permission,
    satisfies,
)
from tracker.utils.dates import as_naive_utc, utcnow

logger = logging.getLogger(__name__)

VIEWS = ("all", "overview", "finished")


def to_response(
    project: Project,
    now: Optional[datetime] = None,
    permission: Optional[str] = None,
    is_linked: bool = False,
) -> ProjectResponse:
    """Serialize a project with its status derived for ``now``. Nothing is written back."""
    now = now or utcnow()
    derived = status.derive_status(project.status, project.progress, project.end_date, project.completed_date, now)
    return ProjectResponse(
        id=project.odid,
        odid=project.odid,
        workspace_id=project.home_workspace_id,
        name=project.name,
        description=project.description or "",
        owner=project.owner,
        team=project.team or "",
        start_date=project.start_date,
        end_date=project.end_date,
        status=derived.status,
        progress=project.progress,
        priority=project.priority or 3,
        completed_date=derived.completed_date,
        is_finished=status.is_finished(derived.status, derived.completed_date, now),
        tasks=[TaskItem(name=task.name, completed=task.completed) for task in project.tasks],
        notes=[NoteItem(text=note.text, timestamp=note.timestamp) for note in project.notes],
        is_linked=is_linked,
        source_workspace_name=project.home_workspace.name if is_linked and project.home_workspace else None,
        permission=permission,
        last_updated_by=project.last_updated_by,
        created_at=project.created_at,
        updated_at=project.updated_at,
    )


def _default_workspace_id(db: Session, user: User) -> int:
    owned = WorkspaceRepository(db).owned_by(user.id)
    if not owned:
        raise NotFoundError("Workspace")
    return owned[0].id


def list_projects(
    db: Session,
    user: User,
    workspace_id: Optional[int] = None,
    view: str = "all",
    sort_by: Optional[str] = None,
    now: Optional[datetime] = None,
) -> List[ProjectResponse]:
    """Native projects of the workspace followed by projects linked into it."""
    if view not in VIEWS:
        raise ValidationError(f"Unknown view '{view}'")
    if workspace_id is None:
        workspace_id = _default_workspace_id(db, user)
    _, role = require_workspace_access(db, workspace_id, user, VIEWER)

    now = now or utcnow()
    repo = ProjectRepository(db)
    results = [to_response(p, now, permission=role) for p in repo.list_native(workspace_id)]
    results += [to_response(p, now, permission=role, is_linked=True) for p in repo.list_linked(workspace_id)]

    if view != "all":
        overview, finished = status.partition(results, lambda p: p.is_finished)
        results = overview if view == "overview" else finished
    if sort_by:
        results = status.sort_projects(results, sort_by)
    return results


def get_visible_project(db: Session, odid: str, user: User, minimum: str = VIEWER) -> Tuple[Project, str]:
    """Load a project the user can reach through its home or any linked workspace."""
    project = ProjectRepository(db).get_by_odid(odid)
    if project is None:
        raise NotFoundError("Project", odid)
    role = project_permission(db, project, user)
    if role is None:
        raise NotFoundError("Project", odid)
    if not satisfies(role, minimum):
        raise AuthorizationError(required=minimum, actual=role)
    return project, role


def get_project(db: Session, odid: str, user: User) -> ProjectResponse:
    project, role = get_visible_project(db, odid, user)
    return to_response(project, permission=role)


def _require_fields(payload: ProjectPayload) -> None:
    missing = []
    for field in ("name", "owner", "start_date", "end_date"):
        value = getattr(payload, field)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(field)
    if missing:
        raise ValidationError(
            "Missing required fields: " + ", ".join(missing),
            reason="missing_fields",
        )


def _apply_payload(project: Project, payload: ProjectPayload, completed_date: Optional[datetime], now: datetime) -> None:
    derived = status.derive_status(payload.status, payload.progress, payload.end_date, completed_date, now)
    project.name = payload.name.strip()
    project.description = payload.description or ""
    project.owner = payload.owner.strip()
    project.team = payload.team or ""
    project.start_date = payload.start_date
    project.end_date = payload.end_date
    project.progress = payload.progress
    project.priority = payload.priority
    project.status = derived.status
    project.completed_date = derived.completed_date
    project.tasks = [
        ProjectTask(position=index, name=task.name, completed=task.completed)
        for index, task in enumerate(payload.tasks)
    ]
    project.notes = [
        ProjectNote(position=index, text=note.text, timestamp=as_naive_utc(note.timestamp) or now)
        for index, note in enumerate(payload.notes)
    ]


def create_project(db: Session, payload: ProjectCreate, user: User) -> ProjectResponse:
    workspace_id = payload.workspace_id or _default_workspace_id(db, user)
    workspace, role = require_workspace_access(db, workspace_id, user, EDITOR)
    _require_fields(payload)

    now = utcnow()
    project = Project(home_workspace=workspace, last_updated_by=user.username)
    _apply_payload(project, payload, as_naive_utc(payload.completed_date), now)
    ProjectRepository(db).add(project)

    audit.record(
        db,
        project.odid,
        user,
        AuditAction.CREATE.value,
        {"name": project.name, "workspaceId": workspace.id},
    )
    db.commit()
    db.refresh(project)
    return to_response(project, permission=role)


def _carried_completion(project: Project, payload: ProjectPayload) -> Optional[datetime]:
    """Completion timestamp to feed into derivation on update.

    Clients usually send no ``completedDate``; a project re-saved as complete
    keeps its stored timestamp so the finished clock does not restart. Any other
    status is a reactivation and gets no carried stamp.
    """
    if payload.completed_date is not None:
        return as_naive_utc(payload.completed_date)
    if project.status == status.COMPLETE and payload.status == status.COMPLETE:
        return project.completed_date
    return None


def update_project(db: Session, odid: str, payload: ProjectUpdate, user: User) -> ProjectResponse:
    """Overwrite every field of the project (last write wins) and audit the diff."""
    project, role = get_visible_project(db, odid, user, EDITOR)
    _require_fields(payload)

    before = audit.snapshot(project)
    _apply_payload(project, payload, _carried_completion(project, payload), utcnow())
    project.last_updated_by = user.username
    db.flush()
    after = audit.snapshot(project)

    audit.record_all(db, project.odid, user, audit.detect_changes(before, after))
    db.commit()
    db.refresh(project)
    return to_response(project, permission=role)


def delete_project(db: Session, odid: str, user: User) -> None:
    """Hard delete. Needs editor on the home workspace; audit history is kept."""
    project = ProjectRepository(db).get_by_odid(odid)
    if project is None:
        raise NotFoundError("Project", odid)
    home_role = resolve_permission(db, project.home_workspace, user.id)
    if home_role is None:
        # Reachable only through a link: it exists for the caller, but is not theirs to delete
        if project_permission(db, project, user) is None:
            raise NotFoundError("Project", odid)
        raise AuthorizationError(
            "Project belongs to another workspace; unlink it instead",
            reason="not_home_workspace",
        )
    if not satisfies(home_role, EDITOR):
        raise AuthorizationError(required=EDITOR, actual=home_role)

    audit.record(
        db,
        project.odid,
        user,
        AuditAction.DELETE.value,
        {"name": project.name, "workspaceId": project.home_workspace_id},
    )
    ProjectRepository(db).delete(project)
    db.commit()
    logger.info("Project %s deleted by %s", odid, user.username)
