"""Project, link and audit endpoints"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from tracker.database import get_db
from tracker.dependencies import get_current_user
from tracker.exceptions import NotFoundError
from tracker.models import AuditEntry, ProjectLink, User
from tracker.schemas import AuditEntryResponse, LinkCreate, LinkResponse, ProjectCreate, ProjectResponse, ProjectUpdate
from tracker.services import audit, link_service, project_service

router = APIRouter()


def _serialize_link(link: ProjectLink) -> LinkResponse:
    return LinkResponse(
        id=link.id,
        project_odid=link.project_odid,
        workspace_id=link.target_workspace_id,
        workspace_name=link.target_workspace.name if link.target_workspace else "Unknown",
        linked_by=link.linked_by.username if link.linked_by else None,
        created_at=link.created_at,
    )


def _serialize_entry(entry: AuditEntry) -> AuditEntryResponse:
    return AuditEntryResponse(
        id=entry.id,
        project_odid=entry.project_odid,
        user_id=entry.acting_user_id,
        username=entry.acting_username,
        action=entry.action,
        changes=entry.changes,
        timestamp=entry.timestamp,
    )


@router.get("", response_model=List[ProjectResponse])
def list_projects(
    workspace_id: Optional[int] = Query(None, alias="workspaceId"),
    view: str = Query("all", description="all, overview (active) or finished"),
    sort: Optional[str] = Query(None, description="status, name, progress, end-date, updated, priority (+ -desc/-asc)"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Projects homed in the workspace plus projects linked into it."""
    return project_service.list_projects(db, current_user, workspace_id, view=view, sort_by=sort)


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(
    project_in: ProjectCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return project_service.create_project(db, project_in, current_user)


@router.get("/{odid}", response_model=ProjectResponse)
def get_project(odid: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return project_service.get_project(db, odid, current_user)


@router.put("/{odid}", response_model=ProjectResponse)
def update_project(
    odid: str,
    project_in: ProjectUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return project_service.update_project(db, odid, project_in, current_user)


@router.delete("/{odid}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(odid: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    project_service.delete_project(db, odid, current_user)


@router.get("/{odid}/links", response_model=List[LinkResponse])
def list_links(odid: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return [_serialize_link(link) for link in link_service.list_links(db, odid, current_user)]


@router.post("/{odid}/links", response_model=LinkResponse, status_code=status.HTTP_201_CREATED)
@router.post("/{odid}/link", response_model=LinkResponse, status_code=status.HTTP_201_CREATED, include_in_schema=False)
def link_project(
    odid: str,
    link_in: LinkCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    link = link_service.link_project(db, odid, link_in.workspace_id, current_user)
    return _serialize_link(link)


@router.delete("/{odid}/link/{workspace_id}", status_code=status.HTTP_204_NO_CONTENT)
def unlink_project(
    odid: str,
    workspace_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    link_service.unlink_project(db, odid, workspace_id, current_user)


@router.get("/{odid}/audit", response_model=List[AuditEntryResponse])
def project_audit(odid: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """Change history, newest first. Still readable after the project is deleted."""
    if not link_service.can_view_history(db, odid, current_user):
        raise NotFoundError("Project", odid)
    return [_serialize_entry(entry) for entry in audit.list_entries(db, odid)]
