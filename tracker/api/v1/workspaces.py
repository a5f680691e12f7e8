"""Workspace and sharing endpoints"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from tracker.database import get_db
from tracker.dependencies import get_current_user
from tracker.models import User, Workspace, WorkspaceShare
from tracker.schemas import (
    LinkableWorkspace,
    ShareCreate,
    ShareResponse,
    ShareUpdate,
    WorkspaceCreate,
    WorkspaceResponse,
    WorkspaceUpdate,
)
from tracker.services import workspace_service
from tracker.services.permissions import OWNER

router = APIRouter()


def _serialize_workspace(workspace: Workspace, role: str) -> WorkspaceResponse:
    return WorkspaceResponse(
        id=workspace.id,
        name=workspace.name,
        owner_user_id=workspace.owner_user_id,
        owner_username=workspace.owner.username if workspace.owner else None,
        permission=role,
        is_owner=role == OWNER,
        created_at=workspace.created_at,
    )


def _serialize_share(share: WorkspaceShare) -> ShareResponse:
    return ShareResponse(
        id=share.id,
        workspace_id=share.workspace_id,
        user_id=share.grantee_user_id,
        username=share.grantee.username,
        permission=share.permission,
        granted_by=share.granted_by.username if share.granted_by else None,
        created_at=share.created_at,
    )


@router.get("", response_model=List[WorkspaceResponse])
def list_workspaces(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """Owned workspaces first, then workspaces shared with the caller."""
    return [_serialize_workspace(ws, role) for ws, role in workspace_service.list_workspaces(db, current_user)]


@router.post("", response_model=WorkspaceResponse, status_code=status.HTTP_201_CREATED)
def create_workspace(
    workspace_in: WorkspaceCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    workspace = workspace_service.create_workspace(db, workspace_in.name, current_user)
    return _serialize_workspace(workspace, OWNER)


@router.get("/linkable", response_model=List[LinkableWorkspace])
def list_linkable_workspaces(
    exclude: Optional[int] = Query(None, description="Workspace to leave out, usually the project's home"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return [
        LinkableWorkspace(id=ws.id, name=ws.name, permission=role)
        for ws, role in workspace_service.list_linkable_workspaces(db, current_user, exclude)
    ]


@router.put("/{workspace_id}", response_model=WorkspaceResponse)
def rename_workspace(
    workspace_id: int,
    workspace_in: WorkspaceUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    workspace = workspace_service.rename_workspace(db, workspace_id, workspace_in.name, current_user)
    return _serialize_workspace(workspace, OWNER)


@router.delete("/{workspace_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_workspace(
    workspace_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    workspace_service.delete_workspace_cascade(db, workspace_id, current_user)


@router.get("/{workspace_id}/shares", response_model=List[ShareResponse])
def list_shares(
    workspace_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return [_serialize_share(share) for share in workspace_service.list_shares(db, workspace_id, current_user)]


@router.post("/{workspace_id}/shares", response_model=ShareResponse, status_code=status.HTTP_201_CREATED)
def share_workspace(
    workspace_id: int,
    share_in: ShareCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    share = workspace_service.share_workspace(
        db,
        workspace_id,
        current_user,
        share_in.permission,
        grantee_id=share_in.user_id,
        grantee_username=share_in.username,
    )
    return _serialize_share(share)


@router.put("/{workspace_id}/shares/{share_id}", response_model=ShareResponse)
def update_share(
    workspace_id: int,
    share_id: int,
    share_in: ShareUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    share = workspace_service.update_share(db, workspace_id, share_id, share_in.permission, current_user)
    return _serialize_share(share)


@router.delete("/{workspace_id}/shares/{share_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_share(
    workspace_id: int,
    share_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    workspace_service.remove_share(db, workspace_id, share_id, current_user)


@router.delete("/{workspace_id}/leave", status_code=status.HTTP_204_NO_CONTENT)
def leave_workspace(
    workspace_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    workspace_service.leave_workspace(db, workspace_id, current_user)
