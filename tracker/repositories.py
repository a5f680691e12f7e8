"""Request-scoped data access for projects and workspaces.

Each repository wraps the request's ``Session``; nothing here holds state
across requests.
"""
from typing import List, Optional

from sqlalchemy.orm import Session, selectinload

from tracker.models import Project, ProjectLink, Workspace, WorkspaceShare


class ProjectRepository:
    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(Project).options(
            selectinload(Project.tasks),
            selectinload(Project.notes),
            selectinload(Project.home_workspace),
        )

    def get_by_odid(self, odid: str) -> Optional[Project]:
        return self._query().filter(Project.odid == odid).first()

    def list_native(self, workspace_id: int) -> List[Project]:
        return (
            self._query()
            .filter(Project.home_workspace_id == workspace_id)
            .order_by(Project.created_at.desc(), Project.id.desc())
            .all()
        )

    def list_linked(self, workspace_id: int) -> List[Project]:
        """Projects linked into ``workspace_id``; links to missing projects are skipped by the join."""
        return (
            self._query()
            .join(ProjectLink, ProjectLink.project_odid == Project.odid)
            .filter(ProjectLink.target_workspace_id == workspace_id)
            .order_by(ProjectLink.created_at.desc(), ProjectLink.id.desc())
            .all()
        )

    def add(self, project: Project) -> Project:
        self.db.add(project)
        self.db.flush()
        return project

    def delete(self, project: Project) -> None:
        self.db.delete(project)
        self.db.flush()


class WorkspaceRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, workspace_id: int) -> Optional[Workspace]:
        return self.db.query(Workspace).filter(Workspace.id == workspace_id).first()

    def owned_by(self, user_id: int) -> List[Workspace]:
        return (
            self.db.query(Workspace)
            .filter(Workspace.owner_user_id == user_id)
            .order_by(Workspace.created_at.asc(), Workspace.id.asc())
            .all()
        )

    def count_owned(self, user_id: int) -> int:
        return self.db.query(Workspace).filter(Workspace.owner_user_id == user_id).count()

    def add(self, workspace: Workspace) -> Workspace:
        self.db.add(workspace)
        self.db.flush()
        return workspace

    def get_share(self, workspace_id: int, share_id: int) -> Optional[WorkspaceShare]:
        return (
            self.db.query(WorkspaceShare)
            .filter(WorkspaceShare.id == share_id, WorkspaceShare.workspace_id == workspace_id)
            .first()
        )

    def find_share(self, workspace_id: int, user_id: int) -> Optional[WorkspaceShare]:
        return (
            self.db.query(WorkspaceShare)
            .filter(WorkspaceShare.workspace_id == workspace_id, WorkspaceShare.grantee_user_id == user_id)
            .first()
        )

    def list_shares(self, workspace_id: int) -> List[WorkspaceShare]:
        return (
            self.db.query(WorkspaceShare)
            .filter(WorkspaceShare.workspace_id == workspace_id)
            .order_by(WorkspaceShare.created_at.asc(), WorkspaceShare.id.asc())
            .all()
        )

    def delete(self, workspace: Workspace) -> None:
        self.db.delete(workspace)
        self.db.flush()
