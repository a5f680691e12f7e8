import pytest
from sqlalchemy.orm import Session

import tracker.api.v1.projects as project_routes
import tracker.models as models
import tracker.schemas as schemas
from tracker.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from tracker.services import link_service
from tests.factories import create_project, create_user, default_workspace, share, update_project


def _link(session, user, odid, workspace):
    return project_routes.link_project(odid, schemas.LinkCreate(workspaceId=workspace.id), session, user)


def test_linked_project_appears_in_target_workspace(db_session: Session):
    alice = create_user(db_session, "alice")
    bob = create_user(db_session, "bob")
    bobs = default_workspace(db_session, bob)
    share(db_session, bobs, bob, alice, "editor")
    project = create_project(db_session, alice, name="Shared roadmap")

    link = _link(db_session, alice, project.odid, bobs)
    assert link.workspace_id == bobs.id
    assert link.workspace_name == "Default"
    assert link.linked_by == "alice"

    listed = project_routes.list_projects(bobs.id, "all", None, db_session, bob)
    assert [p.odid for p in listed] == [project.odid]
    assert listed[0].is_linked
    assert listed[0].source_workspace_name == "Default"
    assert listed[0].workspace_id == default_workspace(db_session, alice).id


def test_edit_through_link_is_seen_at_home(db_session: Session):
    alice = create_user(db_session, "alice")
    bob = create_user(db_session, "bob")
    bobs = default_workspace(db_session, bob)
    share(db_session, bobs, bob, alice, "editor")
    project = create_project(db_session, alice)
    _link(db_session, alice, project.odid, bobs)

    # bob has no share on alice's workspace, only the link gives him access
    update_project(db_session, bob, project.odid, progress=45)

    at_home = project_routes.get_project(project.odid, db_session, alice)
    assert at_home.progress == 45
    assert at_home.last_updated_by == "bob"


def test_link_rules(db_session: Session):
    alice = create_user(db_session, "alice")
    bob = create_user(db_session, "bob")
    carol = create_user(db_session, "carol")
    alices = default_workspace(db_session, alice)
    bobs = default_workspace(db_session, bob)
    carols = default_workspace(db_session, carol)
    share(db_session, bobs, bob, alice, "editor")
    share(db_session, carols, carol, alice, "viewer")
    project = create_project(db_session, alice)

    with pytest.raises(ValidationError) as exc:
        _link(db_session, alice, project.odid, alices)
    assert exc.value.reason == "home_workspace"

    with pytest.raises(AuthorizationError):
        _link(db_session, alice, project.odid, carols)

    with pytest.raises(NotFoundError):
        _link(db_session, carol, project.odid, carols)

    _link(db_session, alice, project.odid, bobs)
    with pytest.raises(ConflictError):
        _link(db_session, alice, project.odid, bobs)


def test_unlink_restores_visibility(db_session: Session):
    alice = create_user(db_session, "alice")
    bob = create_user(db_session, "bob")
    bobs = default_workspace(db_session, bob)
    share(db_session, bobs, bob, alice, "editor")
    project = create_project(db_session, alice)
    _link(db_session, alice, project.odid, bobs)
    assert project_routes.get_project(project.odid, db_session, bob).permission == "owner"

    # The target workspace's owner can drop the link without rights on the home workspace
    project_routes.unlink_project(project.odid, bobs.id, db_session, bob)

    assert project_routes.list_projects(bobs.id, "all", None, db_session, bob) == []
    with pytest.raises(NotFoundError):
        project_routes.get_project(project.odid, db_session, bob)
    with pytest.raises(NotFoundError):
        project_routes.unlink_project(project.odid, bobs.id, db_session, bob)

    actions = [entry.action for entry in project_routes.project_audit(project.odid, db_session, alice)]
    assert actions[:2] == ["UNLINK", "LINK"]


def test_linked_only_user_cannot_delete(db_session: Session):
    alice = create_user(db_session, "alice")
    bob = create_user(db_session, "bob")
    bobs = default_workspace(db_session, bob)
    share(db_session, bobs, bob, alice, "editor")
    project = create_project(db_session, alice)
    _link(db_session, alice, project.odid, bobs)

    with pytest.raises(AuthorizationError) as exc:
        project_routes.delete_project(project.odid, db_session, bob)
    assert exc.value.reason == "not_home_workspace"


def test_deleting_project_removes_its_links(db_session: Session):
    alice = create_user(db_session, "alice")
    bob = create_user(db_session, "bob")
    bobs = default_workspace(db_session, bob)
    share(db_session, bobs, bob, alice, "editor")
    project = create_project(db_session, alice)
    _link(db_session, alice, project.odid, bobs)

    project_routes.delete_project(project.odid, db_session, alice)

    assert db_session.query(models.ProjectLink).count() == 0
    assert project_routes.list_projects(bobs.id, "all", None, db_session, bob) == []


def test_list_links(db_session: Session):
    alice = create_user(db_session, "alice")
    bob = create_user(db_session, "bob")
    bobs = default_workspace(db_session, bob)
    share(db_session, bobs, bob, alice, "editor")
    project = create_project(db_session, alice)
    _link(db_session, alice, project.odid, bobs)

    links = project_routes.list_links(project.odid, db_session, alice)
    assert [(link.workspace_id, link.linked_by) for link in links] == [(bobs.id, "alice")]


def test_concurrent_duplicate_link_is_a_conflict(db_session: Session, monkeypatch):
    alice = create_user(db_session, "alice")
    bob = create_user(db_session, "bob")
    bobs = default_workspace(db_session, bob)
    share(db_session, bobs, bob, alice, "editor")
    project = create_project(db_session, alice)
    _link(db_session, alice, project.odid, bobs)

    # The pre-check misses the row a concurrent request just inserted
    monkeypatch.setattr(link_service, "find_link", lambda *args: None)
    with pytest.raises(ConflictError) as exc:
        _link(db_session, alice, project.odid, bobs)
    assert exc.value.reason == "already_linked"
    assert db_session.query(models.ProjectLink).count() == 1
