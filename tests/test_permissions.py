import pytest
from sqlalchemy.orm import Session

from tracker.exceptions import AuthorizationError, NotFoundError
from tracker.services import permissions
from tests.factories import create_user, default_workspace, share


def test_roles_rank_viewer_editor_owner():
    assert permissions.satisfies("owner", "editor")
    assert permissions.satisfies("editor", "editor")
    assert not permissions.satisfies("viewer", "editor")
    assert not permissions.satisfies(None, "viewer")
    assert permissions.strongest([None, "viewer", "editor"]) == "editor"
    assert permissions.strongest([None, None]) is None


def test_resolve_permission_for_owner_grantee_and_stranger(db_session: Session):
    alice = create_user(db_session, "alice")
    bob = create_user(db_session, "bob")
    carol = create_user(db_session, "carol")
    workspace = default_workspace(db_session, alice)
    share(db_session, workspace, alice, bob, "viewer")

    assert permissions.resolve_permission(db_session, workspace, alice.id) == "owner"
    assert permissions.resolve_permission(db_session, workspace, bob.id) == "viewer"
    assert permissions.resolve_permission(db_session, workspace, carol.id) is None


def test_require_workspace_access_hides_unshared_workspaces(db_session: Session):
    alice = create_user(db_session, "alice")
    bob = create_user(db_session, "bob")
    workspace = default_workspace(db_session, alice)

    with pytest.raises(NotFoundError):
        permissions.require_workspace_access(db_session, workspace.id, bob, "viewer")

    share(db_session, workspace, alice, bob, "viewer")
    with pytest.raises(AuthorizationError) as exc:
        permissions.require_workspace_access(db_session, workspace.id, bob, "editor")
    assert exc.value.status_code == 403
    assert exc.value.message == "Requires editor permission (you have viewer)"

    found, role = permissions.require_workspace_access(db_session, workspace.id, bob, "viewer")
    assert found.id == workspace.id
    assert role == "viewer"


def test_accessible_workspaces_lists_owned_before_shared(db_session: Session):
    alice = create_user(db_session, "alice")
    bob = create_user(db_session, "bob")
    share(db_session, default_workspace(db_session, bob), bob, alice, "editor")

    listed = permissions.accessible_workspaces(db_session, alice)
    assert [(ws.owner_user_id, role) for ws, role in listed] == [(alice.id, "owner"), (bob.id, "editor")]
