import pytest
from sqlalchemy.orm import Session

import tracker.api.v1.admin as admin_routes
import tracker.api.v1.auth as auth_routes
import tracker.models as models
import tracker.schemas as schemas
from tracker.dependencies import require_admin
from tracker.exceptions import AuthenticationError, AuthorizationError, ConflictError, ValidationError
from tracker.services import user_service
from tests.factories import create_project, create_user, default_workspace, share


def test_login_creates_default_workspace(db_session: Session):
    user_service.create_user(db_session, "dana", "secret123")
    assert db_session.query(models.Workspace).count() == 0

    token = auth_routes.login(schemas.UserLogin(username="dana", password="secret123"), db_session)
    assert token.token
    assert token.token_type == "bearer"
    assert token.user.username == "dana"
    assert db_session.query(models.Workspace).count() == 1

    with pytest.raises(AuthenticationError):
        auth_routes.login(schemas.UserLogin(username="dana", password="wrong"), db_session)


def test_require_admin():
    with pytest.raises(AuthorizationError):
        require_admin(models.User(username="x", is_admin=False))


def test_admin_creates_users(db_session: Session):
    admin = create_user(db_session, "root", is_admin=True)
    created = admin_routes.create_user(
        schemas.UserCreate(username="erin", password="secret123", email="Erin@Example.com"), db_session, admin
    )
    assert created.email == "erin@example.com"
    assert created.auth_provider == "local"

    with pytest.raises(ValidationError):
        admin_routes.create_user(schemas.UserCreate(username="erin", password="secret123"), db_session, admin)
    with pytest.raises(ValidationError) as exc:
        admin_routes.create_user(schemas.UserCreate(username="frank", password="123"), db_session, admin)
    assert exc.value.reason == "password_too_short"


def test_email_must_be_unique(db_session: Session):
    admin = create_user(db_session, "root", is_admin=True)
    alice = create_user(db_session, "alice")
    bob = create_user(db_session, "bob")

    admin_routes.set_email(alice.id, schemas.EmailUpdate(email="team@example.com"), db_session, admin)
    with pytest.raises(ConflictError):
        admin_routes.set_email(bob.id, schemas.EmailUpdate(email="TEAM@example.com"), db_session, admin)

    cleared = admin_routes.set_email(alice.id, schemas.EmailUpdate(email=None), db_session, admin)
    assert cleared.email is None


def test_password_reset_and_change(db_session: Session):
    admin = create_user(db_session, "root", is_admin=True)
    alice = create_user(db_session, "alice")

    admin_routes.reset_password(alice.id, schemas.PasswordReset(password="newpass1"), db_session, admin)
    assert user_service.authenticate(db_session, "alice", "newpass1").id == alice.id

    with pytest.raises(ValidationError) as exc:
        auth_routes.change_password(
            schemas.PasswordChange(currentPassword="wrong", newPassword="another1"), db_session, alice
        )
    assert exc.value.reason == "wrong_password"

    auth_routes.change_password(
        schemas.PasswordChange(currentPassword="newpass1", newPassword="another1"), db_session, alice
    )
    assert user_service.authenticate(db_session, "alice", "another1").id == alice.id


def test_delete_user_cascades(db_session: Session):
    admin = create_user(db_session, "root", is_admin=True)
    alice = create_user(db_session, "alice")
    bob = create_user(db_session, "bob")
    share(db_session, default_workspace(db_session, alice), alice, bob, "editor")
    share(db_session, default_workspace(db_session, bob), bob, alice, "viewer")
    project = create_project(db_session, alice)

    with pytest.raises(ValidationError):
        admin_routes.delete_user(admin.id, db_session, admin)

    admin_routes.delete_user(alice.id, db_session, admin)

    assert db_session.query(models.User).filter(models.User.username == "alice").count() == 0
    assert db_session.query(models.Project).count() == 0
    assert db_session.query(models.WorkspaceShare).count() == 0
    assert [ws.owner_user_id for ws in db_session.query(models.Workspace).all()] == [admin.id, bob.id]
    # History is kept and still attributed by name
    assert {e.acting_username for e in db_session.query(models.AuditEntry).filter_by(project_odid=project.odid)} == {
        "alice",
        "root",
    }
