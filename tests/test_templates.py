import pytest
from sqlalchemy.orm import Session

import tracker.api.v1.templates as template_routes
import tracker.schemas as schemas
from tracker.exceptions import AuthorizationError, NotFoundError
from tests.factories import create_project, create_user


def test_personal_template_is_private(db_session: Session):
    alice = create_user(db_session, "alice")
    bob = create_user(db_session, "bob")

    template = template_routes.create_template(
        schemas.TemplateCreate(name="Launch", tasks=[{"name": "Plan", "completed": True}, {"name": "Ship"}]),
        db_session,
        alice,
    )
    assert template.owner_user_id == alice.id
    # Template tasks always start uncompleted
    assert template.tasks == [{"name": "Plan", "completed": False}, {"name": "Ship", "completed": False}]

    assert [t.name for t in template_routes.list_templates(db_session, alice)] == ["Launch"]
    assert template_routes.list_templates(db_session, bob) == []
    with pytest.raises(NotFoundError):
        template_routes.delete_template(template.id, db_session, bob)


def test_global_templates_need_admin(db_session: Session):
    admin = create_user(db_session, "root", is_admin=True)
    alice = create_user(db_session, "alice")

    with pytest.raises(AuthorizationError):
        template_routes.create_template(schemas.TemplateCreate(name="Standard", isGlobal=True), db_session, alice)

    shared = template_routes.create_template(schemas.TemplateCreate(name="Standard", isGlobal=True), db_session, admin)
    assert shared.is_global
    assert [t.name for t in template_routes.list_templates(db_session, alice)] == ["Standard"]

    with pytest.raises(AuthorizationError):
        template_routes.update_template(shared.id, schemas.TemplateUpdate(name="Mine"), db_session, alice)


def test_template_from_project(db_session: Session):
    alice = create_user(db_session, "alice")
    project = create_project(db_session, alice, name="Q3 launch", tasks=[{"name": "Brief", "completed": True}])

    template = template_routes.create_template_from_project(
        project.odid, schemas.TemplateFromProject(name="Launch kit"), db_session, alice
    )
    assert template.description == "Created from Q3 launch"
    assert template.tasks == [{"name": "Brief", "completed": False}]


def test_update_and_delete_own_template(db_session: Session):
    alice = create_user(db_session, "alice")
    template = template_routes.create_template(schemas.TemplateCreate(name="Draft"), db_session, alice)

    updated = template_routes.update_template(
        template.id, schemas.TemplateUpdate(name="Final", tasks=[{"name": "Review"}]), db_session, alice
    )
    assert updated.name == "Final"
    assert updated.tasks == [{"name": "Review", "completed": False}]

    template_routes.delete_template(template.id, db_session, alice)
    assert template_routes.list_templates(db_session, alice) == []
