"""Project templates: reusable task lists, personal or global."""
from typing import Iterable, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from tracker.exceptions import AuthorizationError, NotFoundError
from tracker.models import ProjectTemplate, User
from tracker.schemas.template import TemplateCreate, TemplateFromProject, TemplateUpdate
from tracker.services.permissions import VIEWER
from tracker.services.project_service import get_visible_project


def _task_list(names: Iterable[str]) -> List[dict]:
    # Template tasks always start uncompleted
    return [{"name": name, "completed": False} for name in names]


def _require_global_rights(user: User) -> None:
    if not user.is_admin:
        raise AuthorizationError("Only admins can manage global templates", reason="admin_required")


def list_templates(db: Session, user: User) -> List[ProjectTemplate]:
    return (
        db.query(ProjectTemplate)
        .filter(or_(ProjectTemplate.is_global.is_(True), ProjectTemplate.owner_user_id == user.id))
        .order_by(ProjectTemplate.is_global.asc(), ProjectTemplate.name.asc())
        .all()
    )


def _new_template(name: str, description: Optional[str], tasks: List[dict], is_global: bool, user: User):
    if is_global:
        _require_global_rights(user)
    return ProjectTemplate(
        name=name.strip(),
        description=description or "",
        tasks=tasks,
        is_global=is_global,
        owner_user_id=None if is_global else user.id,
        created_by_user_id=user.id,
    )


def create_template(db: Session, template_in: TemplateCreate, user: User) -> ProjectTemplate:
    template = _new_template(
        template_in.name,
        template_in.description,
        _task_list(task.name for task in template_in.tasks),
        template_in.is_global,
        user,
    )
    db.add(template)
    db.commit()
    db.refresh(template)
    return template


def create_from_project(db: Session, odid: str, template_in: TemplateFromProject, user: User) -> ProjectTemplate:
    project, _ = get_visible_project(db, odid, user, VIEWER)
    description = template_in.description
    if description is None:
        description = f"Created from {project.name}"
    template = _new_template(
        template_in.name,
        description,
        _task_list(task.name for task in project.tasks),
        template_in.is_global,
        user,
    )
    db.add(template)
    db.commit()
    db.refresh(template)
    return template


def _editable_template(db: Session, template_id: int, user: User) -> ProjectTemplate:
    template = db.query(ProjectTemplate).filter(ProjectTemplate.id == template_id).first()
    if template is None or not (template.is_global or template.owner_user_id == user.id):
        raise NotFoundError("Template", template_id)
    if template.is_global:
        _require_global_rights(user)
    return template


def update_template(db: Session, template_id: int, template_in: TemplateUpdate, user: User) -> ProjectTemplate:
    template = _editable_template(db, template_id, user)
    if template_in.name is not None:
        template.name = template_in.name.strip()
    if template_in.description is not None:
        template.description = template_in.description
    if template_in.tasks is not None:
        template.tasks = _task_list(task.name for task in template_in.tasks)
    if template_in.is_global is not None and template_in.is_global != template.is_global:
        _require_global_rights(user)
        template.is_global = template_in.is_global
        template.owner_user_id = None if template.is_global else user.id
    db.commit()
    db.refresh(template)
    return template


def delete_template(db: Session, template_id: int, user: User) -> None:
    template = _editable_template(db, template_id, user)
    db.delete(template)
    db.commit()
