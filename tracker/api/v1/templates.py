"""Project template endpoints"""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from tracker.database import get_db
from tracker.dependencies import get_current_user
from tracker.models import User
from tracker.schemas import TemplateCreate, TemplateFromProject, TemplateResponse, TemplateUpdate
from tracker.services import template_service

router = APIRouter()


@router.get("", response_model=List[TemplateResponse])
def list_templates(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """The caller's own templates plus all global ones."""
    return template_service.list_templates(db, current_user)


@router.post("", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED)
def create_template(
    template_in: TemplateCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return template_service.create_template(db, template_in, current_user)


@router.post("/from-project/{odid}", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED)
def create_template_from_project(
    odid: str,
    template_in: TemplateFromProject,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return template_service.create_from_project(db, odid, template_in, current_user)


@router.put("/{template_id}", response_model=TemplateResponse)
def update_template(
    template_id: int,
    template_in: TemplateUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return template_service.update_template(db, template_id, template_in, current_user)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_template(template_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    template_service.delete_template(db, template_id, current_user)
