"""Version 1 API routers"""
from fastapi import APIRouter

from tracker.api.v1 import admin, auth, projects, templates, workspaces

api_router = APIRouter()
api_router.include_router(auth.router, tags=["auth"])
api_router.include_router(workspaces.router, prefix="/workspaces", tags=["workspaces"])
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(templates.router, prefix="/templates", tags=["templates"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
