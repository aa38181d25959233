"""
API v1 router that aggregates all endpoint routers.
"""

from fastapi import APIRouter

from practiceflow.api.v1.endpoints import (
    health,
    clients,
    contacts,
    projects,
    tasks,
    templates,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(clients.router, prefix="/clients", tags=["clients"])
api_router.include_router(contacts.router, prefix="/contacts", tags=["contacts"])
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
api_router.include_router(templates.router, prefix="/templates", tags=["templates"])
