"""
Project API endpoints, including the project's task list.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from practiceflow.db.session import get_db
from practiceflow.controllers.project_controller import ProjectController
from practiceflow.controllers.task_controller import TaskController
from practiceflow.models.project import WorkStatus
from practiceflow.schemas.project import (
    OccurrenceCreate,
    ProjectCreate,
    ProjectFromTemplateCreate,
    ProjectListResponse,
    ProjectResponse,
    ProjectUpdate,
    TaskCreate,
    TaskListResponse,
    TaskReorderRequest,
    TaskResponse,
    TaskUpdate,
)

router = APIRouter()


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_data: ProjectCreate,
    db: AsyncSession = Depends(get_db),
) -> ProjectResponse:
    """Create a new project."""
    controller = ProjectController(db)
    return await controller.create_project(project_data)


@router.post("/from-template", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project_from_template(
    request: ProjectFromTemplateCreate,
    db: AsyncSession = Depends(get_db),
) -> ProjectResponse:
    """Create a project with tasks generated from a template."""
    controller = ProjectController(db)
    return await controller.create_from_template(request.template_id, request.anchor_date, request.overrides)


@router.get("", response_model=ProjectListResponse)
async def list_projects(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    client_id: Optional[UUID] = Query(None),
    status: Optional[WorkStatus] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> ProjectListResponse:
    """List projects with optional filters."""
    controller = ProjectController(db)
    return await controller.list_projects(
        skip=skip,
        limit=limit,
        client_id=client_id,
        status=status,
    )


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> ProjectResponse:
    """Get project by ID with its tasks."""
    controller = ProjectController(db)
    return await controller.get_project(project_id)


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: UUID,
    project_data: ProjectUpdate,
    db: AsyncSession = Depends(get_db),
) -> ProjectResponse:
    """Update a project."""
    controller = ProjectController(db)
    return await controller.update_project(project_id, project_data)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Delete a project and its tasks."""
    controller = ProjectController(db)
    await controller.delete_project(project_id)


@router.post("/{project_id}/occurrences", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_next_occurrence(
    project_id: UUID,
    occurrence_data: OccurrenceCreate = OccurrenceCreate(),
    db: AsyncSession = Depends(get_db),
) -> ProjectResponse:
    """Create the next occurrence of a repeating project."""
    controller = ProjectController(db)
    return await controller.create_next_occurrence(project_id, occurrence_data)


@router.get("/{project_id}/tasks", response_model=TaskListResponse)
async def list_project_tasks(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> TaskListResponse:
    """List a project's tasks in position order."""
    controller = TaskController(db)
    return await controller.list_tasks(project_id)


@router.post("/{project_id}/tasks", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_project_task(
    project_id: UUID,
    task_data: TaskCreate,
    db: AsyncSession = Depends(get_db),
) -> TaskResponse:
    """Append a task to a project."""
    controller = TaskController(db)
    return await controller.create_task(project_id, task_data)


@router.put("/{project_id}/tasks/{task_id}", response_model=TaskResponse)
async def update_project_task(
    project_id: UUID,
    task_id: UUID,
    task_data: TaskUpdate,
    db: AsyncSession = Depends(get_db),
) -> TaskResponse:
    """Update a task."""
    controller = TaskController(db)
    return await controller.update_task(project_id, task_id, task_data)


@router.post("/{project_id}/tasks/{task_id}/toggle", response_model=TaskResponse)
async def toggle_project_task(
    project_id: UUID,
    task_id: UUID,
    expected_version: Optional[int] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> TaskResponse:
    """Toggle a task between Complete and Not Started."""
    controller = TaskController(db)
    return await controller.toggle_task(project_id, task_id, expected_version)


@router.patch("/{project_id}/tasks/{task_id}/position", response_model=TaskListResponse)
async def reorder_project_task(
    project_id: UUID,
    task_id: UUID,
    reorder_data: TaskReorderRequest,
    db: AsyncSession = Depends(get_db),
) -> TaskListResponse:
    """Move a task to a new index; returns the renumbered list."""
    controller = TaskController(db)
    return await controller.reorder_task(project_id, task_id, reorder_data)


@router.delete("/{project_id}/tasks/{task_id}", response_model=TaskListResponse)
async def delete_project_task(
    project_id: UUID,
    task_id: UUID,
    expected_version: Optional[int] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> TaskListResponse:
    """Delete a task; returns the remaining tasks with compacted positions."""
    controller = TaskController(db)
    return await controller.delete_task(project_id, task_id, expected_version)
