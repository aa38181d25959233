"""
Template API endpoints.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from practiceflow.db.session import get_db
from practiceflow.controllers.template_controller import TemplateController
from practiceflow.schemas.template import (
    TemplateCreate,
    TemplateListResponse,
    TemplateResponse,
    TemplateTaskCreate,
    TemplateTaskReorderRequest,
    TemplateTaskResponse,
    TemplateTaskUpdate,
    TemplateUpdate,
)

router = APIRouter()


@router.post("", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED)
async def create_template(
    template_data: TemplateCreate,
    db: AsyncSession = Depends(get_db),
) -> TemplateResponse:
    """Create a new template."""
    controller = TemplateController(db)
    return await controller.create_template(template_data)


@router.get("", response_model=TemplateListResponse)
async def list_templates(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    category: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> TemplateListResponse:
    """List templates with optional category filter."""
    controller = TemplateController(db)
    return await controller.list_templates(skip=skip, limit=limit, category=category)


@router.get("/{template_id}", response_model=TemplateResponse)
async def get_template(
    template_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> TemplateResponse:
    """Get template by ID with its tasks."""
    controller = TemplateController(db)
    return await controller.get_template(template_id)


@router.put("/{template_id}", response_model=TemplateResponse)
async def update_template(
    template_id: UUID,
    template_data: TemplateUpdate,
    db: AsyncSession = Depends(get_db),
) -> TemplateResponse:
    """Update a template."""
    controller = TemplateController(db)
    return await controller.update_template(template_id, template_data)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(
    template_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Delete a template and its tasks."""
    controller = TemplateController(db)
    await controller.delete_template(template_id)


@router.post("/{template_id}/tasks", response_model=TemplateTaskResponse, status_code=status.HTTP_201_CREATED)
async def create_template_task(
    template_id: UUID,
    task_data: TemplateTaskCreate,
    db: AsyncSession = Depends(get_db),
) -> TemplateTaskResponse:
    """Append a task to a template."""
    controller = TemplateController(db)
    return await controller.add_task(template_id, task_data)


@router.put("/{template_id}/tasks/{task_id}", response_model=TemplateTaskResponse)
async def update_template_task(
    template_id: UUID,
    task_id: UUID,
    task_data: TemplateTaskUpdate,
    db: AsyncSession = Depends(get_db),
) -> TemplateTaskResponse:
    """Update a template task."""
    controller = TemplateController(db)
    return await controller.update_task(template_id, task_id, task_data)


@router.patch("/{template_id}/tasks/{task_id}/position", response_model=List[TemplateTaskResponse])
async def reorder_template_task(
    template_id: UUID,
    task_id: UUID,
    reorder_data: TemplateTaskReorderRequest,
    db: AsyncSession = Depends(get_db),
) -> List[TemplateTaskResponse]:
    """Move a template task to a new index; returns the renumbered list."""
    controller = TemplateController(db)
    return await controller.reorder_task(template_id, task_id, reorder_data.new_index)


@router.delete("/{template_id}/tasks/{task_id}", response_model=List[TemplateTaskResponse])
async def delete_template_task(
    template_id: UUID,
    task_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> List[TemplateTaskResponse]:
    """Delete a template task; returns the remaining tasks."""
    controller = TemplateController(db)
    return await controller.delete_task(template_id, task_id)
