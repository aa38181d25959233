"""
Template controller.
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from practiceflow.controllers.base_controller import BaseController
from practiceflow.services.template_service import TemplateService
from practiceflow.schemas.template import (
    TemplateCreate,
    TemplateListResponse,
    TemplateResponse,
    TemplateTaskCreate,
    TemplateTaskResponse,
    TemplateTaskUpdate,
    TemplateUpdate,
)


class TemplateController(BaseController):
    """Controller for template operations."""

    def __init__(self, session: AsyncSession):
        self.template_service = TemplateService(session)

    async def create_template(self, template_data: TemplateCreate) -> TemplateResponse:
        """Create a new template."""
        return await self.template_service.create_template(template_data)

    async def get_template(self, template_id: UUID) -> TemplateResponse:
        """Get template by ID."""
        return await self.template_service.get_template(template_id)

    async def list_templates(
        self,
        skip: int = 0,
        limit: int = 100,
        category: Optional[str] = None,
    ) -> TemplateListResponse:
        """List templates with optional category filter."""
        templates, total = await self.template_service.list_templates(skip=skip, limit=limit, category=category)
        return TemplateListResponse(items=templates, total=total)

    async def update_template(self, template_id: UUID, template_data: TemplateUpdate) -> TemplateResponse:
        """Update a template."""
        return await self.template_service.update_template(template_id, template_data)

    async def delete_template(self, template_id: UUID) -> None:
        """Delete a template."""
        await self.template_service.delete_template(template_id)

    async def add_task(self, template_id: UUID, task_data: TemplateTaskCreate) -> TemplateTaskResponse:
        """Append a task to a template."""
        return await self.template_service.add_template_task(template_id, task_data)

    async def update_task(
        self,
        template_id: UUID,
        task_id: UUID,
        task_data: TemplateTaskUpdate,
    ) -> TemplateTaskResponse:
        """Update a template task."""
        return await self.template_service.update_template_task(template_id, task_id, task_data)

    async def delete_task(self, template_id: UUID, task_id: UUID) -> List[TemplateTaskResponse]:
        """Delete a template task; returns the remaining tasks."""
        return await self.template_service.delete_template_task(template_id, task_id)

    async def reorder_task(self, template_id: UUID, task_id: UUID, new_index: int) -> List[TemplateTaskResponse]:
        """Move a template task; returns the renumbered task list."""
        return await self.template_service.reorder_template_task(template_id, task_id, new_index)
