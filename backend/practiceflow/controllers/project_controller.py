"""
Project controller.
"""

from datetime import date
from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from practiceflow.controllers.base_controller import BaseController
from practiceflow.services.project_service import ProjectService
from practiceflow.models.project import WorkStatus
from practiceflow.schemas.project import (
    OccurrenceCreate,
    ProjectCreate,
    ProjectListResponse,
    ProjectOverrides,
    ProjectResponse,
    ProjectUpdate,
)


class ProjectController(BaseController):
    """Controller for project operations."""

    def __init__(self, session: AsyncSession):
        self.project_service = ProjectService(session)

    async def create_project(self, project_data: ProjectCreate) -> ProjectResponse:
        """Create a new project."""
        return await self.project_service.create_project(project_data)

    async def get_project(self, project_id: UUID) -> ProjectResponse:
        """Get project by ID."""
        return await self.project_service.get_project(project_id)

    async def list_projects(
        self,
        skip: int = 0,
        limit: int = 100,
        client_id: Optional[UUID] = None,
        status: Optional[WorkStatus] = None,
    ) -> ProjectListResponse:
        """List projects with optional filters."""
        projects, total = await self.project_service.list_projects(
            skip=skip,
            limit=limit,
            client_id=client_id,
            status=status,
        )
        return ProjectListResponse(items=projects, total=total)

    async def update_project(self, project_id: UUID, project_data: ProjectUpdate) -> ProjectResponse:
        """Update a project."""
        return await self.project_service.update_project(project_id, project_data)

    async def delete_project(self, project_id: UUID) -> None:
        """Delete a project."""
        await self.project_service.delete_project(project_id)

    async def create_from_template(
        self,
        template_id: UUID,
        anchor_date: date,
        overrides: Optional[ProjectOverrides] = None,
    ) -> ProjectResponse:
        """Create a project from a template."""
        return await self.project_service.instantiate_from_template(template_id, anchor_date, overrides)

    async def create_next_occurrence(self, project_id: UUID, occurrence_data: OccurrenceCreate) -> ProjectResponse:
        """Create the next occurrence of a repeating project."""
        return await self.project_service.generate_next_occurrence(
            project_id,
            interval_days=occurrence_data.interval_days,
            last_edited_by=occurrence_data.last_edited_by,
        )
