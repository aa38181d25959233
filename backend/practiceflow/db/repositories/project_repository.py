"""
Project repository for database operations.
"""

from datetime import datetime
from typing import Optional, List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from sqlalchemy.orm import selectinload

from practiceflow.db.repositories.base_repository import BaseRepository
from practiceflow.models.project import Project, Task, WorkStatus


class ProjectRepository(BaseRepository[Project]):
    """Repository for project operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Project, session)

    def _base_query(self):
        """Base query with eager loading of tasks."""
        return (
            select(Project)
            .options(selectinload(Project.tasks))
            .execution_options(populate_existing=True)
        )

    async def get(self, id: UUID) -> Optional[Project]:
        """Get project by ID with tasks loaded."""
        result = await self.session.execute(self._base_query().where(Project.id == id))
        return result.scalar_one_or_none()

    async def list(
        self,
        skip: int = 0,
        limit: int = 100,
        **filters,
    ) -> List[Project]:
        """List projects with pagination and filters, eagerly loading tasks."""
        query = self._base_query()
        for key, value in filters.items():
            if hasattr(Project, key):
                query = query.where(getattr(Project, key) == value)
        query = query.order_by(Project.due_date, Project.name).offset(skip).limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def bump_version(
        self,
        project_id: UUID,
        expected_version: int,
        last_edited: datetime,
        last_edited_by: Optional[str] = None,
    ) -> bool:
        """
        Check-and-set the project version.

        Increments the version only if it still equals expected_version.
        In-session Project objects are not synchronized; callers refresh them.

        Returns:
            True if the row was updated, False if another write got there first
        """
        values = {"version": Project.version + 1, "last_edited": last_edited}
        if last_edited_by is not None:
            values["last_edited_by"] = last_edited_by
        result = await self.session.execute(
            update(Project)
            .where(Project.id == project_id)
            .where(Project.version == expected_version)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1


class TaskRepository(BaseRepository[Task]):
    """Repository for task queries that span projects."""

    def __init__(self, session: AsyncSession):
        super().__init__(Task, session)

    async def list_with_projects(
        self,
        status: Optional[WorkStatus] = None,
        skip: int = 0,
        limit: int = 1000,
    ) -> List[tuple]:
        """List (task, project) pairs across all projects."""
        query = select(Task, Project).join(Project, Task.project_id == Project.id)
        if status is not None:
            query = query.where(Task.status == status)
        query = query.order_by(Project.name, Task.position).offset(skip).limit(limit)
        result = await self.session.execute(query)
        return [(row.Task, row.Project) for row in result]
