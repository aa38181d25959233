"""
Template repository for database operations.
"""

from typing import Optional, List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from practiceflow.db.repositories.base_repository import BaseRepository
from practiceflow.models.template import Template


class TemplateRepository(BaseRepository[Template]):
    """Repository for template operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Template, session)

    def _base_query(self):
        """Base query with eager loading of template tasks."""
        return (
            select(Template)
            .options(selectinload(Template.tasks))
            .execution_options(populate_existing=True)
        )

    async def get(self, id: UUID) -> Optional[Template]:
        """Get template by ID with tasks loaded."""
        result = await self.session.execute(self._base_query().where(Template.id == id))
        return result.scalar_one_or_none()

    async def list(
        self,
        skip: int = 0,
        limit: int = 100,
        **filters,
    ) -> List[Template]:
        """List templates with tasks loaded."""
        query = self._base_query()
        for key, value in filters.items():
            if hasattr(Template, key):
                query = query.where(getattr(Template, key) == value)
        query = query.order_by(Template.name).offset(skip).limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_for_client(self, client_id: UUID) -> List[Template]:
        """List templates offered to a client."""
        # client_ids is a JSON list of strings; containment is checked in Python
        # to stay portable across PostgreSQL and SQLite.
        result = await self.session.execute(self._base_query().order_by(Template.name))
        key = str(client_id)
        return [template for template in result.scalars().all() if key in (template.client_ids or [])]
