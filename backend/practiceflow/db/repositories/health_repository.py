"""
Health repository.
Provides database health check functionality.
"""

from typing import Dict

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import func, select, text
from sqlalchemy.exc import SQLAlchemyError

from practiceflow.models import Client, Contact, Project, Template


class HealthRepository:
    """Repository for health check operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def check_database(self) -> bool:
        """
        Check database connectivity.

        Returns:
            True if database is accessible, False otherwise
        """
        try:
            result = await self.session.execute(text("SELECT 1"))
            return result.scalar() == 1
        except SQLAlchemyError:
            return False

    async def count_records(self) -> Dict[str, int]:
        """Row counts of the main tables."""
        counts = {}
        for name, model in (("clients", Client), ("contacts", Contact), ("projects", Project), ("templates", Template)):
            result = await self.session.execute(select(func.count()).select_from(model))
            counts[name] = result.scalar_one()
        return counts
