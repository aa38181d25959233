"""
Client repository for database operations.
"""

from typing import Dict, Iterable, List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from practiceflow.db.repositories.base_repository import BaseRepository
from practiceflow.models.client import Client


class ClientRepository(BaseRepository[Client]):
    """Repository for client operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Client, session)

    async def list_ordered(
        self,
        skip: int = 0,
        limit: int = 100,
        is_active: bool = None,
    ) -> List[Client]:
        """List clients by name, optionally only active or inactive ones."""
        query = select(Client)
        if is_active is not None:
            query = query.where(Client.is_active == is_active)
        query = query.order_by(Client.name).offset(skip).limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_names(self, client_ids: Iterable[UUID]) -> Dict[UUID, str]:
        """Map existing client ids to names. Missing ids are simply absent."""
        ids = {client_id for client_id in client_ids if client_id is not None}
        if not ids:
            return {}
        result = await self.session.execute(
            select(Client.id, Client.name).where(Client.id.in_(ids))
        )
        return {row.id: row.name for row in result}
