"""
Client service with business logic.
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from practiceflow.core.exceptions import NotFoundError
from practiceflow.core.logging import get_logger
from practiceflow.services.base_service import BaseService
from practiceflow.db.repositories.client_repository import ClientRepository
from practiceflow.schemas.client import ClientCreate, ClientUpdate, ClientResponse

logger = get_logger(__name__)


class ClientService(BaseService):
    """Service for client operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.client_repo = ClientRepository(session)

    async def create_client(self, client_data: ClientCreate) -> ClientResponse:
        """Create a new client."""
        client = await self.client_repo.create(**client_data.model_dump())
        await self.session.commit()
        logger.info("Client created", extra={"client_id": str(client.id)})
        return ClientResponse.model_validate(client)

    async def get_client(self, client_id: UUID) -> ClientResponse:
        """Get client by ID."""
        client = await self.client_repo.get(client_id)
        if not client:
            raise NotFoundError("Client", client_id)
        return ClientResponse.model_validate(client)

    async def list_clients(
        self,
        skip: int = 0,
        limit: int = 100,
        is_active: Optional[bool] = None,
    ) -> tuple[List[ClientResponse], int]:
        """List clients, optionally filtered by active flag."""
        clients = await self.client_repo.list_ordered(skip, limit, is_active)
        filters = {} if is_active is None else {"is_active": is_active}
        total = await self.client_repo.count(**filters)
        return [ClientResponse.model_validate(client) for client in clients], total

    async def update_client(self, client_id: UUID, client_data: ClientUpdate) -> ClientResponse:
        """Update a client."""
        update_dict = self._drop_nulls(
            client_data.model_dump(exclude_unset=True),
            ("description", "location", "website", "assignee_id"),
        )
        client = await self.client_repo.update(client_id, **update_dict)
        if not client:
            raise NotFoundError("Client", client_id)
        await self.session.commit()
        return ClientResponse.model_validate(client)

    async def delete_client(self, client_id: UUID) -> None:
        """
        Delete a client.

        Contacts and projects referencing the client are left in place and
        report the client as unknown from then on.
        """
        deleted = await self.client_repo.delete(client_id)
        if not deleted:
            raise NotFoundError("Client", client_id)
        await self.session.commit()
        logger.info("Client deleted", extra={"client_id": str(client_id)})
