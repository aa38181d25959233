"""
Client controller.
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from practiceflow.controllers.base_controller import BaseController
from practiceflow.services.client_service import ClientService
from practiceflow.services.contact_service import ContactService
from practiceflow.services.project_service import ProjectService
from practiceflow.services.template_service import TemplateService
from practiceflow.schemas.client import ClientCreate, ClientUpdate, ClientResponse, ClientListResponse
from practiceflow.schemas.contact import ContactListResponse, ContactResponse
from practiceflow.schemas.project import ProjectListResponse
from practiceflow.schemas.template import TemplateListResponse


class ClientController(BaseController):
    """Controller for client operations and the records attached to a client."""

    def __init__(self, session: AsyncSession):
        self.client_service = ClientService(session)
        self.contact_service = ContactService(session)
        self.project_service = ProjectService(session)
        self.template_service = TemplateService(session)

    async def create_client(self, client_data: ClientCreate) -> ClientResponse:
        """Create a new client."""
        return await self.client_service.create_client(client_data)

    async def get_client(self, client_id: UUID) -> ClientResponse:
        """Get client by ID."""
        return await self.client_service.get_client(client_id)

    async def list_clients(
        self,
        skip: int = 0,
        limit: int = 100,
        is_active: Optional[bool] = None,
    ) -> ClientListResponse:
        """List clients with optional filters."""
        clients, total = await self.client_service.list_clients(
            skip=skip,
            limit=limit,
            is_active=is_active,
        )
        return ClientListResponse(items=clients, total=total)

    async def update_client(self, client_id: UUID, client_data: ClientUpdate) -> ClientResponse:
        """Update a client."""
        return await self.client_service.update_client(client_id, client_data)

    async def delete_client(self, client_id: UUID) -> None:
        """Delete a client."""
        await self.client_service.delete_client(client_id)

    async def list_client_contacts(self, client_id: UUID, skip: int = 0, limit: int = 100) -> ContactListResponse:
        """List a client's contacts, primary contact first."""
        await self.client_service.get_client(client_id)
        contacts, total = await self.contact_service.list_contacts_by_client(client_id, skip, limit)
        return ContactListResponse(items=contacts, total=total)

    async def list_client_projects(self, client_id: UUID, skip: int = 0, limit: int = 100) -> ProjectListResponse:
        """List a client's projects."""
        await self.client_service.get_client(client_id)
        projects, total = await self.project_service.list_projects(skip=skip, limit=limit, client_id=client_id)
        return ProjectListResponse(items=projects, total=total)

    async def list_client_templates(self, client_id: UUID) -> TemplateListResponse:
        """List templates offered to a client."""
        await self.client_service.get_client(client_id)
        templates, total = await self.template_service.list_templates_for_client(client_id)
        return TemplateListResponse(items=templates, total=total)

    async def set_primary_contact(self, client_id: UUID, contact_id: UUID) -> List[ContactResponse]:
        """Make a contact the client's primary contact."""
        return await self.contact_service.set_primary_contact(client_id, contact_id)
