"""
Client API endpoints.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from practiceflow.db.session import get_db
from practiceflow.controllers.client_controller import ClientController
from practiceflow.schemas.client import (
    ClientCreate,
    ClientUpdate,
    ClientResponse,
    ClientListResponse,
)
from practiceflow.schemas.contact import ContactListResponse, ContactResponse, SetPrimaryContactRequest
from practiceflow.schemas.project import ProjectListResponse
from practiceflow.schemas.template import TemplateListResponse

router = APIRouter()


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    client_data: ClientCreate,
    db: AsyncSession = Depends(get_db),
) -> ClientResponse:
    """Create a new client."""
    controller = ClientController(db)
    return await controller.create_client(client_data)


@router.get("", response_model=ClientListResponse)
async def list_clients(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    is_active: Optional[bool] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> ClientListResponse:
    """List clients with optional filters."""
    controller = ClientController(db)
    return await controller.list_clients(
        skip=skip,
        limit=limit,
        is_active=is_active,
    )


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> ClientResponse:
    """Get client by ID."""
    controller = ClientController(db)
    return await controller.get_client(client_id)


@router.put("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: UUID,
    client_data: ClientUpdate,
    db: AsyncSession = Depends(get_db),
) -> ClientResponse:
    """Update a client."""
    controller = ClientController(db)
    return await controller.update_client(client_id, client_data)


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(
    client_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Delete a client. Contacts and projects keep a dangling reference."""
    controller = ClientController(db)
    await controller.delete_client(client_id)


@router.get("/{client_id}/contacts", response_model=ContactListResponse)
async def list_client_contacts(
    client_id: UUID,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
) -> ContactListResponse:
    """List a client's contacts, primary contact first."""
    controller = ClientController(db)
    return await controller.list_client_contacts(client_id, skip, limit)


@router.put("/{client_id}/primary-contact", response_model=List[ContactResponse])
async def set_primary_contact(
    client_id: UUID,
    request: SetPrimaryContactRequest,
    db: AsyncSession = Depends(get_db),
) -> List[ContactResponse]:
    """Make one of the client's contacts its primary contact."""
    controller = ClientController(db)
    return await controller.set_primary_contact(client_id, request.contact_id)


@router.get("/{client_id}/projects", response_model=ProjectListResponse)
async def list_client_projects(
    client_id: UUID,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
) -> ProjectListResponse:
    """List a client's projects."""
    controller = ClientController(db)
    return await controller.list_client_projects(client_id, skip, limit)


@router.get("/{client_id}/templates", response_model=TemplateListResponse)
async def list_client_templates(
    client_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> TemplateListResponse:
    """List templates offered to a client."""
    controller = ClientController(db)
    return await controller.list_client_templates(client_id)
