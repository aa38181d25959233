"""
Contact service with business logic.
Enforces the one-primary-contact-per-client rule on every write.
"""

from typing import List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from practiceflow.core.exceptions import NotFoundError
from practiceflow.core.logging import get_logger
from practiceflow.services.base_service import BaseService
from practiceflow.services.contact_primacy import PrimacyDecision, resolve_new_contact, resolve_primacy
from practiceflow.db.repositories.client_repository import ClientRepository
from practiceflow.db.repositories.contact_repository import ContactRepository
from practiceflow.models.contact import Contact
from practiceflow.schemas.contact import ContactCreate, ContactUpdate, ContactResponse
from practiceflow.utils.date_math import utcnow

logger = get_logger(__name__)


class ContactService(BaseService):
    """Service for contact operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.contact_repo = ContactRepository(session)
        self.client_repo = ClientRepository(session)

    async def _clear_other_primaries(self, decision: PrimacyDecision, contact_id: UUID = None) -> None:
        """Demote the client's other primaries before the new primary is written."""
        if decision.clear_client_id is None:
            return
        demoted = await self.contact_repo.clear_primary_contacts(decision.clear_client_id, exclude_id=contact_id)
        if demoted:
            logger.info(
                "Primary contact replaced",
                extra={"client_id": str(decision.clear_client_id), "demoted": demoted},
            )

    async def create_contact(self, contact_data: ContactCreate) -> ContactResponse:
        """Create a new contact, taking over primacy for its client if requested."""
        contact_dict = contact_data.model_dump()
        decision = resolve_new_contact(contact_data.client_id, contact_data.is_primary_contact)
        contact_dict["is_primary_contact"] = decision.is_primary_contact

        await self._clear_other_primaries(decision)
        contact = await self.contact_repo.create(**contact_dict)
        await self.session.commit()
        return await self._to_response(contact)

    async def get_contact(self, contact_id: UUID) -> ContactResponse:
        """Get contact by ID."""
        contact = await self.contact_repo.get(contact_id)
        if not contact:
            raise NotFoundError("Contact", contact_id)
        return await self._to_response(contact)

    async def list_contacts_by_client(
        self,
        client_id: UUID,
        skip: int = 0,
        limit: int = 100,
    ) -> tuple[List[ContactResponse], int]:
        """List contacts for a client."""
        contacts = await self.contact_repo.list_by_client(client_id, skip, limit)
        total = await self.contact_repo.count_by_client(client_id)
        return await self._to_responses(contacts), total

    async def list_contacts(
        self,
        skip: int = 0,
        limit: int = 100,
    ) -> tuple[List[ContactResponse], int]:
        """List all contacts with pagination."""
        contacts = await self.contact_repo.list_all(skip, limit)
        total = await self.contact_repo.count()
        return await self._to_responses(contacts), total

    async def update_contact(self, contact_id: UUID, contact_data: ContactUpdate) -> ContactResponse:
        """
        Update a contact.

        Moving a contact to another client or detaching it drops its primacy
        unless ``is_primary_contact`` is set in the same request.
        """
        contact = await self.contact_repo.get(contact_id)
        if not contact:
            raise NotFoundError("Contact", contact_id)

        update_dict = self._drop_nulls(
            contact_data.model_dump(exclude_unset=True),
            ("phone", "street", "city", "state", "postal_code", "client_id", "is_primary_contact"),
        )
        decision = resolve_primacy(contact.client_id, contact.is_primary_contact, update_dict)
        update_dict["client_id"] = decision.client_id
        update_dict["is_primary_contact"] = decision.is_primary_contact

        await self._clear_other_primaries(decision, contact_id)
        updated = await self.contact_repo.update(contact_id, **update_dict)
        await self.session.commit()
        return await self._to_response(updated)

    async def set_primary_contact(self, client_id: UUID, contact_id: UUID) -> List[ContactResponse]:
        """
        Make a contact the primary contact of its client.

        The previous primary is cleared and the new one set in one transaction.

        Returns:
            The client's full contact set after the change
        """
        if await self.client_repo.get(client_id) is None:
            raise NotFoundError("Client", client_id)
        contact = await self.contact_repo.get(contact_id)
        if contact is None or contact.client_id != client_id:
            raise NotFoundError("Contact", contact_id)

        decision = resolve_primacy(contact.client_id, contact.is_primary_contact, {"is_primary_contact": True})
        await self._clear_other_primaries(decision, contact_id)
        contact.is_primary_contact = True
        contact.last_edited = utcnow()
        await self.session.flush()
        await self.session.commit()

        contacts, _ = await self.list_contacts_by_client(client_id, limit=1000)
        return contacts

    async def delete_contact(self, contact_id: UUID) -> None:
        """Delete a contact."""
        deleted = await self.contact_repo.delete(contact_id)
        if not deleted:
            raise NotFoundError("Contact", contact_id)
        await self.session.commit()

    async def _to_responses(self, contacts: List[Contact]) -> List[ContactResponse]:
        """Convert contact models to response schemas with client names."""
        names = await self.client_repo.get_names(contact.client_id for contact in contacts)
        return [self._build_response(contact, names) for contact in contacts]

    async def _to_response(self, contact: Contact) -> ContactResponse:
        """Convert contact model to response schema."""
        return (await self._to_responses([contact]))[0]

    def _build_response(self, contact: Contact, names) -> ContactResponse:
        response = ContactResponse.model_validate(contact)
        response.client_name = self._client_name(contact.client_id, names)
        return response
