"""
Contact repository for database operations.
"""

from typing import Optional, List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from practiceflow.db.repositories.base_repository import BaseRepository
from practiceflow.models.contact import Contact
from practiceflow.utils.date_math import utcnow


class ContactRepository(BaseRepository[Contact]):
    """Repository for contact operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Contact, session)

    async def list_by_client(
        self,
        client_id: UUID,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Contact]:
        """List contacts by client ID, primary contact first."""
        query = (
            select(Contact)
            .where(Contact.client_id == client_id)
            .order_by(Contact.is_primary_contact.desc(), Contact.name)
            .offset(skip)
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count_by_client(self, client_id: UUID) -> int:
        """Count contacts for a client."""
        result = await self.session.execute(
            select(func.count(Contact.id)).where(Contact.client_id == client_id)
        )
        return result.scalar() or 0

    async def list_primary_contacts(self, client_id: UUID) -> List[Contact]:
        """All contacts flagged primary for a client (at most one when consistent)."""
        result = await self.session.execute(
            select(Contact)
            .where(Contact.client_id == client_id)
            .where(Contact.is_primary_contact.is_(True))
        )
        return list(result.scalars().all())

    async def clear_primary_contacts(self, client_id: UUID, exclude_id: Optional[UUID] = None) -> int:
        """
        Clear primary status for a client's contacts within the current transaction.

        The demotions are flushed before returning so they reach the database
        ahead of any write that sets the new primary.

        Args:
            client_id: Client whose primaries are cleared
            exclude_id: Contact to leave untouched

        Returns:
            Number of contacts demoted
        """
        demoted = 0
        now = utcnow()
        for contact in await self.list_primary_contacts(client_id):
            if contact.id == exclude_id:
                continue
            contact.is_primary_contact = False
            contact.last_edited = now
            demoted += 1
        await self.session.flush()
        return demoted

    async def list_all(
        self,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Contact]:
        """List all contacts with pagination."""
        query = select(Contact).order_by(Contact.name).offset(skip).limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())
