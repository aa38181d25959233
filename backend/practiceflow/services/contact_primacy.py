"""
Primary contact rules.
A client has at most one primary contact; primacy never outlives the client link.
"""

from typing import Any, Mapping, Optional
from uuid import UUID

from pydantic import BaseModel


class PrimacyDecision(BaseModel):
    """Resolved client link and primacy for a contact write."""
    client_id: Optional[UUID] = None
    is_primary_contact: bool = False

    @property
    def clear_client_id(self) -> Optional[UUID]:
        """Client whose other primary contacts must be cleared before this write."""
        return self.client_id if self.is_primary_contact else None


def resolve_primacy(
    current_client_id: Optional[UUID],
    current_is_primary: bool,
    changes: Mapping[str, Any],
) -> PrimacyDecision:
    """
    Work out the final client link and primacy of a contact.

    Moving a contact to another client without re-asserting
    ``is_primary_contact`` drops its primacy, and a contact without a client
    is never primary.

    Args:
        current_client_id: Stored client id (None for a new contact)
        current_is_primary: Stored primacy flag (False for a new contact)
        changes: Fields explicitly set by the caller

    Returns:
        PrimacyDecision for the write
    """
    client_id = changes["client_id"] if "client_id" in changes else current_client_id
    client_changed = client_id != current_client_id

    requested = changes.get("is_primary_contact")
    if requested is not None:
        is_primary = bool(requested)
    elif client_changed:
        is_primary = False
    else:
        is_primary = current_is_primary

    if client_id is None:
        is_primary = False

    return PrimacyDecision(client_id=client_id, is_primary_contact=is_primary)


def resolve_new_contact(client_id: Optional[UUID], is_primary_contact: bool) -> PrimacyDecision:
    """Primacy for a contact being created."""
    return resolve_primacy(
        None,
        False,
        {"client_id": client_id, "is_primary_contact": is_primary_contact},
    )
