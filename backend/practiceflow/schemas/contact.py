"""
Contact Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from uuid import UUID


class ContactBase(BaseModel):
    """Base contact schema with common fields."""
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=1, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    street: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    postal_code: Optional[str] = Field(None, max_length=20)
    client_id: Optional[UUID] = None
    is_primary_contact: bool = False


class ContactCreate(ContactBase):
    """Schema for creating a contact."""
    pass


class ContactUpdate(BaseModel):
    """
    Schema for updating a contact (all fields optional).

    Sending ``client_id: null`` detaches the contact from its client.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[str] = Field(None, min_length=1, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    street: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    postal_code: Optional[str] = Field(None, max_length=20)
    client_id: Optional[UUID] = None
    is_primary_contact: Optional[bool] = None


class ContactResponse(ContactBase):
    """Schema for contact response."""
    id: UUID
    created_at: datetime
    last_edited: datetime
    client_name: Optional[str] = None  # Name from the referenced client, if any

    class Config:
        from_attributes = True


class ContactListResponse(BaseModel):
    """Schema for contact list response."""
    items: List[ContactResponse]
    total: int


class SetPrimaryContactRequest(BaseModel):
    """Schema for making a contact its client's primary contact."""
    contact_id: UUID
