"""
Contact model for client contact management.
"""

from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.dialects.postgresql import UUID
import uuid

from practiceflow.db.base import Base
from practiceflow.utils.date_math import utcnow


class Contact(Base):
    """Contact model (optionally affiliated with one client)."""

    __tablename__ = "contacts"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    street = Column(String(255), nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    postal_code = Column(String(20), nullable=True)
    client_id = Column(UUID(as_uuid=True), nullable=True, index=True)
    is_primary_contact = Column(Boolean, default=False, nullable=False)  # Only meaningful with client_id
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    last_edited = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
