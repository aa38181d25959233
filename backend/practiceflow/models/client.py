"""
Client model for customer management.
"""

from sqlalchemy import Column, String, Boolean, DateTime, JSON, Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID
import uuid
import enum

from practiceflow.db.base import Base
from practiceflow.utils.date_math import utcnow


class ClientPriority(str, enum.Enum):
    """Client priority enumeration."""
    NONE = "None"
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Client(Base):
    """
    Client model.

    Contacts and projects point at a client through a plain ``client_id``
    lookup column; deleting a client leaves them in place.
    """

    __tablename__ = "clients"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(String(2000), nullable=True)
    location = Column(String(255), nullable=True)
    website = Column(String(255), nullable=True)
    assignee_id = Column(String(100), nullable=True, index=True)
    priority = Column(
        SQLEnum(ClientPriority, values_callable=lambda x: [e.value for e in ClientPriority]),
        nullable=False,
        default=ClientPriority.NONE,
    )
    services = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    last_edited = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
