"""
Template models: reusable task blueprints for projects.
"""

from sqlalchemy import Column, String, Integer, Float, DateTime, JSON, ForeignKey, Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid
import enum

from practiceflow.db.base import Base
from practiceflow.utils.date_math import utcnow


class RelativeDueUnit(str, enum.Enum):
    """Unit of a template task's relative due date."""
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"


class RelativeDuePosition(str, enum.Enum):
    """Whether a relative due date falls before or after the anchor date."""
    BEFORE = "before"
    AFTER = "after"


class TimeEstimateUnit(str, enum.Enum):
    """Time estimate unit (minutes or hours)."""
    MINUTES = "m"
    HOURS = "h"


class Template(Base):
    """Template model."""

    __tablename__ = "templates"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(String(2000), nullable=True)
    category = Column(String(100), nullable=True)
    client_ids = Column(JSON, nullable=False, default=list)
    team_member_ids = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    last_edited = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    # Relationships
    tasks = relationship(
        "TemplateTask",
        back_populates="template",
        cascade="all, delete-orphan",
        order_by="TemplateTask.position",
    )


class TemplateTask(Base):
    """Task blueprint owned by a template."""

    __tablename__ = "template_tasks"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    template_id = Column(UUID(as_uuid=True), ForeignKey("templates.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(String(2000), nullable=True)
    position = Column(Integer, nullable=False, default=0)
    relative_due_value = Column(Integer, nullable=False, default=0)
    relative_due_unit = Column(
        SQLEnum(RelativeDueUnit, values_callable=lambda x: [e.value for e in RelativeDueUnit]),
        nullable=False,
        default=RelativeDueUnit.DAYS,
    )
    relative_due_position = Column(
        SQLEnum(RelativeDuePosition, values_callable=lambda x: [e.value for e in RelativeDuePosition]),
        nullable=False,
        default=RelativeDuePosition.AFTER,
    )
    time_estimate_value = Column(Float, nullable=False)
    time_estimate_unit = Column(
        SQLEnum(TimeEstimateUnit, values_callable=lambda x: [e.value for e in TimeEstimateUnit]),
        nullable=False,
        default=TimeEstimateUnit.HOURS,
    )
    assignee_id = Column(String(100), nullable=True)

    # Relationships
    template = relationship("Template", back_populates="tasks")
