"""
Project and task models.
"""

from sqlalchemy import Column, String, Integer, Float, Boolean, Date, DateTime, JSON, ForeignKey, Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid
import enum

from practiceflow.db.base import Base
from practiceflow.models.template import TimeEstimateUnit
from practiceflow.utils.date_math import utcnow


class WorkStatus(str, enum.Enum):
    """Status shared by projects and tasks. Any status may follow any other."""
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETE = "Complete"


class RecurrenceFrequency(str, enum.Enum):
    """How often a repeating project recurs."""
    DAILY = "Daily"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"
    QUARTERLY = "Quarterly"
    YEARLY = "Yearly"
    CUSTOM = "Custom"


class Project(Base):
    """Project model. Owns its tasks; references its client by id only."""

    __tablename__ = "projects"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(String(2000), nullable=True)
    client_id = Column(UUID(as_uuid=True), nullable=True, index=True)
    status = Column(
        SQLEnum(WorkStatus, name="project_status", values_callable=lambda x: [e.value for e in WorkStatus]),
        nullable=False,
        default=WorkStatus.NOT_STARTED,
    )
    due_date = Column(Date, nullable=False)
    start_date = Column(Date, nullable=True)
    assignee_id = Column(String(100), nullable=True, index=True)
    team_member_ids = Column(JSON, nullable=False, default=list)
    template_id = Column(UUID(as_uuid=True), nullable=True)  # Provenance only, not a live link
    repeating = Column(Boolean, default=False, nullable=False)
    frequency = Column(
        SQLEnum(RecurrenceFrequency, values_callable=lambda x: [e.value for e in RecurrenceFrequency]),
        nullable=True,
    )
    interval_days = Column(Integer, nullable=True)  # Explicit interval for Custom frequency
    labels = Column(JSON, nullable=False, default=list)
    last_edited = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    last_edited_by = Column(String(100), nullable=True)
    version = Column(Integer, nullable=False, default=0)

    # Relationships
    tasks = relationship(
        "Task",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="Task.position",
    )


class Task(Base):
    """Task model, owned exclusively by one project."""

    __tablename__ = "tasks"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    project_id = Column(UUID(as_uuid=True), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(String(2000), nullable=True)
    status = Column(
        SQLEnum(WorkStatus, name="task_status", values_callable=lambda x: [e.value for e in WorkStatus]),
        nullable=False,
        default=WorkStatus.NOT_STARTED,
    )
    due_date = Column(Date, nullable=False)
    position = Column(Integer, nullable=False, default=0)
    assignee_id = Column(String(100), nullable=True, index=True)
    time_estimate_value = Column(Float, nullable=True)
    time_estimate_unit = Column(
        SQLEnum(TimeEstimateUnit, name="task_time_estimate_unit", values_callable=lambda x: [e.value for e in TimeEstimateUnit]),
        nullable=True,
    )
    last_edited = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    # Relationships
    project = relationship("Project", back_populates="tasks")
