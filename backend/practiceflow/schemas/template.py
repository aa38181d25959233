"""
Template Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field, model_validator
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from practiceflow.models.template import RelativeDueUnit, RelativeDuePosition, TimeEstimateUnit


class RelativeDueDate(BaseModel):
    """Due date expressed relative to an anchor date."""
    value: int
    unit: RelativeDueUnit
    position: RelativeDuePosition


class TimeEstimate(BaseModel):
    """Informational effort estimate."""
    value: float
    unit: TimeEstimateUnit


def _check_task_estimates(
    relative_due_date: Optional[RelativeDueDate],
    time_estimate: Optional[TimeEstimate],
) -> None:
    if relative_due_date is not None and relative_due_date.value < 0:
        raise ValueError("Relative due date value must be zero or greater")
    if time_estimate is not None and time_estimate.value <= 0:
        raise ValueError("Time estimate value must be greater than zero")


class TemplateTaskBase(BaseModel):
    """Base template task schema with common fields."""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    relative_due_date: RelativeDueDate
    time_estimate: TimeEstimate
    assignee_id: Optional[str] = Field(None, max_length=100)


class TemplateTaskCreate(TemplateTaskBase):
    """Schema for creating a template task. Position is assigned on append."""

    @model_validator(mode='after')
    def validate_estimates(self):
        """Reject negative relative due dates and non-positive estimates."""
        _check_task_estimates(self.relative_due_date, self.time_estimate)
        return self


class TemplateTaskUpdate(BaseModel):
    """Schema for updating a template task (all fields optional)."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    relative_due_date: Optional[RelativeDueDate] = None
    time_estimate: Optional[TimeEstimate] = None
    assignee_id: Optional[str] = Field(None, max_length=100)

    @model_validator(mode='after')
    def validate_estimates(self):
        """Reject negative relative due dates and non-positive estimates."""
        _check_task_estimates(self.relative_due_date, self.time_estimate)
        return self


class TemplateTaskResponse(TemplateTaskBase):
    """Schema for template task response."""
    id: UUID
    position: int


class TemplateTaskReorderRequest(BaseModel):
    """Schema for moving a template task to a new index."""
    new_index: int


class TemplateBase(BaseModel):
    """Base template schema with common fields."""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    category: Optional[str] = Field(None, max_length=100)
    client_ids: List[UUID] = []
    team_member_ids: List[str] = []


class TemplateCreate(TemplateBase):
    """Schema for creating a template; tasks are positioned in list order."""
    tasks: List[TemplateTaskCreate] = []


class TemplateUpdate(BaseModel):
    """Schema for updating a template. A task list replaces the existing one."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    category: Optional[str] = Field(None, max_length=100)
    client_ids: Optional[List[UUID]] = None
    team_member_ids: Optional[List[str]] = None
    tasks: Optional[List[TemplateTaskCreate]] = None


class TemplateResponse(TemplateBase):
    """Schema for template response."""
    id: UUID
    tasks: List[TemplateTaskResponse] = []
    created_at: datetime
    last_edited: datetime


class TemplateListResponse(BaseModel):
    """Schema for template list response."""
    items: List[TemplateResponse]
    total: int
