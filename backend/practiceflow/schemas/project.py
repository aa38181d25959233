"""
Project and task Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field, model_validator
from typing import Optional, List
from datetime import date, datetime
from uuid import UUID

from practiceflow.models.project import WorkStatus, RecurrenceFrequency
from practiceflow.schemas.template import TimeEstimate


class TaskBase(BaseModel):
    """Base task schema with common fields."""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    due_date: date
    assignee_id: Optional[str] = Field(None, max_length=100)


class TaskCreate(TaskBase):
    """Schema for adding a task to a project. The task is appended."""
    expected_version: Optional[int] = None


class TaskUpdate(BaseModel):
    """Schema for updating a task (all fields optional). Position changes go through reorder."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    status: Optional[WorkStatus] = None
    due_date: Optional[date] = None
    assignee_id: Optional[str] = Field(None, max_length=100)
    expected_version: Optional[int] = None


class TaskResponse(TaskBase):
    """Schema for task response; also the value type of the ordering engine."""
    id: UUID
    status: WorkStatus = WorkStatus.NOT_STARTED
    position: int
    time_estimate: Optional[TimeEstimate] = None
    last_edited: datetime

    class Config:
        from_attributes = True


class TaskWithProjectResponse(TaskResponse):
    """Task annotated with its owning project, for cross-project listings."""
    project_id: UUID
    project_name: str
    client_id: Optional[UUID] = None


class TaskListResponse(BaseModel):
    """Schema for a project's task list."""
    items: List[TaskResponse]
    total: int
    project_version: int


class TaskWithProjectListResponse(BaseModel):
    """Schema for a cross-project task list."""
    items: List[TaskWithProjectResponse]
    total: int


class TaskReorderRequest(BaseModel):
    """Schema for moving a task to a new index in its project."""
    new_index: int
    expected_version: Optional[int] = None


class ProjectBase(BaseModel):
    """Base project schema with common fields."""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    client_id: Optional[UUID] = None
    status: WorkStatus = WorkStatus.NOT_STARTED
    due_date: date
    start_date: Optional[date] = None
    assignee_id: Optional[str] = Field(None, max_length=100)
    team_member_ids: List[str] = []
    labels: List[str] = []
    repeating: bool = False
    frequency: Optional[RecurrenceFrequency] = None
    interval_days: Optional[int] = Field(None, ge=1)
    last_edited_by: Optional[str] = Field(None, max_length=100)


def _check_dates(start_date: Optional[date], due_date: Optional[date]) -> None:
    if start_date is not None and due_date is not None and due_date < start_date:
        raise ValueError("Due date must be on or after start date")


class ProjectCreate(ProjectBase):
    """Schema for creating a project; tasks are appended in list order."""
    tasks: List[TaskBase] = []

    @model_validator(mode='after')
    def validate_dates(self):
        """Validate that due_date is not before start_date."""
        _check_dates(self.start_date, self.due_date)
        return self


class ProjectUpdate(BaseModel):
    """Schema for updating a project (all fields optional)."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    client_id: Optional[UUID] = None
    status: Optional[WorkStatus] = None
    due_date: Optional[date] = None
    start_date: Optional[date] = None
    assignee_id: Optional[str] = Field(None, max_length=100)
    team_member_ids: Optional[List[str]] = None
    labels: Optional[List[str]] = None
    repeating: Optional[bool] = None
    frequency: Optional[RecurrenceFrequency] = None
    interval_days: Optional[int] = Field(None, ge=1)
    last_edited_by: Optional[str] = Field(None, max_length=100)
    expected_version: Optional[int] = None

    @model_validator(mode='after')
    def validate_dates(self):
        """Validate dates when both are provided."""
        _check_dates(self.start_date, self.due_date)
        return self


class ProjectDraft(ProjectBase):
    """A fully built project that has not been stored yet."""
    id: UUID
    template_id: Optional[UUID] = None
    tasks: List[TaskResponse] = []
    last_edited: datetime


class ProjectResponse(ProjectDraft):
    """Schema for project response."""
    version: int = 0
    client_name: Optional[str] = None  # Name from the referenced client, if any

    class Config:
        from_attributes = True


class ProjectListResponse(BaseModel):
    """Schema for project list response."""
    items: List[ProjectResponse]
    total: int


class ProjectOverrides(BaseModel):
    """Project fields that replace what a template would otherwise supply."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    client_id: Optional[UUID] = None
    status: Optional[WorkStatus] = None
    due_date: Optional[date] = None
    start_date: Optional[date] = None
    assignee_id: Optional[str] = Field(None, max_length=100)
    team_member_ids: Optional[List[str]] = None
    labels: Optional[List[str]] = None
    repeating: Optional[bool] = None
    frequency: Optional[RecurrenceFrequency] = None
    interval_days: Optional[int] = Field(None, ge=1)
    last_edited_by: Optional[str] = Field(None, max_length=100)


class ProjectFromTemplateCreate(BaseModel):
    """Schema for creating a project from a template."""
    template_id: UUID
    anchor_date: date
    overrides: ProjectOverrides = ProjectOverrides()


class OccurrenceSchedule(BaseModel):
    """Start and due dates of a repeating project's next occurrence."""
    start_date: Optional[date] = None
    due_date: date


class OccurrenceCreate(BaseModel):
    """Schema for generating the next occurrence of a repeating project."""
    interval_days: Optional[int] = Field(None, ge=1)
    last_edited_by: Optional[str] = Field(None, max_length=100)
