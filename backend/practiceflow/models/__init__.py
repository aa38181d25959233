"""
Database models.
Import all models here to ensure they're registered with Base.
"""

from practiceflow.models.client import Client, ClientPriority
from practiceflow.models.contact import Contact
from practiceflow.models.project import Project, Task, WorkStatus, RecurrenceFrequency
from practiceflow.models.template import (
    Template,
    TemplateTask,
    RelativeDueUnit,
    RelativeDuePosition,
    TimeEstimateUnit,
)

__all__ = [
    "Client",
    "ClientPriority",
    "Contact",
    "Project",
    "Task",
    "WorkStatus",
    "RecurrenceFrequency",
    "Template",
    "TemplateTask",
    "RelativeDueUnit",
    "RelativeDuePosition",
    "TimeEstimateUnit",
]
