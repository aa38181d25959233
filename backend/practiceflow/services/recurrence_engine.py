"""
Recurrence scheduler for repeating projects.
"""

import uuid
from datetime import date, datetime
from typing import Callable, List, Optional

from practiceflow.core.exceptions import InvalidFrequencyError, UnsupportedFrequencyError
from practiceflow.models.project import RecurrenceFrequency, WorkStatus
from practiceflow.schemas.project import OccurrenceSchedule, ProjectDraft, TaskResponse
from practiceflow.schemas.template import TemplateResponse
from practiceflow.services import task_ordering
from practiceflow.services.template_engine import instantiate
from practiceflow.utils.date_math import add_days, add_months, add_years, utcnow

DateShift = Callable[[date], date]

FREQUENCY_SHIFTS = {
    RecurrenceFrequency.DAILY: lambda d: add_days(d, 1),
    RecurrenceFrequency.WEEKLY: lambda d: add_days(d, 7),
    RecurrenceFrequency.MONTHLY: lambda d: add_months(d, 1),
    RecurrenceFrequency.QUARTERLY: lambda d: add_months(d, 3),
    RecurrenceFrequency.YEARLY: lambda d: add_years(d, 1),
}


def resolve_shift(project: ProjectDraft, interval_days: Optional[int] = None) -> DateShift:
    """
    Date shift between consecutive occurrences of a project.

    An explicit interval takes precedence over the frequency. Custom
    frequency falls back to the project's stored interval.

    Raises:
        InvalidFrequencyError: If the project is not repeating or has no frequency
        UnsupportedFrequencyError: If the frequency is Custom and no interval is known
    """
    if not project.repeating:
        raise InvalidFrequencyError(
            "Only repeating projects have occurrences",
            {"project_id": str(project.id)},
        )
    if project.frequency is None:
        raise InvalidFrequencyError(
            "Repeating project has no frequency",
            {"project_id": str(project.id)},
        )

    if interval_days is not None:
        return lambda d: add_days(d, interval_days)

    if project.frequency == RecurrenceFrequency.CUSTOM:
        if project.interval_days is None:
            raise UnsupportedFrequencyError(
                "Custom frequency requires an explicit interval in days",
                {"project_id": str(project.id), "frequency": project.frequency.value},
            )
        stored = project.interval_days
        return lambda d: add_days(d, stored)

    return FREQUENCY_SHIFTS[project.frequency]


def next_occurrence(project: ProjectDraft, interval_days: Optional[int] = None) -> OccurrenceSchedule:
    """
    Compute the next occurrence's start and due dates.

    The start date moves by one interval and the due date keeps its original
    distance from the start. Without a start date only the due date moves.
    """
    shift = resolve_shift(project, interval_days)

    if project.start_date is None:
        return OccurrenceSchedule(start_date=None, due_date=shift(project.due_date))

    duration = project.due_date - project.start_date
    start_date = shift(project.start_date)
    return OccurrenceSchedule(start_date=start_date, due_date=start_date + duration)


def _carry_tasks(
    tasks: List[TaskResponse],
    old_anchor: date,
    new_anchor: date,
    now: datetime,
) -> List[TaskResponse]:
    """Copy tasks forward, keeping each due date's distance from the anchor."""
    offset = new_anchor - old_anchor
    carried = [
        task.model_copy(update={
            "id": uuid.uuid4(),
            "status": WorkStatus.NOT_STARTED,
            "due_date": task.due_date + offset,
            "last_edited": now,
        })
        for task in tasks
    ]
    return task_ordering.normalize_positions(carried, now)


def build_next_occurrence(
    project: ProjectDraft,
    template: Optional[TemplateResponse] = None,
    interval_days: Optional[int] = None,
    now: Optional[datetime] = None,
    last_edited_by: Optional[str] = None,
) -> ProjectDraft:
    """
    Build the next occurrence of a repeating project without storing it.

    Tasks are re-instantiated from the template when one is given, anchored
    at the new start date (or the new due date when there is no start date).
    Otherwise the source tasks are carried forward by the same offset. The
    source project is not modified.
    """
    now = now or utcnow()
    schedule = next_occurrence(project, interval_days)

    new_anchor = schedule.start_date or schedule.due_date
    if template is not None:
        tasks = instantiate(template, new_anchor, now)
    else:
        old_anchor = project.start_date or project.due_date
        tasks = _carry_tasks(project.tasks, old_anchor, new_anchor, now)

    return ProjectDraft(
        id=uuid.uuid4(),
        name=project.name,
        description=project.description,
        client_id=project.client_id,
        status=WorkStatus.NOT_STARTED,
        due_date=schedule.due_date,
        start_date=schedule.start_date,
        assignee_id=project.assignee_id,
        team_member_ids=list(project.team_member_ids),
        labels=list(project.labels),
        repeating=True,
        frequency=project.frequency,
        interval_days=interval_days if interval_days is not None else project.interval_days,
        last_edited_by=last_edited_by or project.last_edited_by,
        template_id=project.template_id,
        tasks=tasks,
        last_edited=now,
    )
