"""
Template instantiation engine.
Turns a template's relative task blueprints into concrete project tasks.
"""

import uuid
from datetime import date, datetime
from typing import List, Optional

from practiceflow.core.exceptions import PreconditionFailedError
from practiceflow.models.project import WorkStatus
from practiceflow.models.template import RelativeDuePosition, RelativeDueUnit
from practiceflow.schemas.project import TaskResponse
from practiceflow.schemas.template import RelativeDueDate, TemplateResponse
from practiceflow.utils.date_math import add_days, add_months, utcnow


def resolve_due_date(anchor_date: date, relative_due_date: RelativeDueDate) -> date:
    """
    Resolve a relative due date against an anchor date.

    Args:
        anchor_date: Reference date, usually the project start
        relative_due_date: Offset value, unit and direction

    Returns:
        Concrete due date
    """
    amount = relative_due_date.value
    if relative_due_date.position == RelativeDuePosition.BEFORE:
        amount = -amount

    if relative_due_date.unit == RelativeDueUnit.MONTHS:
        return add_months(anchor_date, amount)
    if relative_due_date.unit == RelativeDueUnit.WEEKS:
        return add_days(anchor_date, 7 * amount)
    return add_days(anchor_date, amount)


def validate_template_tasks(template: TemplateResponse) -> None:
    """
    Check that every template task can be instantiated.

    Raises:
        PreconditionFailedError: If a relative due date is negative or a
            time estimate is not positive
    """
    problems = []
    for task in template.tasks:
        if task.relative_due_date.value < 0:
            problems.append({"task_id": str(task.id), "field": "relative_due_date.value"})
        if task.time_estimate.value <= 0:
            problems.append({"task_id": str(task.id), "field": "time_estimate.value"})

    if problems:
        raise PreconditionFailedError(
            f"Template '{template.name}' has malformed tasks",
            {"template_id": str(template.id), "problems": problems},
        )


def instantiate(
    template: TemplateResponse,
    anchor_date: date,
    now: Optional[datetime] = None,
) -> List[TaskResponse]:
    """
    Build concrete tasks from a template.

    Tasks come back in template position order with positions copied from the
    template, so display order follows the template even when due dates do
    not increase monotonically. The template is not modified.
    """
    now = now or utcnow()
    return [
        TaskResponse(
            id=uuid.uuid4(),
            name=template_task.name,
            description=template_task.description,
            status=WorkStatus.NOT_STARTED,
            due_date=resolve_due_date(anchor_date, template_task.relative_due_date),
            position=template_task.position,
            assignee_id=template_task.assignee_id,
            time_estimate=template_task.time_estimate.model_copy(),
            last_edited=now,
        )
        for template_task in sorted(template.tasks, key=lambda t: t.position)
    ]
