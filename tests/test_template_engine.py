"""
Template instantiation engine tests.
"""

import uuid
from datetime import date, datetime, timezone

import pytest

from practiceflow.core.exceptions import PreconditionFailedError
from practiceflow.models.project import WorkStatus
from practiceflow.models.template import RelativeDuePosition, RelativeDueUnit, TimeEstimateUnit
from practiceflow.schemas.template import RelativeDueDate, TemplateResponse, TemplateTaskResponse, TimeEstimate
from practiceflow.services.template_engine import instantiate, resolve_due_date, validate_template_tasks

CREATED = datetime(2024, 1, 1, tzinfo=timezone.utc)


def relative(value: int, unit: RelativeDueUnit, position: RelativeDuePosition = RelativeDuePosition.AFTER):
    return RelativeDueDate(value=value, unit=unit, position=position)


def template_task(name: str, position: int, due: RelativeDueDate, estimate: float = 30) -> TemplateTaskResponse:
    return TemplateTaskResponse(
        id=uuid.uuid4(),
        name=name,
        position=position,
        relative_due_date=due,
        time_estimate=TimeEstimate(value=estimate, unit=TimeEstimateUnit.MINUTES),
        assignee_id="staff-1",
    )


def make_template(*tasks: TemplateTaskResponse) -> TemplateResponse:
    return TemplateResponse(
        id=uuid.uuid4(),
        name="Monthly bookkeeping",
        tasks=list(tasks),
        created_at=CREATED,
        last_edited=CREATED,
    )


@pytest.mark.parametrize(
    "due, expected",
    [
        (relative(5, RelativeDueUnit.DAYS), date(2024, 3, 15)),
        (relative(0, RelativeDueUnit.DAYS), date(2024, 3, 10)),
        (relative(1, RelativeDueUnit.WEEKS, RelativeDuePosition.BEFORE), date(2024, 3, 3)),
        (relative(2, RelativeDueUnit.WEEKS), date(2024, 3, 24)),
        (relative(1, RelativeDueUnit.MONTHS), date(2024, 4, 10)),
        (relative(3, RelativeDueUnit.MONTHS, RelativeDuePosition.BEFORE), date(2023, 12, 10)),
    ],
)
def test_resolve_due_date(due, expected):
    assert resolve_due_date(date(2024, 3, 10), due) == expected


def test_resolve_due_date_clamps_month_end():
    assert resolve_due_date(date(2024, 1, 31), relative(1, RelativeDueUnit.MONTHS)) == date(2024, 2, 29)


def test_instantiate_follows_template_order_not_due_dates(now):
    template = make_template(
        template_task("Reconcile accounts", 1, relative(1, RelativeDueUnit.DAYS)),
        template_task("Send statements", 2, relative(2, RelativeDueUnit.DAYS, RelativeDuePosition.BEFORE)),
        template_task("Request documents", 0, relative(1, RelativeDueUnit.WEEKS)),
    )

    tasks = instantiate(template, date(2024, 3, 10), now)

    assert [task.name for task in tasks] == ["Request documents", "Reconcile accounts", "Send statements"]
    assert [task.position for task in tasks] == [0, 1, 2]
    assert [task.due_date for task in tasks] == [date(2024, 3, 17), date(2024, 3, 11), date(2024, 3, 8)]


def test_instantiate_builds_fresh_not_started_tasks(now):
    source = template_task("Reconcile accounts", 0, relative(1, RelativeDueUnit.DAYS), estimate=90)
    template = make_template(source)

    task = instantiate(template, date(2024, 3, 10), now)[0]

    assert task.id != source.id
    assert task.status == WorkStatus.NOT_STARTED
    assert task.assignee_id == "staff-1"
    assert task.time_estimate == TimeEstimate(value=90, unit=TimeEstimateUnit.MINUTES)
    assert task.last_edited == now


def test_instantiate_empty_template_yields_no_tasks(now):
    assert instantiate(make_template(), date(2024, 3, 10), now) == []


def test_instantiate_leaves_template_untouched(now):
    template = make_template(template_task("Reconcile accounts", 0, relative(1, RelativeDueUnit.DAYS)))
    before = template.model_dump()

    instantiate(template, date(2024, 3, 10), now)

    assert template.model_dump() == before


def test_validate_template_tasks_accepts_well_formed_template():
    validate_template_tasks(make_template(template_task("Reconcile accounts", 0, relative(0, RelativeDueUnit.DAYS))))


def test_validate_template_tasks_rejects_negative_offset_and_zero_estimate():
    bad_offset = template_task("Reconcile accounts", 0, relative(-2, RelativeDueUnit.DAYS))
    bad_estimate = template_task("Send statements", 1, relative(1, RelativeDueUnit.DAYS), estimate=0)

    with pytest.raises(PreconditionFailedError) as exc_info:
        validate_template_tasks(make_template(bad_offset, bad_estimate))

    assert exc_info.value.status_code == 412
    fields = {problem["field"] for problem in exc_info.value.details["problems"]}
    assert fields == {"relative_due_date.value", "time_estimate.value"}
