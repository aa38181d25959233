"""
Recurrence scheduler tests.
"""

import uuid
from datetime import date, datetime, timezone

import pytest

from practiceflow.core.exceptions import InvalidFrequencyError, UnsupportedFrequencyError
from practiceflow.models.project import RecurrenceFrequency, WorkStatus
from practiceflow.models.template import RelativeDuePosition, RelativeDueUnit, TimeEstimateUnit
from practiceflow.schemas.project import ProjectDraft, TaskResponse
from practiceflow.schemas.template import RelativeDueDate, TemplateResponse, TemplateTaskResponse, TimeEstimate
from practiceflow.services.recurrence_engine import build_next_occurrence, next_occurrence

EARLIER = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_project(**overrides) -> ProjectDraft:
    fields = {
        "id": uuid.uuid4(),
        "name": "Monthly bookkeeping",
        "client_id": uuid.uuid4(),
        "due_date": date(2024, 2, 5),
        "start_date": date(2024, 1, 31),
        "repeating": True,
        "frequency": RecurrenceFrequency.MONTHLY,
        "labels": ["bookkeeping"],
        "last_edited": EARLIER,
    }
    fields.update(overrides)
    return ProjectDraft(**fields)


@pytest.mark.parametrize(
    "frequency, start, due, expected_start, expected_due",
    [
        (RecurrenceFrequency.DAILY, date(2024, 2, 28), date(2024, 3, 1), date(2024, 2, 29), date(2024, 3, 2)),
        (RecurrenceFrequency.WEEKLY, date(2024, 3, 4), date(2024, 3, 8), date(2024, 3, 11), date(2024, 3, 15)),
        (RecurrenceFrequency.MONTHLY, date(2024, 1, 31), date(2024, 2, 5), date(2024, 2, 29), date(2024, 3, 5)),
        (RecurrenceFrequency.QUARTERLY, date(2024, 11, 30), date(2024, 12, 15), date(2025, 2, 28), date(2025, 3, 15)),
        (RecurrenceFrequency.YEARLY, date(2024, 2, 29), date(2024, 4, 15), date(2025, 2, 28), date(2025, 4, 15)),
    ],
)
def test_next_occurrence_shifts_start_and_keeps_duration(frequency, start, due, expected_start, expected_due):
    project = make_project(frequency=frequency, start_date=start, due_date=due)

    schedule = next_occurrence(project)

    assert schedule.start_date == expected_start
    assert schedule.due_date == expected_due
    assert schedule.due_date - schedule.start_date == due - start


def test_next_occurrence_without_start_shifts_due_date_only():
    project = make_project(frequency=RecurrenceFrequency.WEEKLY, start_date=None, due_date=date(2024, 3, 1))

    schedule = next_occurrence(project)

    assert schedule.start_date is None
    assert schedule.due_date == date(2024, 3, 8)


def test_custom_frequency_uses_stored_interval():
    project = make_project(
        frequency=RecurrenceFrequency.CUSTOM,
        interval_days=10,
        start_date=date(2024, 3, 1),
        due_date=date(2024, 3, 3),
    )

    schedule = next_occurrence(project)

    assert schedule.start_date == date(2024, 3, 11)
    assert schedule.due_date == date(2024, 3, 13)


def test_custom_frequency_without_interval_is_unsupported():
    project = make_project(frequency=RecurrenceFrequency.CUSTOM, interval_days=None)

    with pytest.raises(UnsupportedFrequencyError) as exc_info:
        next_occurrence(project)

    assert exc_info.value.kind == "UnsupportedFrequency"
    assert exc_info.value.status_code == 422


def test_explicit_interval_overrides_frequency():
    project = make_project(start_date=date(2024, 3, 1), due_date=date(2024, 3, 1))

    schedule = next_occurrence(project, interval_days=14)

    assert schedule.start_date == date(2024, 3, 15)
    assert schedule.due_date == date(2024, 3, 15)


def test_non_repeating_project_has_no_occurrences():
    with pytest.raises(InvalidFrequencyError):
        next_occurrence(make_project(repeating=False))


def test_repeating_project_without_frequency_is_invalid():
    with pytest.raises(InvalidFrequencyError) as exc_info:
        next_occurrence(make_project(frequency=None))

    assert exc_info.value.kind == "InvalidFrequency"


def test_build_next_occurrence_carries_tasks_forward(now):
    task = TaskResponse(
        id=uuid.uuid4(),
        name="Reconcile accounts",
        due_date=date(2024, 2, 3),
        status=WorkStatus.COMPLETE,
        position=0,
        last_edited=EARLIER,
    )
    project = make_project(tasks=[task], status=WorkStatus.COMPLETE)

    occurrence = build_next_occurrence(project, now=now)

    assert occurrence.id != project.id
    assert occurrence.status == WorkStatus.NOT_STARTED
    assert occurrence.start_date == date(2024, 2, 29)
    assert occurrence.due_date == date(2024, 3, 5)
    assert occurrence.client_id == project.client_id
    assert occurrence.labels == ["bookkeeping"]
    assert occurrence.last_edited == now

    carried = occurrence.tasks[0]
    assert carried.id != task.id
    assert carried.status == WorkStatus.NOT_STARTED
    # Same 29-day offset as the start date moved by
    assert carried.due_date == date(2024, 3, 3)
    assert project.tasks[0].status == WorkStatus.COMPLETE


def test_build_next_occurrence_regenerates_tasks_from_template(now):
    template = TemplateResponse(
        id=uuid.uuid4(),
        name="Monthly bookkeeping",
        tasks=[
            TemplateTaskResponse(
                id=uuid.uuid4(),
                name="Request bank statements",
                position=0,
                relative_due_date=RelativeDueDate(
                    value=3,
                    unit=RelativeDueUnit.DAYS,
                    position=RelativeDuePosition.AFTER,
                ),
                time_estimate=TimeEstimate(value=1, unit=TimeEstimateUnit.HOURS),
            ),
        ],
        created_at=EARLIER,
        last_edited=EARLIER,
    )
    project = make_project(template_id=template.id)

    occurrence = build_next_occurrence(project, template, now=now, last_edited_by="staff-2")

    assert occurrence.template_id == template.id
    assert [task.name for task in occurrence.tasks] == ["Request bank statements"]
    assert occurrence.tasks[0].due_date == date(2024, 3, 3)
    assert occurrence.last_edited_by == "staff-2"
