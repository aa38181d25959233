"""
Project service tests: template instantiation and recurrence.
"""

import uuid
from datetime import date

import pytest

from practiceflow.core.exceptions import ConflictError, InvalidFrequencyError, NotFoundError, UnsupportedFrequencyError
from practiceflow.models.project import RecurrenceFrequency, WorkStatus
from practiceflow.models.template import RelativeDuePosition, RelativeDueUnit, TimeEstimateUnit
from practiceflow.schemas.client import ClientCreate
from practiceflow.schemas.project import ProjectCreate, ProjectOverrides, ProjectUpdate
from practiceflow.schemas.template import RelativeDueDate, TemplateCreate, TemplateTaskCreate, TimeEstimate
from practiceflow.services.client_service import ClientService
from practiceflow.services.project_service import ProjectService
from practiceflow.services.template_service import TemplateService


def template_task(name, value, unit=RelativeDueUnit.DAYS, position=RelativeDuePosition.AFTER):
    return TemplateTaskCreate(
        name=name,
        relative_due_date=RelativeDueDate(value=value, unit=unit, position=position),
        time_estimate=TimeEstimate(value=45, unit=TimeEstimateUnit.MINUTES),
    )


async def make_template(session):
    return await TemplateService(session).create_template(TemplateCreate(
        name="Monthly bookkeeping",
        description="Close the books for the month",
        team_member_ids=["staff-1", "staff-2"],
        tasks=[
            template_task("Request bank statements", 2),
            template_task("Reconcile accounts", 1, RelativeDueUnit.WEEKS),
            template_task("Send reminder", 1, position=RelativeDuePosition.BEFORE),
        ],
    ))


@pytest.mark.asyncio
async def test_instantiate_from_template_defaults(test_db_session):
    template = await make_template(test_db_session)

    project = await ProjectService(test_db_session).instantiate_from_template(template.id, date(2024, 3, 10))

    assert project.name == "Monthly bookkeeping"
    assert project.description == "Close the books for the month"
    assert project.team_member_ids == ["staff-1", "staff-2"]
    assert project.template_id == template.id
    assert [task.name for task in project.tasks] == ["Request bank statements", "Reconcile accounts", "Send reminder"]
    assert [task.due_date for task in project.tasks] == [date(2024, 3, 12), date(2024, 3, 17), date(2024, 3, 9)]
    assert [task.position for task in project.tasks] == [0, 1, 2]
    assert project.due_date == date(2024, 3, 17)
    assert project.start_date is None
    assert project.version == 0


@pytest.mark.asyncio
async def test_instantiate_from_template_with_overrides(test_db_session):
    template = await make_template(test_db_session)
    client = await ClientService(test_db_session).create_client(ClientCreate(name="Harbor Bakery"))

    project = await ProjectService(test_db_session).instantiate_from_template(
        template.id,
        date(2024, 3, 10),
        ProjectOverrides(
            name="Harbor Bakery bookkeeping",
            client_id=client.id,
            repeating=True,
            frequency=RecurrenceFrequency.MONTHLY,
        ),
    )

    assert project.name == "Harbor Bakery bookkeeping"
    assert project.client_name == "Harbor Bakery"
    assert project.repeating is True
    assert project.start_date == date(2024, 3, 10)


@pytest.mark.asyncio
async def test_instantiate_repeating_without_frequency_is_rejected(test_db_session):
    template = await make_template(test_db_session)

    with pytest.raises(InvalidFrequencyError):
        await ProjectService(test_db_session).instantiate_from_template(
            template.id,
            date(2024, 3, 10),
            ProjectOverrides(repeating=True),
        )


@pytest.mark.asyncio
async def test_instantiate_from_missing_template(test_db_session):
    with pytest.raises(NotFoundError):
        await ProjectService(test_db_session).instantiate_from_template(uuid.uuid4(), date(2024, 3, 10))


@pytest.mark.asyncio
async def test_next_occurrence_regenerates_template_tasks(test_db_session):
    template = await make_template(test_db_session)
    service = ProjectService(test_db_session)
    source = await service.instantiate_from_template(
        template.id,
        date(2024, 1, 31),
        ProjectOverrides(repeating=True, frequency=RecurrenceFrequency.MONTHLY, due_date=date(2024, 2, 7)),
    )

    occurrence = await service.generate_next_occurrence(source.id)

    assert occurrence.id != source.id
    assert occurrence.start_date == date(2024, 2, 29)
    assert occurrence.due_date == date(2024, 3, 7)
    assert occurrence.status == WorkStatus.NOT_STARTED
    assert [task.due_date for task in occurrence.tasks] == [date(2024, 3, 2), date(2024, 3, 7), date(2024, 2, 28)]

    unchanged = await service.get_project(source.id)
    assert unchanged.start_date == date(2024, 1, 31)
    assert unchanged.due_date == date(2024, 2, 7)
    _, total = await service.list_projects()
    assert total == 2


@pytest.mark.asyncio
async def test_next_occurrence_carries_tasks_when_template_is_gone(test_db_session):
    template = await make_template(test_db_session)
    service = ProjectService(test_db_session)
    source = await service.instantiate_from_template(
        template.id,
        date(2024, 3, 4),
        ProjectOverrides(repeating=True, frequency=RecurrenceFrequency.WEEKLY),
    )
    await TemplateService(test_db_session).delete_template(template.id)

    occurrence = await service.generate_next_occurrence(source.id)

    assert [task.name for task in occurrence.tasks] == [task.name for task in source.tasks]
    assert [task.due_date for task in occurrence.tasks] == [
        date(2024, 3, 13),
        date(2024, 3, 18),
        date(2024, 3, 10),
    ]


@pytest.mark.asyncio
async def test_custom_frequency_needs_an_interval(test_db_session):
    service = ProjectService(test_db_session)
    source = await service.create_project(ProjectCreate(
        name="Payroll run",
        start_date=date(2024, 3, 1),
        due_date=date(2024, 3, 2),
        repeating=True,
        frequency=RecurrenceFrequency.CUSTOM,
    ))

    with pytest.raises(UnsupportedFrequencyError):
        await service.generate_next_occurrence(source.id)

    occurrence = await service.generate_next_occurrence(source.id, interval_days=10)
    assert occurrence.start_date == date(2024, 3, 11)
    assert occurrence.due_date == date(2024, 3, 12)
    assert occurrence.interval_days == 10


@pytest.mark.asyncio
async def test_non_repeating_project_has_no_next_occurrence(test_db_session):
    service = ProjectService(test_db_session)
    source = await service.create_project(ProjectCreate(name="One-off audit", due_date=date(2024, 6, 30)))

    with pytest.raises(InvalidFrequencyError):
        await service.generate_next_occurrence(source.id)


@pytest.mark.asyncio
async def test_create_repeating_project_requires_frequency(test_db_session):
    with pytest.raises(InvalidFrequencyError):
        await ProjectService(test_db_session).create_project(
            ProjectCreate(name="Payroll run", due_date=date(2024, 3, 2), repeating=True),
        )


@pytest.mark.asyncio
async def test_update_project_checks_expected_version(test_db_session):
    service = ProjectService(test_db_session)
    project = await service.create_project(ProjectCreate(name="Tax return", due_date=date(2024, 4, 15)))

    updated = await service.update_project(
        project.id,
        ProjectUpdate(status=WorkStatus.IN_PROGRESS, expected_version=0),
    )
    assert updated.status == WorkStatus.IN_PROGRESS
    assert updated.version == 1

    with pytest.raises(ConflictError):
        await service.update_project(project.id, ProjectUpdate(name="Renamed", expected_version=0))


@pytest.mark.asyncio
async def test_project_with_deleted_client_reports_unknown_client(test_db_session):
    client = await ClientService(test_db_session).create_client(ClientCreate(name="Summit Dental"))
    service = ProjectService(test_db_session)
    project = await service.create_project(
        ProjectCreate(name="Tax return", due_date=date(2024, 4, 15), client_id=client.id),
    )

    await ClientService(test_db_session).delete_client(client.id)

    projects, _ = await service.list_projects(client_id=client.id)
    assert [item.id for item in projects] == [project.id]
    assert projects[0].client_name == "Unknown Client"
