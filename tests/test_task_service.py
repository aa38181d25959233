"""
Task service tests: ordering persisted through the project version check.
"""

from datetime import date

import pytest

from practiceflow.core.exceptions import ConflictError, InvalidPositionError, NotFoundError
from practiceflow.models.project import WorkStatus
from practiceflow.schemas.project import ProjectCreate, TaskBase, TaskCreate, TaskUpdate
from practiceflow.services.project_service import ProjectService
from practiceflow.services.task_service import TaskService


async def make_project(session, *task_names):
    return await ProjectService(session).create_project(ProjectCreate(
        name="Year-end close",
        due_date=date(2024, 12, 31),
        tasks=[TaskBase(name=name, due_date=date(2024, 12, 15)) for name in task_names],
    ))


def task_ids(project):
    return {task.name: task.id for task in project.tasks}


@pytest.mark.asyncio
async def test_created_project_tasks_are_numbered_in_order(test_db_session):
    project = await make_project(test_db_session, "a", "b", "c")

    assert [(task.name, task.position) for task in project.tasks] == [("a", 0), ("b", 1), ("c", 2)]
    assert project.version == 0


@pytest.mark.asyncio
async def test_reorder_persists_new_order_and_bumps_version(test_db_session, test_session_maker):
    project = await make_project(test_db_session, "a", "b", "c", "d")
    ids = task_ids(project)

    ordered = await TaskService(test_db_session).reorder_task(project.id, ids["c"], 0)

    assert [task.name for task in ordered] == ["c", "a", "b", "d"]
    async with test_session_maker() as session:
        tasks, version = await TaskService(session).list_tasks(project.id)
    assert [(task.name, task.position) for task in tasks] == [("c", 0), ("a", 1), ("b", 2), ("d", 3)]
    assert version == 1


@pytest.mark.asyncio
async def test_reorder_out_of_range_leaves_tasks_untouched(test_db_session):
    project = await make_project(test_db_session, "a", "b")
    service = TaskService(test_db_session)

    with pytest.raises(InvalidPositionError):
        await service.reorder_task(project.id, task_ids(project)["a"], 5)

    tasks, version = await service.list_tasks(project.id)
    assert [task.name for task in tasks] == ["a", "b"]
    assert version == 0


@pytest.mark.asyncio
async def test_stale_expected_version_is_a_conflict(test_db_session):
    project = await make_project(test_db_session, "a", "b")
    service = TaskService(test_db_session)
    await service.reorder_task(project.id, task_ids(project)["b"], 0, expected_version=0)

    with pytest.raises(ConflictError) as exc_info:
        await service.reorder_task(project.id, task_ids(project)["b"], 1, expected_version=0)

    assert exc_info.value.status_code == 409


@pytest.mark.asyncio
async def test_lost_version_race_is_a_conflict(test_db_session, test_session_maker):
    project = await make_project(test_db_session, "a", "b", "c")
    service = TaskService(test_db_session)

    async def concurrent_writer(*args, **kwargs):
        return False

    service.project_repo.bump_version = concurrent_writer

    with pytest.raises(ConflictError):
        await service.reorder_task(project.id, task_ids(project)["c"], 0)

    async with test_session_maker() as session:
        tasks, version = await TaskService(session).list_tasks(project.id)
    assert [task.name for task in tasks] == ["a", "b", "c"]
    assert version == 0


@pytest.mark.asyncio
async def test_create_task_appends(test_db_session):
    project = await make_project(test_db_session, "a", "b")
    service = TaskService(test_db_session)

    created = await service.create_task(project.id, TaskCreate(name="c", due_date=date(2024, 12, 20)))

    assert created.position == 2
    assert created.status == WorkStatus.NOT_STARTED
    tasks, version = await service.list_tasks(project.id)
    assert [task.name for task in tasks] == ["a", "b", "c"]
    assert version == 1


@pytest.mark.asyncio
async def test_delete_task_compacts_positions(test_db_session, test_session_maker):
    project = await make_project(test_db_session, "a", "b", "c", "d")

    remaining = await TaskService(test_db_session).delete_task(project.id, task_ids(project)["b"])

    assert [(task.name, task.position) for task in remaining] == [("a", 0), ("c", 1), ("d", 2)]
    async with test_session_maker() as session:
        tasks, _ = await TaskService(session).list_tasks(project.id)
    assert [(task.name, task.position) for task in tasks] == [("a", 0), ("c", 1), ("d", 2)]


@pytest.mark.asyncio
async def test_toggle_task_round_trip(test_db_session):
    project = await make_project(test_db_session, "a")
    service = TaskService(test_db_session)
    task_id = task_ids(project)["a"]

    completed = await service.toggle_task(project.id, task_id)
    reopened = await service.toggle_task(project.id, task_id)

    assert completed.status == WorkStatus.COMPLETE
    assert reopened.status == WorkStatus.NOT_STARTED


@pytest.mark.asyncio
async def test_update_task_ignores_null_name(test_db_session):
    project = await make_project(test_db_session, "a")
    service = TaskService(test_db_session)

    updated = await service.update_task(
        project.id,
        task_ids(project)["a"],
        TaskUpdate(name=None, status=WorkStatus.IN_PROGRESS),
    )

    assert updated.name == "a"
    assert updated.status == WorkStatus.IN_PROGRESS


@pytest.mark.asyncio
async def test_unknown_task_raises_not_found(test_db_session):
    project = await make_project(test_db_session, "a")

    with pytest.raises(NotFoundError) as exc_info:
        await TaskService(test_db_session).toggle_task(project.id, project.id)

    assert exc_info.value.details["entity"] == "Task"


@pytest.mark.asyncio
async def test_list_all_tasks_filters_by_status(test_db_session):
    project = await make_project(test_db_session, "a", "b")
    service = TaskService(test_db_session)
    await service.toggle_task(project.id, task_ids(project)["b"])

    everything = await service.list_all_tasks()
    complete = await service.list_all_tasks(status=WorkStatus.COMPLETE)

    assert len(everything) == 2
    assert [task.name for task in complete] == ["b"]
    assert complete[0].project_id == project.id
    assert complete[0].project_name == "Year-end close"
