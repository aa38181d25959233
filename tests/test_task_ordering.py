"""
Task ordering engine tests.
"""

import random
import uuid
from datetime import date, datetime, timezone

import pytest

from practiceflow.core.exceptions import InvalidPositionError, NotFoundError
from practiceflow.models.project import WorkStatus
from practiceflow.schemas.project import TaskResponse
from practiceflow.services import task_ordering

EARLIER = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_task(name: str, position: int, status: WorkStatus = WorkStatus.NOT_STARTED) -> TaskResponse:
    return TaskResponse(
        id=uuid.uuid4(),
        name=name,
        due_date=date(2024, 4, 15),
        status=status,
        position=position,
        last_edited=EARLIER,
    )


def make_tasks(*names: str):
    return [make_task(name, index) for index, name in enumerate(names)]


def names(tasks):
    return [task.name for task in task_ordering.sort_by_position(tasks)]


def positions(tasks):
    return sorted(task.position for task in tasks)


def test_insert_into_empty_list_gets_position_zero(now):
    result = task_ordering.insert([], make_task("Collect receipts", 7), now)

    assert len(result) == 1
    assert result[0].position == 0
    assert result[0].last_edited == now


def test_insert_appends_after_highest_position(now):
    tasks = [make_task("a", 0), make_task("b", 2), make_task("c", 5)]

    result = task_ordering.insert(tasks, make_task("d", 0), now)

    assert result[-1].name == "d"
    assert result[-1].position == 6
    assert [task.position for task in result[:-1]] == [0, 2, 5]


def test_reorder_moves_item_and_renumbers(now):
    tasks = make_tasks("a", "b", "c", "d")

    result = task_ordering.reorder(tasks, 2, 0, now)

    assert [task.name for task in result] == ["c", "a", "b", "d"]
    assert [task.position for task in result] == [0, 1, 2, 3]


def test_reorder_to_same_index_keeps_order(now):
    tasks = make_tasks("a", "b", "c")

    result = task_ordering.reorder(tasks, 1, 1, now)

    assert [task.name for task in result] == ["a", "b", "c"]


def test_reorder_stamps_only_changed_items(now):
    tasks = make_tasks("a", "b", "c", "d")

    result = task_ordering.reorder(tasks, 1, 2, now)

    stamped = {task.name for task in result if task.last_edited == now}
    assert stamped == {"b", "c"}


def test_reorder_does_not_modify_input(now):
    tasks = make_tasks("a", "b", "c")

    task_ordering.reorder(tasks, 0, 2, now)

    assert [(task.name, task.position) for task in tasks] == [("a", 0), ("b", 1), ("c", 2)]
    assert all(task.last_edited == EARLIER for task in tasks)


@pytest.mark.parametrize("source, destination", [(-1, 0), (0, 3), (3, 0), (0, -1)])
def test_reorder_rejects_out_of_range_indexes(source, destination, now):
    tasks = make_tasks("a", "b", "c")

    with pytest.raises(InvalidPositionError) as exc_info:
        task_ordering.reorder(tasks, source, destination, now)

    assert exc_info.value.status_code == 422
    assert exc_info.value.details["size"] == 3


def test_reorder_on_empty_list_is_invalid(now):
    with pytest.raises(InvalidPositionError):
        task_ordering.reorder([], 0, 0, now)


def test_move_by_id(now):
    tasks = make_tasks("a", "b", "c", "d")

    result = task_ordering.move(tasks, tasks[3].id, 1, now)

    assert [task.name for task in result] == ["a", "d", "b", "c"]


def test_move_unknown_id_raises_not_found(now):
    with pytest.raises(NotFoundError):
        task_ordering.move(make_tasks("a"), uuid.uuid4(), 0, now)


def test_remove_compacts_positions(now):
    tasks = make_tasks("a", "b", "c", "d")

    result = task_ordering.remove(tasks, tasks[1].id, now)

    assert [task.name for task in result] == ["a", "c", "d"]
    assert [task.position for task in result] == [0, 1, 2]


def test_remove_last_item_leaves_empty_list(now):
    tasks = make_tasks("a")

    assert task_ordering.remove(tasks, tasks[0].id, now) == []


def test_normalize_positions_repairs_gaps_and_duplicates(now):
    tasks = [make_task("a", 3), make_task("b", 3), make_task("c", 10)]

    result = task_ordering.normalize_positions(tasks, now)

    assert [task.name for task in result] == ["a", "b", "c"]
    assert [task.position for task in result] == [0, 1, 2]


def test_toggle_complete_becomes_not_started(now):
    task = make_task("File return", 0, WorkStatus.COMPLETE)

    toggled = task_ordering.toggle_status(task, now)

    assert toggled.status == WorkStatus.NOT_STARTED
    assert toggled.last_edited == now
    assert task.status == WorkStatus.COMPLETE


@pytest.mark.parametrize("status", [WorkStatus.NOT_STARTED, WorkStatus.IN_PROGRESS])
def test_toggle_other_statuses_become_complete(status, now):
    toggled = task_ordering.toggle_status(make_task("File return", 0, status), now)

    assert toggled.status == WorkStatus.COMPLETE


def test_positions_stay_dense_through_mixed_operations(now):
    rng = random.Random(20240301)
    tasks = []
    for step in range(200):
        operation = rng.choice(["insert", "reorder", "remove"]) if tasks else "insert"
        if operation == "insert":
            tasks = task_ordering.insert(tasks, make_task(f"task-{step}", 0), now)
        elif operation == "reorder":
            tasks = task_ordering.reorder(tasks, rng.randrange(len(tasks)), rng.randrange(len(tasks)), now)
        else:
            tasks = task_ordering.remove(tasks, rng.choice(tasks).id, now)

        assert positions(tasks) == list(range(len(tasks)))
