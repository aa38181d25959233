"""
Task ordering engine.

Pure transforms over an ordered list of tasks (or template tasks). Positions
are dense: for N items they are exactly 0..N-1. Every function returns new
item values and leaves its input sequence and items untouched.
"""

from datetime import datetime
from typing import List, Optional, Sequence, TypeVar
from uuid import UUID

from pydantic import BaseModel

from practiceflow.core.exceptions import InvalidPositionError, NotFoundError
from practiceflow.models.project import WorkStatus
from practiceflow.utils.date_math import utcnow

Item = TypeVar("Item", bound=BaseModel)


def _copy(item: Item, now: datetime, **changes) -> Item:
    """Copy an item with changes, stamping last_edited where the item has one."""
    if "last_edited" in type(item).model_fields:
        changes["last_edited"] = now
    return item.model_copy(update=changes)


def sort_by_position(items: Sequence[Item]) -> List[Item]:
    """Items in display order. Ties keep their incoming order."""
    return sorted(items, key=lambda item: item.position)


def next_position(items: Sequence[Item]) -> int:
    """Position for an appended item: max position + 1, or 0 for an empty list."""
    if not items:
        return 0
    return max(item.position for item in items) + 1


def check_index(index: int, size: int) -> None:
    """Raise InvalidPositionError unless 0 <= index < size."""
    if not 0 <= index < size:
        raise InvalidPositionError(index, size)


def find_index(items: Sequence[Item], item_id: UUID, entity: str = "Task") -> int:
    """Index of an item in display order."""
    for index, item in enumerate(sort_by_position(items)):
        if item.id == item_id:
            return index
    raise NotFoundError(entity, item_id)


def _renumber(ordered: Sequence[Item], now: datetime, touched: Optional[UUID] = None) -> List[Item]:
    """Assign positions 0..N-1 in iteration order."""
    result = []
    for index, item in enumerate(ordered):
        if item.position != index or item.id == touched:
            result.append(_copy(item, now, position=index))
        else:
            result.append(item.model_copy())
    return result


def normalize_positions(items: Sequence[Item], now: Optional[datetime] = None) -> List[Item]:
    """Repair gaps or duplicates by renumbering in current display order."""
    return _renumber(sort_by_position(items), now or utcnow())


def insert(items: Sequence[Item], new_item: Item, now: Optional[datetime] = None) -> List[Item]:
    """
    Append an item to the list.

    The new item gets max position + 1. Existing gaps are left as they are;
    on a dense list this equals the item count.

    Returns:
        Display-ordered list ending with the new item
    """
    now = now or utcnow()
    appended = _copy(new_item, now, position=next_position(items))
    return [item.model_copy() for item in sort_by_position(items)] + [appended]


def reorder(
    items: Sequence[Item],
    source_index: int,
    destination_index: int,
    now: Optional[datetime] = None,
) -> List[Item]:
    """
    Move the item at source_index to destination_index and renumber 0..N-1.

    Indexes refer to display order (sorted by position).

    Raises:
        InvalidPositionError: If either index is out of range
    """
    ordered = sort_by_position(items)
    check_index(source_index, len(ordered))
    check_index(destination_index, len(ordered))

    moved = ordered.pop(source_index)
    ordered.insert(destination_index, moved)
    return _renumber(ordered, now or utcnow(), touched=moved.id)


def move(
    items: Sequence[Item],
    item_id: UUID,
    new_index: int,
    now: Optional[datetime] = None,
    entity: str = "Task",
) -> List[Item]:
    """Move the item with the given id to new_index."""
    return reorder(items, find_index(items, item_id, entity), new_index, now)


def remove(
    items: Sequence[Item],
    item_id: UUID,
    now: Optional[datetime] = None,
    entity: str = "Task",
) -> List[Item]:
    """Remove an item and compact the remaining positions to 0..N-2."""
    index = find_index(items, item_id, entity)
    ordered = sort_by_position(items)
    del ordered[index]
    return _renumber(ordered, now or utcnow())


def toggle_status(task: Item, now: Optional[datetime] = None) -> Item:
    """Complete becomes Not Started; anything else becomes Complete."""
    status = WorkStatus.NOT_STARTED if task.status == WorkStatus.COMPLETE else WorkStatus.COMPLETE
    return _copy(task, now or utcnow(), status=status)
