"""
Task service with business logic.

Every task write runs the ordering engine over the project's current task
list and claims the project with a version check-and-set, so a write based
on a stale read is rejected instead of corrupting positions.
"""

import uuid
from datetime import datetime
from typing import List, Optional, Sequence
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from practiceflow.core.exceptions import ConflictError, NotFoundError
from practiceflow.core.logging import get_logger
from practiceflow.services.base_service import BaseService
from practiceflow.services import task_ordering
from practiceflow.db.repositories.project_repository import ProjectRepository, TaskRepository
from practiceflow.models.project import Project, Task, WorkStatus
from practiceflow.schemas.project import (
    TaskCreate,
    TaskUpdate,
    TaskResponse,
    TaskWithProjectResponse,
)
from practiceflow.schemas.template import TimeEstimate
from practiceflow.utils.date_math import utcnow

logger = get_logger(__name__)


def task_to_response(task: Task) -> TaskResponse:
    """Convert task model to response schema."""
    time_estimate = None
    if task.time_estimate_value is not None and task.time_estimate_unit is not None:
        time_estimate = TimeEstimate(value=task.time_estimate_value, unit=task.time_estimate_unit)
    return TaskResponse(
        id=task.id,
        name=task.name,
        description=task.description,
        status=task.status,
        due_date=task.due_date,
        position=task.position,
        assignee_id=task.assignee_id,
        time_estimate=time_estimate,
        last_edited=task.last_edited,
    )


def task_from_response(task: TaskResponse) -> Task:
    """Build a task model from an engine-produced task value."""
    return Task(
        id=task.id,
        name=task.name,
        description=task.description,
        status=task.status,
        due_date=task.due_date,
        position=task.position,
        assignee_id=task.assignee_id,
        time_estimate_value=task.time_estimate.value if task.time_estimate else None,
        time_estimate_unit=task.time_estimate.unit if task.time_estimate else None,
        last_edited=task.last_edited,
    )


def apply_task_values(tasks: Sequence[Task], values: Sequence[TaskResponse]) -> None:
    """Copy position, status and last_edited from engine output onto stored tasks."""
    by_id = {value.id: value for value in values}
    for task in tasks:
        value = by_id.get(task.id)
        if value is None:
            continue
        if task.position != value.position:
            task.position = value.position
        if task.status != value.status:
            task.status = value.status
        if task.last_edited != value.last_edited:
            task.last_edited = value.last_edited


class TaskService(BaseService):
    """Service for task operations within a project."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.project_repo = ProjectRepository(session)
        self.task_repo = TaskRepository(session)

    async def _load(self, project_id: UUID, expected_version: Optional[int] = None) -> Project:
        """Load a project with its tasks, rejecting a stale expected version."""
        project = await self.project_repo.get(project_id)
        if project is None:
            raise NotFoundError("Project", project_id)
        if expected_version is not None and expected_version != project.version:
            raise ConflictError(
                "Project was modified by another request",
                {"project_id": str(project_id), "expected_version": expected_version, "current_version": project.version},
            )
        return project

    async def _claim(self, project: Project, now: datetime) -> None:
        """Check-and-set the version read in _load; fails if anyone wrote since."""
        loaded_version = project.version
        claimed = await self.project_repo.bump_version(project.id, loaded_version, now)
        if not claimed:
            await self.session.rollback()
            logger.warning(
                "Stale task write rejected",
                extra={"project_id": str(project.id), "loaded_version": loaded_version},
            )
            raise ConflictError(
                "Project was modified by another request",
                {"project_id": str(project.id), "expected_version": loaded_version},
            )

    async def _finish(self) -> None:
        await self.session.flush()
        await self.session.commit()

    @staticmethod
    def _snapshot(project: Project) -> List[TaskResponse]:
        return task_ordering.sort_by_position([task_to_response(task) for task in project.tasks])

    @staticmethod
    def _find(project: Project, task_id: UUID) -> Task:
        for task in project.tasks:
            if task.id == task_id:
                return task
        raise NotFoundError("Task", task_id)

    async def list_tasks(self, project_id: UUID) -> tuple[List[TaskResponse], int]:
        """List a project's tasks in position order with the project version."""
        project = await self._load(project_id)
        return self._snapshot(project), project.version

    async def create_task(self, project_id: UUID, task_data: TaskCreate) -> TaskResponse:
        """Append a task to a project."""
        project = await self._load(project_id, task_data.expected_version)
        now = utcnow()
        draft = TaskResponse(
            id=uuid.uuid4(),
            status=WorkStatus.NOT_STARTED,
            position=0,
            last_edited=now,
            **task_data.model_dump(exclude={"expected_version"}),
        )
        appended = task_ordering.insert(self._snapshot(project), draft, now)[-1]

        await self._claim(project, now)
        project.tasks.append(task_from_response(appended))
        await self._finish()
        return appended

    async def update_task(self, project_id: UUID, task_id: UUID, task_data: TaskUpdate) -> TaskResponse:
        """Update a task's content or status."""
        project = await self._load(project_id, task_data.expected_version)
        task = self._find(project, task_id)
        now = utcnow()

        await self._claim(project, now)
        update_dict = self._drop_nulls(
            task_data.model_dump(exclude_unset=True, exclude={"expected_version"}),
            ("description", "assignee_id"),
        )
        for key, value in update_dict.items():
            setattr(task, key, value)
        task.last_edited = now
        await self._finish()
        return task_to_response(task)

    async def toggle_task(
        self,
        project_id: UUID,
        task_id: UUID,
        expected_version: Optional[int] = None,
    ) -> TaskResponse:
        """Flip a task between Complete and Not Started."""
        project = await self._load(project_id, expected_version)
        task = self._find(project, task_id)
        now = utcnow()
        toggled = task_ordering.toggle_status(task_to_response(task), now)

        await self._claim(project, now)
        apply_task_values([task], [toggled])
        await self._finish()
        return toggled

    async def delete_task(
        self,
        project_id: UUID,
        task_id: UUID,
        expected_version: Optional[int] = None,
    ) -> List[TaskResponse]:
        """Remove a task and compact the remaining positions."""
        project = await self._load(project_id, expected_version)
        now = utcnow()
        remaining = task_ordering.remove(self._snapshot(project), task_id, now)

        await self._claim(project, now)
        project.tasks.remove(self._find(project, task_id))
        apply_task_values(project.tasks, remaining)
        await self._finish()
        return remaining

    async def reorder_task(
        self,
        project_id: UUID,
        task_id: UUID,
        new_index: int,
        expected_version: Optional[int] = None,
    ) -> List[TaskResponse]:
        """
        Move a task to a new index and renumber the project's tasks 0..N-1.

        Raises:
            NotFoundError: If the project or task does not exist
            InvalidPositionError: If new_index is out of range
            ConflictError: If the project changed since it was read
        """
        project = await self._load(project_id, expected_version)
        now = utcnow()
        ordered = task_ordering.move(self._snapshot(project), task_id, new_index, now)

        await self._claim(project, now)
        apply_task_values(project.tasks, ordered)
        await self._finish()
        logger.info(
            "Task reordered",
            extra={"project_id": str(project_id), "task_id": str(task_id), "new_index": new_index},
        )
        return ordered

    async def list_all_tasks(
        self,
        status: Optional[WorkStatus] = None,
        skip: int = 0,
        limit: int = 1000,
    ) -> List[TaskWithProjectResponse]:
        """List tasks across all projects, each annotated with its project."""
        rows = await self.task_repo.list_with_projects(status, skip, limit)
        return [
            TaskWithProjectResponse(
                **task_to_response(task).model_dump(),
                project_id=project.id,
                project_name=project.name,
                client_id=project.client_id,
            )
            for task, project in rows
        ]
