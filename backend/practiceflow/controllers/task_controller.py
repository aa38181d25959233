"""
Task controller.
"""

from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from practiceflow.controllers.base_controller import BaseController
from practiceflow.services.task_service import TaskService
from practiceflow.models.project import WorkStatus
from practiceflow.schemas.project import (
    TaskCreate,
    TaskListResponse,
    TaskReorderRequest,
    TaskResponse,
    TaskUpdate,
    TaskWithProjectListResponse,
)


class TaskController(BaseController):
    """Controller for task operations."""

    def __init__(self, session: AsyncSession):
        self.task_service = TaskService(session)

    async def _task_list(self, project_id: UUID, tasks) -> TaskListResponse:
        _, version = await self.task_service.list_tasks(project_id)
        return TaskListResponse(items=tasks, total=len(tasks), project_version=version)

    async def list_tasks(self, project_id: UUID) -> TaskListResponse:
        """List a project's tasks in position order."""
        tasks, version = await self.task_service.list_tasks(project_id)
        return TaskListResponse(items=tasks, total=len(tasks), project_version=version)

    async def create_task(self, project_id: UUID, task_data: TaskCreate) -> TaskResponse:
        """Append a task to a project."""
        return await self.task_service.create_task(project_id, task_data)

    async def update_task(self, project_id: UUID, task_id: UUID, task_data: TaskUpdate) -> TaskResponse:
        """Update a task."""
        return await self.task_service.update_task(project_id, task_id, task_data)

    async def toggle_task(
        self,
        project_id: UUID,
        task_id: UUID,
        expected_version: Optional[int] = None,
    ) -> TaskResponse:
        """Toggle a task between Complete and Not Started."""
        return await self.task_service.toggle_task(project_id, task_id, expected_version)

    async def delete_task(
        self,
        project_id: UUID,
        task_id: UUID,
        expected_version: Optional[int] = None,
    ) -> TaskListResponse:
        """Delete a task; returns the remaining tasks."""
        remaining = await self.task_service.delete_task(project_id, task_id, expected_version)
        return await self._task_list(project_id, remaining)

    async def reorder_task(
        self,
        project_id: UUID,
        task_id: UUID,
        reorder_data: TaskReorderRequest,
    ) -> TaskListResponse:
        """Move a task; returns the renumbered task list."""
        ordered = await self.task_service.reorder_task(
            project_id,
            task_id,
            reorder_data.new_index,
            reorder_data.expected_version,
        )
        return await self._task_list(project_id, ordered)

    async def list_all_tasks(
        self,
        status: Optional[WorkStatus] = None,
        skip: int = 0,
        limit: int = 1000,
    ) -> TaskWithProjectListResponse:
        """List tasks across all projects."""
        tasks = await self.task_service.list_all_tasks(status=status, skip=skip, limit=limit)
        return TaskWithProjectListResponse(items=tasks, total=len(tasks))
