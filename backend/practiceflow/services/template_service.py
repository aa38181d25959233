"""
Template service with business logic.
Template task lists keep the same dense ordering as project task lists.
"""

import uuid
from typing import List, Optional, Sequence
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from practiceflow.core.exceptions import NotFoundError
from practiceflow.core.logging import get_logger
from practiceflow.services.base_service import BaseService
from practiceflow.services import task_ordering
from practiceflow.db.repositories.template_repository import TemplateRepository
from practiceflow.models.template import Template, TemplateTask
from practiceflow.schemas.template import (
    RelativeDueDate,
    TimeEstimate,
    TemplateCreate,
    TemplateUpdate,
    TemplateResponse,
    TemplateTaskCreate,
    TemplateTaskUpdate,
    TemplateTaskResponse,
)
from practiceflow.utils.date_math import utcnow

logger = get_logger(__name__)


def _task_columns(task_data) -> dict:
    """Flatten template task schema fields into model columns."""
    data = task_data.model_dump(exclude_unset=True, exclude={"relative_due_date", "time_estimate"})
    if task_data.relative_due_date is not None:
        data["relative_due_value"] = task_data.relative_due_date.value
        data["relative_due_unit"] = task_data.relative_due_date.unit
        data["relative_due_position"] = task_data.relative_due_date.position
    if task_data.time_estimate is not None:
        data["time_estimate_value"] = task_data.time_estimate.value
        data["time_estimate_unit"] = task_data.time_estimate.unit
    return data


def _apply_positions(tasks: Sequence[TemplateTask], ordered: Sequence[TemplateTaskResponse]) -> None:
    """Copy engine-computed positions onto the stored template tasks."""
    positions = {item.id: item.position for item in ordered}
    for task in tasks:
        if task.id in positions and task.position != positions[task.id]:
            task.position = positions[task.id]


class TemplateService(BaseService):
    """Service for template operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.template_repo = TemplateRepository(session)

    async def _get_or_raise(self, template_id: UUID) -> Template:
        template = await self.template_repo.get(template_id)
        if template is None:
            raise NotFoundError("Template", template_id)
        return template

    async def create_template(self, template_data: TemplateCreate) -> TemplateResponse:
        """Create a template; its tasks are positioned in the order given."""
        template = Template(
            name=template_data.name,
            description=template_data.description,
            category=template_data.category,
            client_ids=self._as_strings(template_data.client_ids),
            team_member_ids=list(template_data.team_member_ids),
            tasks=[
                TemplateTask(position=position, **_task_columns(task_data))
                for position, task_data in enumerate(template_data.tasks)
            ],
        )
        self.session.add(template)
        await self.session.flush()
        await self.session.commit()
        logger.info("Template created", extra={"template_id": str(template.id), "tasks": len(template_data.tasks)})
        return await self.get_template(template.id)

    async def get_template(self, template_id: UUID) -> TemplateResponse:
        """Get template by ID."""
        return self._to_response(await self._get_or_raise(template_id))

    async def find_template(self, template_id: UUID) -> Optional[TemplateResponse]:
        """Get template by ID, or None when it no longer exists."""
        template = await self.template_repo.get(template_id)
        return self._to_response(template) if template else None

    async def list_templates(
        self,
        skip: int = 0,
        limit: int = 100,
        category: Optional[str] = None,
    ) -> tuple[List[TemplateResponse], int]:
        """List templates, optionally by category."""
        filters = {} if category is None else {"category": category}
        templates = await self.template_repo.list(skip=skip, limit=limit, **filters)
        total = await self.template_repo.count(**filters)
        return [self._to_response(template) for template in templates], total

    async def list_templates_for_client(self, client_id: UUID) -> tuple[List[TemplateResponse], int]:
        """List templates offered to a client."""
        templates = await self.template_repo.list_for_client(client_id)
        return [self._to_response(template) for template in templates], len(templates)

    async def update_template(self, template_id: UUID, template_data: TemplateUpdate) -> TemplateResponse:
        """Update a template. A supplied task list replaces the stored one."""
        template = await self._get_or_raise(template_id)
        update_dict = self._drop_nulls(
            template_data.model_dump(exclude_unset=True, exclude={"tasks", "client_ids"}),
            ("description", "category"),
        )
        for key, value in update_dict.items():
            setattr(template, key, value)
        if template_data.client_ids is not None:
            template.client_ids = self._as_strings(template_data.client_ids)
        if template_data.tasks is not None:
            template.tasks = [
                TemplateTask(position=position, **_task_columns(task_data))
                for position, task_data in enumerate(template_data.tasks)
            ]
        template.last_edited = utcnow()
        await self.session.flush()
        await self.session.commit()
        return await self.get_template(template_id)

    async def delete_template(self, template_id: UUID) -> None:
        """Delete a template and its tasks. Projects created from it keep their tasks."""
        deleted = await self.template_repo.delete(template_id)
        if not deleted:
            raise NotFoundError("Template", template_id)
        await self.session.commit()

    async def add_template_task(self, template_id: UUID, task_data: TemplateTaskCreate) -> TemplateTaskResponse:
        """Append a task to a template."""
        template = await self._get_or_raise(template_id)
        now = utcnow()
        draft = TemplateTaskResponse(id=uuid.uuid4(), position=0, **task_data.model_dump())
        appended = task_ordering.insert(self._task_responses(template), draft, now)[-1]

        template.tasks.append(
            TemplateTask(id=appended.id, position=appended.position, **_task_columns(task_data))
        )
        template.last_edited = now
        await self.session.flush()
        await self.session.commit()
        return appended

    async def update_template_task(
        self,
        template_id: UUID,
        task_id: UUID,
        task_data: TemplateTaskUpdate,
    ) -> TemplateTaskResponse:
        """Update a template task's content. Position changes go through reorder."""
        template = await self._get_or_raise(template_id)
        task = self._find_task(template, task_id)
        for key, value in self._drop_nulls(_task_columns(task_data), ("description", "assignee_id")).items():
            setattr(task, key, value)
        template.last_edited = utcnow()
        await self.session.flush()
        await self.session.commit()
        return self._task_to_response(task)

    async def delete_template_task(self, template_id: UUID, task_id: UUID) -> List[TemplateTaskResponse]:
        """Remove a template task and compact the remaining positions."""
        template = await self._get_or_raise(template_id)
        now = utcnow()
        remaining = task_ordering.remove(self._task_responses(template), task_id, now, entity="Template task")

        template.tasks.remove(self._find_task(template, task_id))
        _apply_positions(template.tasks, remaining)
        template.last_edited = now
        await self.session.flush()
        await self.session.commit()
        return remaining

    async def reorder_template_task(
        self,
        template_id: UUID,
        task_id: UUID,
        new_index: int,
    ) -> List[TemplateTaskResponse]:
        """Move a template task to a new index and renumber the list."""
        template = await self._get_or_raise(template_id)
        now = utcnow()
        ordered = task_ordering.move(self._task_responses(template), task_id, new_index, now, entity="Template task")

        _apply_positions(template.tasks, ordered)
        template.last_edited = now
        await self.session.flush()
        await self.session.commit()
        return ordered

    @staticmethod
    def _find_task(template: Template, task_id: UUID) -> TemplateTask:
        for task in template.tasks:
            if task.id == task_id:
                return task
        raise NotFoundError("Template task", task_id)

    def _task_responses(self, template: Template) -> List[TemplateTaskResponse]:
        return task_ordering.sort_by_position([self._task_to_response(task) for task in template.tasks])

    @staticmethod
    def _task_to_response(task: TemplateTask) -> TemplateTaskResponse:
        """Convert template task model to response schema."""
        return TemplateTaskResponse(
            id=task.id,
            name=task.name,
            description=task.description,
            position=task.position,
            relative_due_date=RelativeDueDate(
                value=task.relative_due_value,
                unit=task.relative_due_unit,
                position=task.relative_due_position,
            ),
            time_estimate=TimeEstimate(
                value=task.time_estimate_value,
                unit=task.time_estimate_unit,
            ),
            assignee_id=task.assignee_id,
        )

    def _to_response(self, template: Template) -> TemplateResponse:
        """Convert template model to response schema."""
        return TemplateResponse(
            id=template.id,
            name=template.name,
            description=template.description,
            category=template.category,
            client_ids=template.client_ids or [],
            team_member_ids=template.team_member_ids or [],
            tasks=self._task_responses(template),
            created_at=template.created_at,
            last_edited=template.last_edited,
        )
