"""
Project service with business logic.
"""

import uuid
from datetime import date
from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from fastapi import status

from practiceflow.core.exceptions import AppException, ConflictError, InvalidFrequencyError, NotFoundError
from practiceflow.core.logging import get_logger
from practiceflow.services.base_service import BaseService
from practiceflow.services import task_ordering
from practiceflow.services.recurrence_engine import build_next_occurrence
from practiceflow.services.task_service import task_from_response, task_to_response
from practiceflow.services.template_engine import instantiate, validate_template_tasks
from practiceflow.services.template_service import TemplateService
from practiceflow.db.repositories.client_repository import ClientRepository
from practiceflow.db.repositories.project_repository import ProjectRepository
from practiceflow.models.project import Project, RecurrenceFrequency, WorkStatus
from practiceflow.schemas.project import (
    ProjectCreate,
    ProjectDraft,
    ProjectOverrides,
    ProjectUpdate,
    ProjectResponse,
    TaskResponse,
)
from practiceflow.utils.date_math import utcnow

logger = get_logger(__name__)

NULLABLE_FIELDS = (
    "description",
    "client_id",
    "start_date",
    "assignee_id",
    "frequency",
    "interval_days",
    "last_edited_by",
)


def check_recurrence(repeating: bool, frequency: Optional[RecurrenceFrequency]) -> None:
    """A repeating project must say how often it repeats."""
    if repeating and frequency is None:
        raise InvalidFrequencyError("Repeating projects require a frequency")


class ProjectService(BaseService):
    """Service for project operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.project_repo = ProjectRepository(session)
        self.client_repo = ClientRepository(session)
        self.template_service = TemplateService(session)

    async def _get_or_raise(self, project_id: UUID) -> Project:
        project = await self.project_repo.get(project_id)
        if project is None:
            raise NotFoundError("Project", project_id)
        return project

    async def _store_draft(self, draft: ProjectDraft) -> ProjectResponse:
        """Persist a fully built project with its tasks in one transaction."""
        project = Project(
            id=draft.id,
            name=draft.name,
            description=draft.description,
            client_id=draft.client_id,
            status=draft.status,
            due_date=draft.due_date,
            start_date=draft.start_date,
            assignee_id=draft.assignee_id,
            team_member_ids=list(draft.team_member_ids),
            labels=list(draft.labels),
            repeating=draft.repeating,
            frequency=draft.frequency,
            interval_days=draft.interval_days,
            template_id=draft.template_id,
            last_edited=draft.last_edited,
            last_edited_by=draft.last_edited_by,
            version=0,
            tasks=[task_from_response(task) for task in draft.tasks],
        )
        self.session.add(project)
        await self.session.flush()
        await self.session.commit()
        return await self.get_project(project.id)

    async def create_project(self, project_data: ProjectCreate) -> ProjectResponse:
        """Create a new project; supplied tasks are appended in order."""
        check_recurrence(project_data.repeating, project_data.frequency)
        now = utcnow()

        tasks: List[TaskResponse] = []
        for task_data in project_data.tasks:
            draft = TaskResponse(
                id=uuid.uuid4(),
                position=0,
                last_edited=now,
                **task_data.model_dump(),
            )
            tasks = task_ordering.insert(tasks, draft, now)

        project = await self._store_draft(ProjectDraft(
            id=uuid.uuid4(),
            tasks=tasks,
            last_edited=now,
            **project_data.model_dump(exclude={"tasks"}),
        ))
        logger.info("Project created", extra={"project_id": str(project.id), "tasks": len(tasks)})
        return project

    async def get_project(self, project_id: UUID) -> ProjectResponse:
        """Get project by ID."""
        project = await self._get_or_raise(project_id)
        return (await self._to_responses([project]))[0]

    async def list_projects(
        self,
        skip: int = 0,
        limit: int = 100,
        client_id: Optional[UUID] = None,
        status: Optional[WorkStatus] = None,
    ) -> tuple[List[ProjectResponse], int]:
        """List projects with optional client and status filters."""
        filters = {}
        if client_id is not None:
            filters["client_id"] = client_id
        if status is not None:
            filters["status"] = status
        projects = await self.project_repo.list(skip=skip, limit=limit, **filters)
        total = await self.project_repo.count(**filters)
        return await self._to_responses(projects), total

    async def update_project(self, project_id: UUID, project_data: ProjectUpdate) -> ProjectResponse:
        """Update a project's own fields. Tasks change through the task endpoints."""
        project = await self._get_or_raise(project_id)
        loaded_version = project.version
        if project_data.expected_version is not None and project_data.expected_version != loaded_version:
            raise ConflictError(
                "Project was modified by another request",
                {"project_id": str(project_id), "expected_version": project_data.expected_version},
            )

        update_dict = self._drop_nulls(
            project_data.model_dump(exclude_unset=True, exclude={"expected_version"}),
            NULLABLE_FIELDS,
        )
        check_recurrence(
            update_dict.get("repeating", project.repeating),
            update_dict.get("frequency", project.frequency),
        )
        due_date = update_dict.get("due_date", project.due_date)
        start_date = update_dict.get("start_date", project.start_date)
        if start_date is not None and due_date < start_date:
            raise AppException("Due date must be on or after start date", status.HTTP_422_UNPROCESSABLE_ENTITY)

        now = utcnow()
        claimed = await self.project_repo.bump_version(
            project_id, loaded_version, now, update_dict.get("last_edited_by"),
        )
        if not claimed:
            await self.session.rollback()
            raise ConflictError("Project was modified by another request", {"project_id": str(project_id)})

        for key, value in update_dict.items():
            setattr(project, key, value)
        await self.session.flush()
        await self.session.commit()
        return await self.get_project(project_id)

    async def delete_project(self, project_id: UUID) -> None:
        """Delete a project and all of its tasks."""
        deleted = await self.project_repo.delete(project_id)
        if not deleted:
            raise NotFoundError("Project", project_id)
        await self.session.commit()
        logger.info("Project deleted", extra={"project_id": str(project_id)})

    async def instantiate_from_template(
        self,
        template_id: UUID,
        anchor_date: date,
        overrides: Optional[ProjectOverrides] = None,
    ) -> ProjectResponse:
        """
        Create a project whose tasks are generated from a template.

        Name, description and team members come from the template unless
        overridden. Without an explicit due date the project is due with its
        last task (or on the anchor date when the template has no tasks).
        Repeating projects start on the anchor date unless overridden.

        Raises:
            NotFoundError: If the template does not exist
            PreconditionFailedError: If the stored template has malformed tasks
            InvalidFrequencyError: If the result repeats without a frequency
        """
        overrides = overrides or ProjectOverrides()
        template = await self.template_service.get_template(template_id)
        validate_template_tasks(template)

        now = utcnow()
        tasks = instantiate(template, anchor_date, now)
        fields = {key: value for key, value in overrides.model_dump(exclude_unset=True).items() if value is not None}

        repeating = fields.get("repeating", False)
        check_recurrence(repeating, fields.get("frequency"))
        fields.setdefault("name", template.name)
        fields.setdefault("description", template.description)
        fields.setdefault("team_member_ids", list(template.team_member_ids))
        fields.setdefault("due_date", max([task.due_date for task in tasks], default=anchor_date))
        if repeating:
            fields.setdefault("start_date", anchor_date)

        project = await self._store_draft(ProjectDraft(
            id=uuid.uuid4(),
            template_id=template.id,
            tasks=tasks,
            last_edited=now,
            **fields,
        ))
        logger.info(
            "Project created from template",
            extra={"project_id": str(project.id), "template_id": str(template_id), "tasks": len(tasks)},
        )
        return project

    async def generate_next_occurrence(
        self,
        project_id: UUID,
        interval_days: Optional[int] = None,
        last_edited_by: Optional[str] = None,
    ) -> ProjectResponse:
        """
        Create the next occurrence of a repeating project.

        The source project is left untouched. Tasks are regenerated from the
        source's template while it still exists, otherwise carried forward.
        """
        source = await self.get_project(project_id)

        template = None
        if source.template_id is not None:
            template = await self.template_service.find_template(source.template_id)
            if template is None:
                logger.warning(
                    "Template for repeating project no longer exists; carrying tasks forward",
                    extra={"project_id": str(project_id), "template_id": str(source.template_id)},
                )
            else:
                validate_template_tasks(template)

        draft = build_next_occurrence(source, template, interval_days, utcnow(), last_edited_by)
        occurrence = await self._store_draft(draft)
        logger.info(
            "Next occurrence generated",
            extra={
                "project_id": str(project_id),
                "occurrence_id": str(occurrence.id),
                "due_date": occurrence.due_date.isoformat(),
            },
        )
        return occurrence

    async def _to_responses(self, projects: List[Project]) -> List[ProjectResponse]:
        """Convert project models to response schemas with client names."""
        names = await self.client_repo.get_names(project.client_id for project in projects)
        return [self._build_response(project, names) for project in projects]

    def _build_response(self, project: Project, names) -> ProjectResponse:
        return ProjectResponse(
            id=project.id,
            name=project.name,
            description=project.description,
            client_id=project.client_id,
            status=project.status,
            due_date=project.due_date,
            start_date=project.start_date,
            assignee_id=project.assignee_id,
            team_member_ids=project.team_member_ids or [],
            labels=project.labels or [],
            repeating=project.repeating,
            frequency=project.frequency,
            interval_days=project.interval_days,
            last_edited_by=project.last_edited_by,
            template_id=project.template_id,
            tasks=task_ordering.sort_by_position([task_to_response(task) for task in project.tasks]),
            last_edited=project.last_edited,
            version=project.version,
            client_name=self._client_name(project.client_id, names),
        )
