"""
Cross-project task API endpoints.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from practiceflow.db.session import get_db
from practiceflow.controllers.task_controller import TaskController
from practiceflow.models.project import WorkStatus
from practiceflow.schemas.project import TaskWithProjectListResponse

router = APIRouter()


@router.get("", response_model=TaskWithProjectListResponse)
async def list_tasks(
    skip: int = Query(0, ge=0),
    limit: int = Query(1000, ge=1, le=5000),
    db: AsyncSession = Depends(get_db),
) -> TaskWithProjectListResponse:
    """List tasks across all projects."""
    controller = TaskController(db)
    return await controller.list_all_tasks(skip=skip, limit=limit)


@router.get("/status/{task_status}", response_model=TaskWithProjectListResponse)
async def list_tasks_by_status(
    task_status: WorkStatus,
    skip: int = Query(0, ge=0),
    limit: int = Query(1000, ge=1, le=5000),
    db: AsyncSession = Depends(get_db),
) -> TaskWithProjectListResponse:
    """List tasks across all projects with the given status."""
    controller = TaskController(db)
    return await controller.list_all_tasks(status=task_status, skip=skip, limit=limit)
