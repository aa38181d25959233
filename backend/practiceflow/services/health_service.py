"""
Health service.
Provides health check functionality.
"""

import time
from sqlalchemy.ext.asyncio import AsyncSession

from practiceflow.core.logging import get_logger
from practiceflow.services.base_service import BaseService
from practiceflow.db.repositories.health_repository import HealthRepository
from practiceflow.schemas.health import HealthResponse

logger = get_logger(__name__)


class HealthService(BaseService):
    """Service for health check operations."""

    def __init__(self):
        self.start_time = time.time()

    async def get_health(self, session: AsyncSession) -> HealthResponse:
        """
        Get system health status.

        Returns:
            HealthResponse with status, uptime, and checks
        """
        uptime_seconds = int(time.time() - self.start_time)
        uptime_str = f"PT{uptime_seconds}S"  # ISO 8601 duration

        checks = {}
        repo = HealthRepository(session=session)
        db_ok = await repo.check_database()
        checks["database"] = "ok" if db_ok else "error"
        if db_ok:
            checks["records"] = await repo.count_records()
        else:
            logger.warning("Database health check failed")

        status = "ok" if checks["database"] == "ok" else "degraded"

        return HealthResponse(
            status=status,
            uptime=uptime_str,
            checks=checks,
        )
