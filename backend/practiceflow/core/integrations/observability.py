"""
Observability hooks.
Exception handlers report failures here before translating them to responses.
"""

from fastapi import Request
import logging

from practiceflow.core.config import settings

logger = logging.getLogger(__name__)


def setup_observability() -> None:
    """Announce the service identity used to tag reported exceptions."""
    logger.info(
        "Setting up observability",
        extra={
            "service_name": settings.OTEL_SERVICE_NAME,
            "environment": settings.OTEL_ENVIRONMENT,
        },
    )


def record_exception(exc: Exception, request: Request) -> None:
    """
    Record an exception in the observability backend.

    Args:
        exc: The exception that occurred
        request: The FastAPI request object
    """
    logger.error(
        f"Exception recorded: {type(exc).__name__}",
        extra={
            "exception_message": str(exc),
            "path": request.url.path,
            "method": request.method,
            "service_name": settings.OTEL_SERVICE_NAME,
        },
    )
