"""
Application exceptions and the global exception handlers for the FastAPI application.
Domain failures carry a ``kind`` that is preserved in the JSON error body.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
from typing import Any

from practiceflow.core.integrations.observability import record_exception


logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base application exception."""
    kind = "AppError"

    def __init__(self, message: str, status_code: int = 500, details: Any = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class NotFoundError(AppException):
    """A referenced client, contact, project, task or template does not exist."""
    kind = "NotFound"

    def __init__(self, entity: str, entity_id: Any = None):
        message = f"{entity} not found"
        details = {"entity": entity, "id": str(entity_id)} if entity_id is not None else {"entity": entity}
        super().__init__(message, status.HTTP_404_NOT_FOUND, details)


class InvalidPositionError(AppException):
    """An index lies outside the current list bounds."""
    kind = "InvalidPosition"

    def __init__(self, index: int, size: int):
        super().__init__(
            f"Position {index} is out of range for a list of {size} item(s)",
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            {"index": index, "size": size},
        )


class InvalidFrequencyError(AppException):
    """A repeating project has a missing or unusable frequency."""
    kind = "InvalidFrequency"

    def __init__(self, message: str, details: Any = None):
        super().__init__(message, status.HTTP_422_UNPROCESSABLE_ENTITY, details)


class UnsupportedFrequencyError(InvalidFrequencyError):
    """The frequency has no computed interval and none was supplied."""
    kind = "UnsupportedFrequency"


class ConflictError(AppException):
    """A write was based on a stale version of the record."""
    kind = "Conflict"

    def __init__(self, message: str, details: Any = None):
        super().__init__(message, status.HTTP_409_CONFLICT, details)


class PreconditionFailedError(AppException):
    """Stored data does not satisfy the precondition of an operation."""
    kind = "PreconditionFailed"

    def __init__(self, message: str, details: Any = None):
        super().__init__(message, status.HTTP_412_PRECONDITION_FAILED, details)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle custom application exceptions."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"Application exception: {exc.message}",
        extra={
            "kind": exc.kind,
            "status_code": exc.status_code,
            "path": request.url.path,
            "details": exc.details,
        },
    )

    if exc.status_code >= 500:
        record_exception(exc, request)

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "kind": exc.kind,
                "message": exc.message,
                "details": exc.details,
                "path": request.url.path,
            }
        },
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions."""
    logger.warning(
        f"HTTP exception: {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
        },
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "message": exc.detail,
                "status_code": exc.status_code,
                "path": request.url.path,
            }
        },
    )


def _serialize_validation_errors(errors: list) -> list:
    """Convert validation errors to JSON-serializable format."""
    serialized = []
    for error in errors:
        serialized_error = {}
        for key, value in error.items():
            if key == "ctx" and isinstance(value, dict):
                # ctx may hold the raised ValueError itself
                serialized_error[key] = {
                    ctx_key: str(ctx_value) if isinstance(ctx_value, Exception) else ctx_value
                    for ctx_key, ctx_value in value.items()
                }
            elif isinstance(value, Exception):
                serialized_error[key] = str(value)
            else:
                serialized_error[key] = value
        serialized.append(serialized_error)
    return serialized


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors."""
    serialized_errors = _serialize_validation_errors(exc.errors())

    logger.warning(
        f"Validation error: {serialized_errors}",
        extra={
            "path": request.url.path,
            "errors": serialized_errors,
        },
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": {
                "kind": "ValidationError",
                "message": "Validation error",
                "details": serialized_errors,
                "path": request.url.path,
            }
        },
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(
        f"Unhandled exception: {str(exc)}",
        extra={
            "path": request.url.path,
            "exception_type": type(exc).__name__,
        },
    )

    record_exception(exc, request)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "message": "Internal server error",
                "path": request.url.path,
            }
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
