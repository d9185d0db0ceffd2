"""
FastAPI application setup for the tasklist API.

Creates the FastAPI app, wires the task repository into app state,
registers routes, and installs the exception handlers that give every
error the same JSON shape.
"""

import logging
import time
import traceback
from enum import Enum

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from tasklist import __version__
from tasklist.core.api.routes import health, tasks
from tasklist.core.config import TasklistConfig, load_config
from tasklist.core.tasks import JsonTaskStore, StorageWriteError, TaskRepository
from tasklist.core.tasks.validation import TaskValidationError, Violation

logger = logging.getLogger(__name__)


# Error codes for consistent error responses
class ErrorCode(str, Enum):
    """Standard error codes for API responses."""

    # Client errors (4xx)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_JSON = "INVALID_JSON"
    INVALID_REQUEST = "INVALID_REQUEST"
    NOT_FOUND = "NOT_FOUND"

    # Server errors (5xx)
    STORAGE_ERROR = "STORAGE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str
    error_code: ErrorCode
    request_id: str | None = None


class ValidationErrorResponse(BaseModel):
    """Error response for request bodies that break task rules."""

    errors: list[Violation]
    error_code: ErrorCode = ErrorCode.VALIDATION_ERROR
    request_id: str | None = None


def _error_response(
    request: Request, status_code: int, error_code: ErrorCode, message: str
) -> JSONResponse:
    body = ErrorResponse(error=message, error_code=error_code, request_id=str(id(request)))
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """
    Handle HTTPException with the standard error body.

    Routes raise HTTPException for not-found and storage failures; the
    status code picks the error code.
    """
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        error_code = ErrorCode.NOT_FOUND
    elif exc.status_code >= 500:
        if isinstance(exc.__cause__, StorageWriteError):
            error_code = ErrorCode.STORAGE_ERROR
        else:
            error_code = ErrorCode.INTERNAL_ERROR
    else:
        error_code = ErrorCode.INVALID_REQUEST

    if exc.status_code >= 500:
        logger.error(
            "HTTP %d on %s %s: %s (cause: %s)",
            exc.status_code,
            request.method,
            request.url.path,
            exc.detail,
            exc.__cause__,
        )
    else:
        logger.info(
            "HTTP %d on %s %s: %s",
            exc.status_code,
            request.method,
            request.url.path,
            exc.detail,
        )

    detail_msg = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return _error_response(request, exc.status_code, error_code, detail_msg)


async def task_validation_exception_handler(
    request: Request, exc: TaskValidationError
) -> JSONResponse:
    """Return every violated rule as a 400 response."""
    logger.info(
        "Rejected %s %s: %s",
        request.method,
        request.url.path,
        [v.model_dump() for v in exc.violations],
    )
    body = ValidationErrorResponse(errors=exc.violations, request_id=str(id(request)))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=body.model_dump(mode="json"),
    )


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle errors FastAPI raises before a route runs.

    An unparsable JSON body and a non-integer task id both end up here.
    Both are client errors and map to 400 rather than FastAPI's 422.
    """
    errors = exc.errors()
    logger.warning(
        "Request validation error on %s %s: %s",
        request.method,
        request.url.path,
        errors,
    )

    if any(err.get("type") == "json_invalid" for err in errors):
        return _error_response(
            request, status.HTTP_400_BAD_REQUEST, ErrorCode.INVALID_JSON, "Invalid JSON body"
        )

    if any(err.get("loc", ())[:1] == ("path",) for err in errors):
        return _error_response(
            request,
            status.HTTP_400_BAD_REQUEST,
            ErrorCode.INVALID_REQUEST,
            "Task id must be an integer",
        )

    first_error = errors[0] if errors else {}
    field = " -> ".join(str(loc) for loc in first_error.get("loc", []))
    error_msg = first_error.get("msg", "Invalid request")
    return _error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        ErrorCode.INVALID_REQUEST,
        f"{field}: {error_msg}" if field else error_msg,
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle all uncaught exceptions.

    Logs the full traceback but returns a clean body without internal
    details.
    """
    logger.error(
        "Unhandled exception on %s %s: %s\n%s",
        request.method,
        request.url.path,
        str(exc),
        traceback.format_exc(),
    )
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorCode.INTERNAL_ERROR,
        "Internal server error",
    )


async def log_requests(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Access log: one line per request with status and duration."""
    started = time.perf_counter()
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        # An unhandled exception still gets its line, logged as a 500
        logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            status_code,
            (time.perf_counter() - started) * 1000,
        )


def create_app(
    repository: TaskRepository | None = None,
    config: TasklistConfig | None = None,
) -> FastAPI:
    """
    Build the tasklist FastAPI application.

    Args:
        repository: Repository the routes will use. Built from the
            configured data file when omitted.
        config: Configuration (loaded from files/env when omitted)

    Returns:
        Configured FastAPI app

    Example:
        >>> store = JsonTaskStore(Path("/tmp/tasks.json"))
        >>> app = create_app(repository=TaskRepository(store))
    """
    if config is None:
        config = load_config()
    if repository is None:
        repository = TaskRepository(JsonTaskStore(config.resolve_data_file()))

    app = FastAPI(
        title="Tasklist API",
        description="REST API for a to-do list stored in a JSON file",
        version=__version__,
    )

    app.state.config = config
    app.state.repository = repository
    app.state.started_at = time.monotonic()

    # Browser clients (e.g. a Next.js dev server) call from another origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.middleware("http")(log_requests)

    app.include_router(health.router, tags=["health"])
    app.include_router(tasks.router, prefix="/api", tags=["tasks"])

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(TaskValidationError, task_validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, general_exception_handler)

    logger.debug("Created app serving %s", repository.store.path)
    return app
