"""
Exception handlers mapping the error taxonomy onto HTTP responses.

Expected errors render as {"error": <tag>, "message": <text>} with the
status carried by the exception. Dependency failures only expose a
generic message; SQLAlchemy errors count as database dependency failures.
Anything unexpected becomes a generic 500.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from brandhub.errors import BrandHubError, DependencyError, ValidationError

logger = logging.getLogger(__name__)


async def brandhub_error_handler(request: Request, exc: BrandHubError) -> JSONResponse:
    if isinstance(exc, DependencyError):
        logger.error(
            "Dependency failure",
            extra={
                "dependency": exc.dependency,
                "detail": exc.detail,
                "path": request.url.path,
            },
        )
    else:
        logger.warning(
            "Request failed",
            extra={"error": exc.tag, "message": exc.message, "path": request.url.path},
        )
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


async def request_validation_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    fields = [".".join(str(p) for p in err.get("loc", ())) for err in exc.errors()]
    error = ValidationError(f"Invalid request: {', '.join(fields) or 'malformed body'}")
    return await brandhub_error_handler(request, error)


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Storage failures surface as dependency errors, never as a 500."""
    error = DependencyError(f"{type(exc).__name__}: {exc}", dependency="database")
    return await brandhub_error_handler(request, error)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unhandled exceptions with proper logging."""
    logger.error(
        "Unhandled exception",
        extra={
            "error": str(exc),
            "error_type": type(exc).__name__,
            "path": request.url.path,
        },
        exc_info=True,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "message": "An unexpected error occurred",
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BrandHubError, brandhub_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
