"""Exception handlers - every failure becomes ``{"error": message}``."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from backend.app.errors import AppError, SchemaMismatchError, UnparsableCompletionError

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build the JSON error body."""
    return JSONResponse(status_code=status_code, content={"error": message})


def to_app_error(exc: Exception, *, parse_message: str, fallback_message: str) -> AppError:
    """Map a handler failure to the error returned to the client.

    Client errors (4xx) keep their own message. Unusable completions get
    ``parse_message``; provider and unknown failures get ``fallback_message``.
    """
    if isinstance(exc, AppError) and exc.status_code < 500:
        return exc
    if isinstance(exc, (UnparsableCompletionError, SchemaMismatchError)):
        return AppError(parse_message)
    return AppError(fallback_message)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Convert AppError to its status and message."""
    return error_response(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as 400."""
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request parameters")


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler for anything a route did not map."""
    logger.exception(f"Unhandled error on {request.url.path}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_error_handlers(app: FastAPI) -> None:
    """Attach the error handlers to the application."""
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
