"""Translation of errors into JSON responses of the form ``{"error": message}``."""

from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from playlist_service.config import get_logger
from playlist_service.domain.errors import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    PlaylistServiceError,
    StoreError,
    UnauthorizedError,
)

logger = get_logger(__name__)

UNKNOWN_ERROR = "Unknown Error"

# Looked up along the exception's MRO, most specific first
STATUS_BY_ERROR: dict[type[PlaylistServiceError], int] = {
    InvalidInputError: 400,
    UnauthorizedError: 401,
    NotFoundError: 404,
    ConflictError: 400,
    StoreError: 400,
}


def status_for(error: PlaylistServiceError) -> int:
    """HTTP status for a domain error."""
    for cls in type(error).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return 400


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def handle_service_error(
    request: Request, exc: PlaylistServiceError
) -> JSONResponse:
    """Domain errors carry their own client-safe message."""
    status_code = status_for(exc)
    logger.debug(
        "Request failed",
        method=request.method,
        path=request.url.path,
        status_code=status_code,
        error_type=type(exc).__name__,
    )
    return error_response(status_code, exc.message)


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed or wrongly typed request bodies."""
    logger.debug(
        "Request validation failed",
        path=request.url.path,
        errors=str(exc.errors()),
    )
    return error_response(400, InvalidInputError.default_message)


async def catch_unexpected_errors(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Log anything the handlers did not translate and report it generically.

    Errors caught here are not re-raised to the server error middleware.
    """
    try:
        return await call_next(request)
    except Exception as exc:
        return handle_unexpected_error(request, exc)


def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Anything else is logged with its traceback and reported generically."""
    logger.opt(exception=exc).error(
        "Unhandled error",
        method=request.method,
        path=request.url.path,
    )
    return error_response(400, UNKNOWN_ERROR)


def register_error_handlers(app: FastAPI) -> None:
    """Install the handlers on ``app``."""
    app.add_exception_handler(PlaylistServiceError, handle_service_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.middleware("http")(catch_unexpected_errors)
