"""``db_operation``: timing, tracing and failure logging for repository methods.

Every exception is re-raised unchanged; the decorator only decides how loudly
to log it.
"""

from collections.abc import Callable, Coroutine
import functools
import inspect
import time
from typing import Any

from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError

from playlist_service.config import get_logger
from playlist_service.domain.errors import PlaylistServiceError

logger = get_logger(__name__)


def driver_error_code(error: SQLAlchemyError) -> str | None:
    """The database driver's own error code, when it reports one.

    ``SQLAlchemyError.code`` is SQLAlchemy's documentation key (``gkpj``);
    this is the driver's name for the failure (``SQLITE_CONSTRAINT_UNIQUE``,
    or a SQLSTATE on PostgreSQL).
    """
    if not isinstance(error, DBAPIError):
        return None
    orig = error.orig
    return getattr(orig, "sqlite_errorname", None) or getattr(orig, "sqlstate", None)


def store_error_context(error: SQLAlchemyError) -> dict[str, Any]:
    """Log fields describing a store failure."""
    return {
        "error": str(error.orig) if isinstance(error, DBAPIError) else str(error),
        "code": error.code,
        "driver_code": driver_error_code(error),
    }


def db_operation[**P, T](
    operation_name: str | None = None,
) -> Callable[
    [Callable[P, Coroutine[Any, Any, T]]], Callable[P, Coroutine[Any, Any, T]]
]:
    """Wrap an async repository method with trace logs and failure logging.

    Translated domain outcomes (not found, conflicts) are logged at debug,
    integrity failures at warning, any other store failure at error.

    Example:
        @db_operation("add_track")
        async def add_track(self, owner_address: str, slug: str, track_id: str): ...
    """

    def decorator(
        func: Callable[P, Coroutine[Any, Any, T]],
    ) -> Callable[P, Coroutine[Any, Any, T]]:
        name = operation_name or func.__name__
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"db_operation needs an async function, got {name}")

        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            started = time.perf_counter()
            repo_name = type(args[0]).__name__ if args else "Repository"
            label = f"{repo_name}.{name}"
            context = {"operation": name, **_build_log_context(kwargs)}

            def elapsed_ms() -> float:
                return (time.perf_counter() - started) * 1000

            logger.trace(f"DB operation starting: {label}", **context)
            try:
                result = await func(*args, **kwargs)
            except PlaylistServiceError as e:
                logger.debug(
                    f"DB operation outcome: {label}: {e.message}",
                    outcome=type(e).__name__,
                    exec_time_ms=elapsed_ms(),
                    **context,
                )
                raise
            except IntegrityError as e:
                logger.warning(
                    f"DB integrity error: {label}",
                    exec_time_ms=elapsed_ms(),
                    **store_error_context(e),
                    **context,
                )
                raise
            except SQLAlchemyError as e:
                logger.error(
                    f"DB error ({type(e).__name__}): {label}",
                    exec_time_ms=elapsed_ms(),
                    **store_error_context(e),
                    **context,
                )
                raise
            except Exception:
                logger.exception(
                    f"Unhandled exception in {label}",
                    exec_time_ms=elapsed_ms(),
                    **context,
                )
                raise

            logger.trace(
                f"DB operation completed: {label}",
                exec_time_ms=elapsed_ms(),
                **context,
            )
            return result

        return wrapper

    return decorator


def _build_log_context(kwargs: dict[str, Any]) -> dict[str, Any]:
    """Keep the scalar keyword arguments that are safe to log."""
    return {
        k: v
        for k, v in kwargs.items()
        if not k.startswith("_") and isinstance(v, int | str)
    }
