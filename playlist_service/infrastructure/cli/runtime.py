"""Bridges from synchronous CLI commands to the async service."""

import asyncio
from collections.abc import Awaitable, Callable

from playlist_service.application.services import PlaylistResourceManager
from playlist_service.infrastructure.persistence import DatabaseUnitOfWork
from playlist_service.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
    get_session,
)


async def _with_manager[T](
    operation: Callable[[PlaylistResourceManager], Awaitable[T]],
) -> T:
    engine = create_db_engine()
    try:
        session_factory = create_session_factory(engine)
        async with get_session(session_factory) as session:
            return await operation(PlaylistResourceManager(DatabaseUnitOfWork(session)))
    finally:
        await engine.dispose()


def run_with_manager[T](
    operation: Callable[[PlaylistResourceManager], Awaitable[T]],
) -> T:
    """Run ``operation`` on a manager over a dedicated engine and event loop."""
    return asyncio.run(_with_manager(operation))
