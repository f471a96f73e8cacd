"""SQLAlchemy database configuration and connection management.

This module is responsible for:
- Engine creation and configuration
- Session management
- Transaction handling
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from sqlalchemy import event, make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from playlist_service.config import get_logger, settings

# Create module logger
logger = get_logger(__name__)


def _is_memory_url(db_url: str) -> bool:
    url = make_url(db_url)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def _ensure_parent_dir(db_url: str) -> None:
    database = make_url(db_url).database
    if database:
        Path(database).parent.mkdir(parents=True, exist_ok=True)


def create_db_engine(connection_string: str | None = None) -> AsyncEngine:
    """Create async SQLAlchemy engine configured for the target store.

    Args:
        connection_string: Database URL; defaults to ``settings.database.url``

    Returns:
        Configured async engine
    """
    db_url = connection_string or settings.database.url

    engine_kwargs: dict = {"echo": settings.database.echo}
    if db_url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {
            "check_same_thread": False,
            "timeout": 30.0,
        }
        if _is_memory_url(db_url):
            # An in-memory database lives on exactly one connection
            engine_kwargs["poolclass"] = StaticPool
        else:
            _ensure_parent_dir(db_url)
    else:
        engine_kwargs["pool_pre_ping"] = True

    engine = create_async_engine(db_url, **engine_kwargs)

    if db_url.startswith("sqlite"):

        @event.listens_for(engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, _):  # type: ignore # pragma: no cover
            """Set SQLite PRAGMAs on connection creation."""
            # Driver-level autocommit; SQLAlchemy emits BEGIN itself below
            dbapi_connection.isolation_level = None
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys = ON")  # Enforce foreign keys
            cursor.execute("PRAGMA busy_timeout = 30000")
            if not _is_memory_url(db_url):
                cursor.execute("PRAGMA journal_mode = WAL")
                cursor.execute("PRAGMA synchronous = NORMAL")
            cursor.close()

        @event.listens_for(engine.sync_engine, "begin")
        def _emit_begin(conn):  # type: ignore # pragma: no cover
            """Start transactions explicitly so SAVEPOINTs nest inside them."""
            conn.exec_driver_sql("BEGIN")

    logger.info("Created database engine", url=engine.url.render_as_string())
    return engine


# Global engine singleton
_engine: AsyncEngine | None = None


def get_engine() -> AsyncEngine:
    """Get or create the global database engine singleton.

    Returns:
        SQLAlchemy async engine instance
    """
    global _engine
    if _engine is None:
        _engine = create_db_engine()
    return _engine


def create_session_factory(
    engine: AsyncEngine | None = None,
) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory for the given engine.

    Args:
        engine: Optional engine (uses global engine if None)

    Returns:
        Async session factory for creating properly configured sessions
    """
    return async_sessionmaker(
        bind=engine or get_engine(),
        expire_on_commit=False,  # Don't expire objects after commit
        autoflush=True,
    )


# Global session factory singleton
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get or create the global session factory singleton.

    Returns:
        Async session factory
    """
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory()
    return _session_factory


@asynccontextmanager
async def get_session(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    rollback: bool = True,
) -> AsyncGenerator[AsyncSession]:
    """Get an asynchronous database session with automatic transaction management.

    The transaction is committed when the context manager exits without an
    exception.

    Args:
        session_factory: Factory to draw the session from (global one if None)
        rollback: If True (default), automatically rolls back on exception.

    Yields:
        AsyncSession: Managed database session
    """
    session = (session_factory or get_session_factory())()
    try:
        yield session
        await session.commit()
    except Exception:
        if rollback:
            await session.rollback()
        raise
    finally:
        await session.close()


async def dispose_engine() -> None:
    """Dispose the global engine and forget the cached factories."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None


__all__ = [
    "create_db_engine",
    "create_session_factory",
    "dispose_engine",
    "get_engine",
    "get_session",
    "get_session_factory",
]
