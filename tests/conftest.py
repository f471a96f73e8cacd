"""Shared fixtures: a fresh in-memory database per test, seeded with the catalogue."""

import pytest

from playlist_service.application.services import PlaylistResourceManager
from playlist_service.infrastructure.persistence import DatabaseUnitOfWork
from playlist_service.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
    get_session,
    init_db,
)
from tests.fixtures.models import seed_catalogue

MEMORY_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def db_engine():
    """In-memory engine with the schema created."""
    engine = create_db_engine(MEMORY_URL)
    try:
        await init_db(engine)
    except Exception as e:
        pytest.fail(f"Database initialization failed: {e}")
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    """Session factory bound to the test engine."""
    return create_session_factory(db_engine)


@pytest.fixture
async def seeded_catalogue(session_factory):
    """Commit the catalogue tracks before the test body runs."""
    async with get_session(session_factory) as session:
        tracks = await seed_catalogue(session)
    return sorted(tracks)


@pytest.fixture
async def db_session(session_factory, seeded_catalogue):
    """Session over the seeded database, committed on exit."""
    async with get_session(session_factory) as session:
        yield session


@pytest.fixture
async def playlist_repo(db_session):
    """Provide a playlist repository."""
    from playlist_service.infrastructure.persistence.repositories import (
        PlaylistRepository,
    )

    return PlaylistRepository(db_session)


@pytest.fixture
async def manager(db_session):
    """Manager over a real unit of work on the seeded database."""
    return PlaylistResourceManager(DatabaseUnitOfWork(db_session))
