"""Concurrent writers racing for the same key on a file-backed database."""

import asyncio

import pytest

from playlist_service.application.services import PlaylistResourceManager
from playlist_service.domain.errors import ConflictError, DuplicateMembershipError
from playlist_service.infrastructure.persistence import DatabaseUnitOfWork
from playlist_service.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
    get_session,
    init_db,
)
from tests.fixtures.models import OWNER, seed_catalogue

pytestmark = [pytest.mark.integration, pytest.mark.slow]

WRITERS = 5


@pytest.fixture
async def file_session_factory(tmp_path):
    """Sessions on a seeded SQLite file, each with its own connection."""
    engine = create_db_engine(f"sqlite+aiosqlite:///{tmp_path / 'race.db'}")
    await init_db(engine)
    session_factory = create_session_factory(engine)
    async with get_session(session_factory) as session:
        await seed_catalogue(session)
    yield session_factory
    await engine.dispose()


async def run_in_own_session(session_factory, operation):
    async with get_session(session_factory) as session:
        return await operation(PlaylistResourceManager(DatabaseUnitOfWork(session)))


def split_outcomes(results):
    successes = [r for r in results if not isinstance(r, BaseException)]
    failures = [r for r in results if isinstance(r, BaseException)]
    return successes, failures


class TestFirstWriterWins:
    """Exactly one of several simultaneous writes of the same key succeeds."""

    async def test_concurrent_creates(self, file_session_factory):
        """Test that racing creates of one slug yield one playlist."""
        results = await asyncio.gather(
            *(
                run_in_own_session(
                    file_session_factory,
                    lambda manager: manager.create_playlist(OWNER, OWNER, "My Mix!"),
                )
                for _ in range(WRITERS)
            ),
            return_exceptions=True,
        )

        successes, failures = split_outcomes(results)
        assert len(successes) == 1
        assert len(failures) == WRITERS - 1
        assert all(isinstance(f, ConflictError) for f in failures)

        playlists = await run_in_own_session(
            file_session_factory, lambda manager: manager.list_playlists(OWNER)
        )
        assert [view.slug for view in playlists] == ["my-mix"]

    async def test_concurrent_duplicate_adds(self, file_session_factory):
        """Test that racing adds of one track yield one membership."""
        await run_in_own_session(
            file_session_factory,
            lambda manager: manager.create_playlist(OWNER, OWNER, "My Mix!"),
        )

        results = await asyncio.gather(
            *(
                run_in_own_session(
                    file_session_factory,
                    lambda manager: manager.add_track(OWNER, OWNER, "my-mix", "t1"),
                )
                for _ in range(WRITERS)
            ),
            return_exceptions=True,
        )

        successes, failures = split_outcomes(results)
        assert len(successes) == 1
        assert len(failures) == WRITERS - 1
        assert all(isinstance(f, DuplicateMembershipError) for f in failures)

        view = await run_in_own_session(
            file_session_factory, lambda manager: manager.get_playlist(OWNER, "my-mix")
        )
        assert [track.id for track in view.tracks] == ["t1"]
