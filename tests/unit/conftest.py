"""Unit test fixtures: a manager over a mocked unit of work."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from playlist_service.application.services import PlaylistResourceManager
from playlist_service.domain.entities import Playlist, PlayEvent, Tag, Track

OWNER = "0xabc"
CREATED = datetime(2024, 1, 1, tzinfo=UTC)


@pytest.fixture
def playlist():
    """Stored playlist with one played, tagged track."""
    track = Track(
        id="t1",
        title="Thunder Road",
        tags=[Tag(name="rock"), Tag(name="live")],
        play_events=[PlayEvent(track_id="t1") for _ in range(3)],
        created_at=CREATED,
        updated_at=CREATED,
    )
    return Playlist(
        id=1,
        owner_address=OWNER,
        title="My Mix!",
        slug="my-mix",
        tracks=[track],
        created_at=CREATED,
        updated_at=CREATED,
    )


@pytest.fixture
def mock_playlist_repository(playlist):
    """Mock playlist repository returning the stored playlist."""
    mock = AsyncMock()
    mock.list_by_owner.return_value = [playlist]
    mock.get_by_owner_and_slug.return_value = playlist
    mock.create.return_value = playlist.with_tracks([])
    mock.rename.return_value = playlist.with_tracks([])
    mock.delete.return_value = None
    mock.add_track.return_value = playlist
    mock.remove_track.return_value = playlist.with_tracks([])
    return mock


@pytest.fixture
def mock_uow(mock_playlist_repository):
    """Mock unit of work handing out the mock repository."""
    uow = AsyncMock()
    uow.get_playlist_repository = MagicMock(return_value=mock_playlist_repository)
    return uow


@pytest.fixture
def manager(mock_uow):
    """Manager under test."""
    return PlaylistResourceManager(mock_uow)
