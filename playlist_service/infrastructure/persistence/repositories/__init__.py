"""Repository layer for database operations with SQLAlchemy 2.0."""

from playlist_service.infrastructure.persistence.repositories.base_repo import (
    BaseModelMapper,
    BaseRepository,
)
from playlist_service.infrastructure.persistence.repositories.playlist import (
    PlaylistMapper,
    PlaylistRepository,
)
from playlist_service.infrastructure.persistence.repositories.repo_decorator import (
    db_operation,
)
from playlist_service.infrastructure.persistence.repositories.track import (
    TrackMapper,
)

__all__ = [
    "BaseModelMapper",
    "BaseRepository",
    "PlaylistMapper",
    "PlaylistRepository",
    "TrackMapper",
    "db_operation",
]
