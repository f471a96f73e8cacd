"""Playlist repositories package."""

from playlist_service.infrastructure.persistence.repositories.playlist.core import (
    MEMBERSHIP_NOT_FOUND,
    TRACK_NOT_FOUND,
    PlaylistRepository,
)
from playlist_service.infrastructure.persistence.repositories.playlist.mapper import (
    PlaylistMapper,
)

__all__ = [
    "MEMBERSHIP_NOT_FOUND",
    "TRACK_NOT_FOUND",
    "PlaylistMapper",
    "PlaylistRepository",
]
