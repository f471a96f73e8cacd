"""Application services - use case orchestrators."""

from .playlist_manager import (
    CREATION_ERROR,
    DELETION_ERROR,
    REQUEST_ERROR,
    UPDATING_ERROR,
    PlaylistResourceManager,
    derive_slug,
    require_owner,
)

__all__ = [
    "CREATION_ERROR",
    "DELETION_ERROR",
    "REQUEST_ERROR",
    "UPDATING_ERROR",
    "PlaylistResourceManager",
    "derive_slug",
    "require_owner",
]
