"""Track mapping for playlist members."""

from playlist_service.infrastructure.persistence.repositories.track.mapper import (
    TrackMapper,
)

__all__ = ["TrackMapper"]
