"""Core domain entities representing playlists and tracks."""

# Playlist-related entities
from .playlist import Playlist, PlaylistView

# Shared utilities
from .shared import ensure_utc, to_epoch_millis

# Track-related entities
from .track import EnrichedTrack, PlayEvent, Tag, Track

__all__ = [
    # Track entities
    "EnrichedTrack",
    "PlayEvent",
    "Tag",
    "Track",
    # Playlist entities
    "Playlist",
    "PlaylistView",
    # Shared utilities
    "ensure_utc",
    "to_epoch_millis",
]
