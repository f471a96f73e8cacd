"""Playlist-related domain entities.

Pure playlist representations and related value objects with zero external dependencies.
"""

from datetime import datetime
from typing import Any

import attrs
from attrs import define, field, validators

from .shared import to_epoch_millis
from .track import EnrichedTrack, Track


@define(frozen=True, slots=True)
class Playlist:
    """A user-owned, persisted list of tracks.

    Playlists are addressed by their natural key ``(owner_address, slug)``;
    ``id`` is the store's surrogate key and never leaves the persistence
    boundary as a lookup key. ``slug`` is always derived from ``title``.
    """

    owner_address: str = field(validator=validators.instance_of(str))
    title: str = field(validator=validators.instance_of(str))
    slug: str = field(validator=validators.instance_of(str))
    tracks: list[Track] = field(factory=list)
    created_at: datetime | None = field(default=None)
    updated_at: datetime | None = field(default=None)
    # The internal database ID
    id: int | None = field(default=None)

    def with_tracks(self, tracks: list[Track]) -> "Playlist":
        """Create a new playlist with the given tracks."""
        return attrs.evolve(self, tracks=list(tracks))


@define(frozen=True, slots=True)
class PlaylistView:
    """Shaped playlist returned to clients.

    ``tracks`` is None when the operation deliberately returns metadata only
    (rename); the key is then left out of the wire shape.
    """

    id: int | None
    owner_address: str
    title: str
    slug: str
    created_at: int | None
    updated_at: int | None
    tracks: list[EnrichedTrack] | None = None

    @classmethod
    def from_playlist(
        cls,
        playlist: Playlist,
        tracks: list[EnrichedTrack] | None = None,
    ) -> "PlaylistView":
        """Build a view from a playlist entity and already-projected tracks."""
        return cls(
            id=playlist.id,
            owner_address=playlist.owner_address,
            title=playlist.title,
            slug=playlist.slug,
            created_at=to_epoch_millis(playlist.created_at),
            updated_at=to_epoch_millis(playlist.updated_at),
            tracks=tracks,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase wire shape."""
        data: dict[str, Any] = {
            "id": self.id,
            "ownerAddress": self.owner_address,
            "title": self.title,
            "slug": self.slug,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
        if self.tracks is not None:
            data["tracks"] = [track.to_dict() for track in self.tracks]
        return data
