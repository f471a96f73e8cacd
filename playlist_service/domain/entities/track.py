"""Track-related domain entities.

Tracks are owned by the catalogue, not by this service. The entities here are
read-only snapshots of a track with its tag associations and play-event log,
plus the enriched view returned to clients.
"""

from datetime import datetime
from typing import Any

from attrs import define, field, validators


@define(frozen=True, slots=True)
class Tag:
    """A tag attached to a track."""

    name: str = field(validator=validators.instance_of(str))


@define(frozen=True, slots=True)
class PlayEvent:
    """Immutable record of a single play of a track."""

    track_id: str
    played_at: datetime | None = None
    listener_address: str | None = None
    id: int | None = None


@define(frozen=True, slots=True)
class Track:
    """Raw track record as fetched from the store.

    ``tags`` keeps the order the association yields, duplicates included.
    ``play_events`` is the full play history; nothing is windowed here.
    """

    id: str = field(validator=validators.instance_of(str))
    title: str = field(validator=validators.instance_of(str))
    artist: str | None = field(default=None)
    duration_ms: int | None = field(default=None)
    created_at: datetime | None = field(default=None)
    updated_at: datetime | None = field(default=None)
    tags: list[Tag] = field(factory=list)
    play_events: list[PlayEvent] = field(factory=list)


@define(frozen=True, slots=True)
class EnrichedTrack:
    """Client-facing track view with derived play count and flattened tags.

    Timestamps are integer epoch milliseconds.
    """

    id: str
    title: str
    artist: str | None
    duration_ms: int | None
    created_at: int | None
    updated_at: int | None
    play_count: int = 0
    tags: list[str] = field(factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase wire shape."""
        return {
            "id": self.id,
            "title": self.title,
            "artist": self.artist,
            "durationMs": self.duration_ms,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "playCount": self.play_count,
            "tags": list(self.tags),
        }
