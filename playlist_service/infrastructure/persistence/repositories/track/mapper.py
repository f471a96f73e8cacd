"""Track mappers for converting database rows to domain models."""

from typing import Any, override

from attrs import define
from sqlalchemy.orm import selectinload

from playlist_service.config import get_logger
from playlist_service.domain.entities import PlayEvent, Tag, Track, ensure_utc
from playlist_service.infrastructure.persistence.database.db_models import (
    DBPlayEvent,
    DBTrack,
    DBTrackTag,
)
from playlist_service.infrastructure.persistence.repositories.base_repo import (
    BaseModelMapper,
    safe_fetch_relationship,
)

logger = get_logger(__name__)


@define(frozen=True, slots=True)
class TrackMapper(BaseModelMapper[DBTrack, Track]):
    """Mapper from DB track rows, with tags and plays, to domain tracks."""

    @staticmethod
    @override
    async def to_domain(db_model: DBTrack) -> Track:
        """Convert database track to domain model.

        Relationships must be eager-loaded; see ``get_default_relationships``.
        """
        tag_links = await safe_fetch_relationship(db_model, "tag_links")
        tags = []
        for link in tag_links:
            linked = await safe_fetch_relationship(link, "tag")
            tags.extend(Tag(name=db_tag.name) for db_tag in linked)

        play_events = await safe_fetch_relationship(db_model, "play_events")

        return Track(
            id=db_model.id,
            title=db_model.title,
            artist=db_model.artist,
            duration_ms=db_model.duration_ms,
            created_at=ensure_utc(db_model.created_at),
            updated_at=ensure_utc(db_model.updated_at),
            tags=tags,
            play_events=[TrackMapper.play_event_to_domain(e) for e in play_events],
        )

    @staticmethod
    def play_event_to_domain(db_event: DBPlayEvent) -> PlayEvent:
        """Convert a play-event row."""
        return PlayEvent(
            track_id=db_event.track_id,
            played_at=ensure_utc(db_event.played_at),
            listener_address=db_event.listener_address,
            id=db_event.id,
        )

    @staticmethod
    @override
    def get_default_relationships() -> list[Any]:
        """Eager-load tags through their links, and the play log."""
        return [
            selectinload(DBTrack.tag_links).selectinload(DBTrackTag.tag),
            selectinload(DBTrack.play_events),
        ]
