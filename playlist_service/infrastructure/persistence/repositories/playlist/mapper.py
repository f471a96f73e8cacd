"""Playlist repository mappers for domain-persistence conversions."""

from typing import Any, override

from attrs import define
from sqlalchemy.orm import selectinload

from playlist_service.config import get_logger
from playlist_service.domain.entities import Playlist, ensure_utc
from playlist_service.infrastructure.persistence.database.db_models import (
    DBPlaylist,
    DBPlaylistTrack,
    DBTrack,
    DBTrackTag,
)
from playlist_service.infrastructure.persistence.repositories.base_repo import (
    BaseModelMapper,
    safe_fetch_relationship,
)
from playlist_service.infrastructure.persistence.repositories.track.mapper import (
    TrackMapper,
)

# Create module logger
logger = get_logger(__name__)


@define(frozen=True, slots=True)
class PlaylistMapper(BaseModelMapper[DBPlaylist, Playlist]):
    """Mapper from playlist rows to domain playlists."""

    @staticmethod
    def to_metadata(db_model: DBPlaylist) -> Playlist:
        """Convert the playlist row alone, without touching memberships."""
        return Playlist(
            id=db_model.id,
            owner_address=db_model.owner_address,
            title=db_model.title,
            slug=db_model.slug,
            created_at=ensure_utc(db_model.created_at),
            updated_at=ensure_utc(db_model.updated_at),
        )

    @staticmethod
    @override
    async def to_domain(db_model: DBPlaylist) -> Playlist:
        """Convert a playlist row with its memberships to a domain playlist.

        Memberships arrive ordered by ``added_at`` then ``id`` from the
        relationship definition; that order is kept.
        """
        playlist_tracks = await safe_fetch_relationship(db_model, "tracks")

        domain_tracks = []
        for pt in playlist_tracks:
            tracks = await safe_fetch_relationship(pt, "track")
            if not tracks:
                logger.warning(
                    "Membership without track",
                    playlist_id=db_model.id,
                    track_id=pt.track_id,
                )
                continue
            domain_tracks.append(await TrackMapper.to_domain(tracks[0]))

        return PlaylistMapper.to_metadata(db_model).with_tracks(domain_tracks)

    @staticmethod
    @override
    def get_default_relationships() -> list[Any]:
        """Memberships, their tracks, and each track's tags and plays."""
        return [
            selectinload(DBPlaylist.tracks)
            .selectinload(DBPlaylistTrack.track)
            .selectinload(DBTrack.tag_links)
            .selectinload(DBTrackTag.tag),
            selectinload(DBPlaylist.tracks)
            .selectinload(DBPlaylistTrack.track)
            .selectinload(DBTrack.play_events),
        ]
