"""Catalogue fixtures: tracks with tags and play events, as ingestion leaves them."""

from datetime import UTC, datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from playlist_service.infrastructure.persistence.database import (
    DBPlayEvent,
    DBTag,
    DBTrack,
    DBTrackTag,
)

OWNER = "0x" + "a" * 40
OTHER_OWNER = "0x" + "b" * 40

# t1: three plays, tagged rock then live
# t2: no plays, tagged chill twice
# t3: no plays, no tags
CATALOGUE = {
    "t1": {"title": "Thunder Road", "artist": "The Hollers", "plays": 3, "tags": ["rock", "live"]},
    "t2": {"title": "Slow Tide", "artist": "Marina Vale", "plays": 0, "tags": ["chill", "chill"]},
    "t3": {"title": "Untitled Demo", "artist": None, "plays": 0, "tags": []},
}


async def seed_catalogue(session: AsyncSession) -> dict[str, DBTrack]:
    """Insert the catalogue tracks and flush; the caller owns the commit."""
    tags: dict[str, DBTag] = {}
    base_time = datetime(2024, 1, 1, tzinfo=UTC)
    tracks = {}

    for track_id, entry in CATALOGUE.items():
        db_track = DBTrack(
            id=track_id,
            title=entry["title"],
            artist=entry["artist"],
            duration_ms=200_000,
        )
        for name in entry["tags"]:
            tag = tags.setdefault(name, DBTag(name=name))
            db_track.tag_links.append(DBTrackTag(tag=tag))
        for minute in range(entry["plays"]):
            db_track.play_events.append(
                DBPlayEvent(
                    listener_address=OTHER_OWNER,
                    played_at=base_time + timedelta(minutes=minute),
                )
            )
        tracks[track_id] = db_track

    session.add_all(tracks.values())
    await session.flush()
    return tracks
