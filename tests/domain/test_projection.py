"""Tests for projecting raw tracks into enriched client views."""

from datetime import UTC, datetime

from playlist_service.domain.entities import PlayEvent, Tag, Track
from playlist_service.domain.transforms import (
    collect_tags,
    count_play_events,
    project_track,
    project_tracks,
)

CREATED = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


def make_track(track_id="t1", plays=0, tags=()):
    return Track(
        id=track_id,
        title=f"Track {track_id}",
        artist="Artist",
        duration_ms=180_000,
        created_at=CREATED,
        updated_at=CREATED,
        tags=[Tag(name=name) for name in tags],
        play_events=[PlayEvent(track_id=track_id) for _ in range(plays)],
    )


class TestTrackProjection:
    """Test play counts, tag flattening and timestamp conversion."""

    def test_counts_all_play_events(self):
        """Test that every recorded play is counted."""
        assert count_play_events(make_track(plays=3)) == 3

    def test_keeps_tag_order_and_duplicates(self):
        """Test that tag names come out as associated, duplicates included."""
        track = make_track(tags=["rock", "live", "rock"])
        assert collect_tags(track) == ["rock", "live", "rock"]

    def test_projection_of_bare_track(self):
        """Test that a track with no plays or tags projects to zeros and empties."""
        enriched = project_track(make_track())

        assert enriched.play_count == 0
        assert enriched.tags == []

    def test_projection_converts_timestamps_to_epoch_millis(self):
        """Test that timestamps become integer milliseconds."""
        enriched = project_track(make_track())

        assert enriched.created_at == int(CREATED.timestamp() * 1000)
        assert isinstance(enriched.updated_at, int)

    def test_wire_shape_is_camel_case(self):
        """Test the serialized keys of an enriched track."""
        data = project_track(make_track(plays=2, tags=["rock"])).to_dict()

        assert data == {
            "id": "t1",
            "title": "Track t1",
            "artist": "Artist",
            "durationMs": 180_000,
            "createdAt": int(CREATED.timestamp() * 1000),
            "updatedAt": int(CREATED.timestamp() * 1000),
            "playCount": 2,
            "tags": ["rock"],
        }

    def test_project_tracks_preserves_order(self):
        """Test that a sequence keeps its order."""
        tracks = [make_track("b"), make_track("a"), make_track("c")]
        assert [t.id for t in project_tracks(tracks)] == ["b", "a", "c"]
