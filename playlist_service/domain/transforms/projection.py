"""Read-side projection of raw tracks into client-facing views.

Play counts and tag lists are computed from the fetched associations every
time a playlist is read. Nothing here touches the store.
"""

from collections.abc import Iterable

from toolz import count

from playlist_service.domain.entities.shared import to_epoch_millis
from playlist_service.domain.entities.track import EnrichedTrack, Track


def count_play_events(track: Track) -> int:
    """Count every recorded play of the track."""
    return count(track.play_events)


def collect_tags(track: Track) -> list[str]:
    """Flatten the tag association to names, keeping order and duplicates."""
    return [tag.name for tag in track.tags]


def project_track(track: Track) -> EnrichedTrack:
    """Project a raw track into its enriched view.

    Total for any well-formed track: no plays gives ``play_count == 0`` and
    no tags gives an empty list.
    """
    return EnrichedTrack(
        id=track.id,
        title=track.title,
        artist=track.artist,
        duration_ms=track.duration_ms,
        created_at=to_epoch_millis(track.created_at),
        updated_at=to_epoch_millis(track.updated_at),
        play_count=count_play_events(track),
        tags=collect_tags(track),
    )


def project_tracks(tracks: Iterable[Track]) -> list[EnrichedTrack]:
    """Project a sequence of tracks, preserving order."""
    return [project_track(track) for track in tracks]
