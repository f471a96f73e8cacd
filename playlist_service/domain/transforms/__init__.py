"""Pure transformations over domain entities."""

from .identity import normalize_title
from .projection import collect_tags, count_play_events, project_track, project_tracks

__all__ = [
    "collect_tags",
    "count_play_events",
    "normalize_title",
    "project_track",
    "project_tracks",
]
