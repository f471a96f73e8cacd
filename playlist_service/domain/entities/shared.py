"""Shared utilities and helper functions for domain entities.

Pure utility functions with zero external dependencies.
"""

from datetime import UTC, datetime


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Ensure datetime is timezone-aware with UTC."""
    if dt is None:
        return None
    return dt.replace(tzinfo=UTC) if dt.tzinfo is None else dt


def to_epoch_millis(dt: datetime | None) -> int | None:
    """Convert a datetime to integer milliseconds since the Unix epoch.

    Naive datetimes are treated as UTC, matching how the store hands them back.
    """
    aware = ensure_utc(dt)
    if aware is None:
        return None
    return int(aware.timestamp() * 1000)
