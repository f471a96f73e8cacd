"""Domain repository interfaces following Clean Architecture principles.

These interfaces define the contracts for data access without depending on
infrastructure implementations, following the dependency inversion principle.

Every playlist operation is keyed by the natural key ``(owner_address, slug)``.
Uniqueness of that key and of ``(playlist_id, track_id)`` memberships is
enforced by the store at write time; implementations must attempt the write
and translate the constraint violation, never pre-check with a read.
"""

from collections.abc import Awaitable
from typing import TYPE_CHECKING, Protocol, Self

if TYPE_CHECKING:
    from playlist_service.domain.entities import Playlist


class PlaylistRepositoryProtocol(Protocol):
    """Repository interface for playlist persistence operations."""

    def list_by_owner(self, owner_address: str) -> Awaitable[list["Playlist"]]:
        """Get all playlists for an owner, tracks loaded but not projected."""
        ...

    def get_by_owner_and_slug(
        self, owner_address: str, slug: str
    ) -> Awaitable["Playlist"]:
        """Get one playlist by its natural key.

        Raises:
            NotFoundError: No playlist matches the key
        """
        ...

    def create(
        self, owner_address: str, title: str, slug: str
    ) -> Awaitable["Playlist"]:
        """Create an empty playlist.

        Raises:
            ConflictError: ``(owner_address, slug)`` already exists
        """
        ...

    def rename(
        self, owner_address: str, old_slug: str, new_title: str, new_slug: str
    ) -> Awaitable["Playlist"]:
        """Change title and slug; returns metadata without tracks.

        Raises:
            NotFoundError: The old key does not exist
            ConflictError: The new key belongs to a different playlist
        """
        ...

    def delete(self, owner_address: str, slug: str) -> Awaitable[None]:
        """Delete a playlist and its memberships.

        Raises:
            NotFoundError: The key does not exist
        """
        ...

    def add_track(
        self, owner_address: str, slug: str, track_id: str
    ) -> Awaitable["Playlist"]:
        """Add a track and return the playlist with its tracks.

        Raises:
            NotFoundError: The playlist or the track does not exist
            DuplicateMembershipError: The track is already in the playlist
        """
        ...

    def remove_track(
        self, owner_address: str, slug: str, track_id: str
    ) -> Awaitable["Playlist"]:
        """Remove a track and return the playlist with its remaining tracks.

        Raises:
            NotFoundError: The playlist or the membership does not exist
        """
        ...


class UnitOfWorkProtocol(Protocol):
    """Transaction boundary that hands out repositories sharing one session."""

    async def __aenter__(self) -> Self:
        """Enter the transaction scope."""
        ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Commit on success, roll back on error."""
        ...

    async def commit(self) -> None:
        """Explicitly commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Explicitly rollback the current transaction."""
        ...

    def get_playlist_repository(self) -> PlaylistRepositoryProtocol:
        """Get playlist repository bound to this unit of work."""
        ...
