"""Playlist resource manager: the one entry point for playlist operations.

The manager checks that the caller owns the addressed resource, validates
the payload, derives slugs, runs the repository call inside the unit of
work, and shapes the result for clients. Store failures that the
repositories did not already turn into domain errors are translated here,
with the store's code kept for logs only.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError

from playlist_service.config import get_logger
from playlist_service.domain.entities import PlaylistView
from playlist_service.domain.errors import (
    InvalidInputError,
    StoreError,
    UnauthorizedError,
)
from playlist_service.domain.repositories.interfaces import UnitOfWorkProtocol
from playlist_service.domain.transforms import normalize_title, project_tracks
from playlist_service.infrastructure.persistence.repositories.repo_decorator import (
    store_error_context,
)

logger = get_logger(__name__)

# Client-facing messages for untranslated store failures, by operation kind
REQUEST_ERROR = "Playlist request error"
CREATION_ERROR = "Playlist creation error"
UPDATING_ERROR = "Playlist updating error"
DELETION_ERROR = "Playlist deletion error"


def require_owner(owner_address: str, caller_address: str | None) -> None:
    """Raise ``UnauthorizedError`` unless the caller is the path owner."""
    if caller_address is None or caller_address != owner_address:
        logger.info(
            "Rejected non-owner caller",
            owner_address=owner_address,
            caller_address=caller_address,
        )
        raise UnauthorizedError()


def require_text(value: object, field_name: str) -> str:
    """Return ``value`` if it is a non-empty string, else ``InvalidInputError``."""
    if not isinstance(value, str) or not value:
        raise InvalidInputError(field=field_name)
    return value


def derive_slug(title: object) -> tuple[str, str]:
    """Validate a title and return it with its slug.

    A title made only of punctuation has no usable slug and is rejected.
    """
    checked = require_text(title, "title")
    slug = normalize_title(checked)
    if not slug:
        raise InvalidInputError(field="title")
    return checked, slug


class PlaylistResourceManager:
    """Owner-scoped CRUD over playlists and their track memberships.

    Reads need no caller. Every mutating operation requires
    ``caller_address == owner_address`` and checks it before any store access.

    Example:
        >>> manager = PlaylistResourceManager(DatabaseUnitOfWork(session))
        >>> view = await manager.create_playlist("0xabc", "0xabc", "My Mix!")
        >>> view.slug
        'my-mix'
    """

    def __init__(self, uow: UnitOfWorkProtocol) -> None:
        self._uow = uow

    @asynccontextmanager
    async def _store_errors(self, message: str, operation: str) -> AsyncIterator[None]:
        """Translate leftover store failures into ``StoreError(message)``."""
        try:
            yield
        except SQLAlchemyError as e:
            details = store_error_context(e)
            logger.error(
                f"Store error during {operation}", operation=operation, **details
            )
            raise StoreError(message, code=details["driver_code"] or e.code) from e

    # -------------------------------------------------------------------------
    # READS
    # -------------------------------------------------------------------------

    async def list_playlists(self, owner_address: str) -> list[PlaylistView]:
        """All playlists of an owner, each with projected tracks."""
        async with self._store_errors(REQUEST_ERROR, "list_playlists"), self._uow:
            playlists = await self._uow.get_playlist_repository().list_by_owner(
                owner_address=owner_address
            )

        return [
            PlaylistView.from_playlist(playlist, project_tracks(playlist.tracks))
            for playlist in playlists
        ]

    async def get_playlist(self, owner_address: str, slug: str) -> PlaylistView:
        """One playlist with projected tracks.

        Raises:
            NotFoundError: No playlist has this key
        """
        async with self._store_errors(REQUEST_ERROR, "get_playlist"), self._uow:
            playlist = await self._uow.get_playlist_repository().get_by_owner_and_slug(
                owner_address=owner_address, slug=slug
            )

        return PlaylistView.from_playlist(playlist, project_tracks(playlist.tracks))

    # -------------------------------------------------------------------------
    # WRITES
    # -------------------------------------------------------------------------

    async def create_playlist(
        self, owner_address: str, caller_address: str | None, title: object
    ) -> PlaylistView:
        """Create an empty playlist titled ``title``.

        Raises:
            UnauthorizedError: Caller is not the owner
            InvalidInputError: Title missing, empty, or without a usable slug
            ConflictError: The owner already has a playlist with this slug
        """
        require_owner(owner_address, caller_address)
        title, slug = derive_slug(title)

        async with self._store_errors(CREATION_ERROR, "create_playlist"), self._uow:
            playlist = await self._uow.get_playlist_repository().create(
                owner_address=owner_address, title=title, slug=slug
            )

        return PlaylistView.from_playlist(playlist, tracks=[])

    async def rename_playlist(
        self,
        owner_address: str,
        caller_address: str | None,
        slug: str,
        title: object,
    ) -> PlaylistView:
        """Retitle a playlist, deriving its new slug. Returns metadata only.

        Raises:
            UnauthorizedError: Caller is not the owner
            InvalidInputError: Title missing, empty, or without a usable slug
            NotFoundError: No playlist has the old key
            ConflictError: Another playlist of the owner has the new slug
        """
        require_owner(owner_address, caller_address)
        new_title, new_slug = derive_slug(title)

        async with self._store_errors(UPDATING_ERROR, "rename_playlist"), self._uow:
            playlist = await self._uow.get_playlist_repository().rename(
                owner_address=owner_address,
                old_slug=slug,
                new_title=new_title,
                new_slug=new_slug,
            )

        return PlaylistView.from_playlist(playlist, tracks=None)

    async def delete_playlist(
        self, owner_address: str, caller_address: str | None, slug: str
    ) -> None:
        """Delete a playlist and its memberships.

        Raises:
            UnauthorizedError: Caller is not the owner
            NotFoundError: No playlist has this key
        """
        require_owner(owner_address, caller_address)

        async with self._store_errors(DELETION_ERROR, "delete_playlist"), self._uow:
            await self._uow.get_playlist_repository().delete(
                owner_address=owner_address, slug=slug
            )

    async def add_track(
        self,
        owner_address: str,
        caller_address: str | None,
        slug: str,
        track_id: object,
    ) -> PlaylistView:
        """Add a catalogue track to a playlist.

        Raises:
            UnauthorizedError: Caller is not the owner
            InvalidInputError: Track ID missing or empty
            NotFoundError: No such playlist or track
            DuplicateMembershipError: The track is already in the playlist
        """
        require_owner(owner_address, caller_address)
        track_id = require_text(track_id, "trackId")

        async with self._store_errors(UPDATING_ERROR, "add_track"), self._uow:
            playlist = await self._uow.get_playlist_repository().add_track(
                owner_address=owner_address, slug=slug, track_id=track_id
            )

        return PlaylistView.from_playlist(playlist, project_tracks(playlist.tracks))

    async def remove_track(
        self,
        owner_address: str,
        caller_address: str | None,
        slug: str,
        track_id: object,
    ) -> PlaylistView:
        """Remove a track from a playlist.

        Raises:
            UnauthorizedError: Caller is not the owner
            InvalidInputError: Track ID missing or empty
            NotFoundError: No such playlist, or the track is not in it
        """
        require_owner(owner_address, caller_address)
        track_id = require_text(track_id, "trackId")

        async with self._store_errors(UPDATING_ERROR, "remove_track"), self._uow:
            playlist = await self._uow.get_playlist_repository().remove_track(
                owner_address=owner_address, slug=slug, track_id=track_id
            )

        return PlaylistView.from_playlist(playlist, project_tracks(playlist.tracks))
