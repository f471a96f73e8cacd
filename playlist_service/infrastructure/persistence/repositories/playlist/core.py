"""Core playlist repository implementation.

Playlists are addressed by ``(owner_address, slug)``. Uniqueness of that key
and of memberships is left to the table constraints: writes are attempted
inside a savepoint and a unique violation is translated on the way out.
"""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import DateTime, Insert, Select, delete, insert, literal, update
from sqlalchemy.dialects.mysql import insert as mysql_insert
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from playlist_service.config import get_logger
from playlist_service.domain.entities import Playlist
from playlist_service.domain.errors import (
    ConflictError,
    DuplicateMembershipError,
    NotFoundError,
)
from playlist_service.infrastructure.persistence.database.db_models import (
    DBPlaylist,
    DBPlaylistTrack,
    DBTrack,
    DBUser,
)
from playlist_service.infrastructure.persistence.repositories.base_repo import (
    BaseRepository,
)
from playlist_service.infrastructure.persistence.repositories.playlist.mapper import (
    PlaylistMapper,
)
from playlist_service.infrastructure.persistence.repositories.repo_decorator import (
    db_operation,
    driver_error_code,
)

# Create module logger
logger = get_logger(__name__)

MEMBERSHIP_NOT_FOUND = "Track not in the playlist"
TRACK_NOT_FOUND = "Track not found"

UNIQUE_VIOLATION_CODES = frozenset({"SQLITE_CONSTRAINT_UNIQUE", "23505"})
# MySQL reports duplicates as errno 1062 in the first exception argument
MYSQL_DUPLICATE_ENTRY = 1062


def is_unique_violation(error: IntegrityError) -> bool:
    """Tell unique-constraint failures apart from other integrity errors."""
    if driver_error_code(error) in UNIQUE_VIOLATION_CODES:
        return True
    args = getattr(error.orig, "args", ())
    if args and args[0] == MYSQL_DUPLICATE_ENTRY:
        return True
    return "unique" in str(error.orig).lower()


def insert_if_absent(dialect_name: str, model: Any, key: str, **values: Any) -> Insert:
    """Insert a row unless one with the same ``key`` column already exists.

    Raises:
        NotImplementedError: The dialect has no conflict-ignoring insert
    """
    match dialect_name:
        case "sqlite":
            return sqlite_insert(model).values(**values).on_conflict_do_nothing(
                index_elements=[key]
            )
        case "postgresql":
            return postgresql_insert(model).values(**values).on_conflict_do_nothing(
                index_elements=[key]
            )
        case "mysql" | "mariadb":
            stmt = mysql_insert(model).values(**values)
            return stmt.on_duplicate_key_update({key: stmt.inserted[key]})
        case _:
            raise NotImplementedError(
                f"No insert-if-absent for the {dialect_name} dialect"
            )


class PlaylistRepository(BaseRepository[DBPlaylist, Playlist]):
    """Repository for playlist operations with SQLAlchemy 2.0 best practices."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with session and mapper."""
        super().__init__(
            session=session,
            model_class=DBPlaylist,
            mapper=PlaylistMapper(),
        )

    # -------------------------------------------------------------------------
    # QUERY BUILDERS
    # -------------------------------------------------------------------------

    def select_by_natural_key(
        self, owner_address: str, slug: str, *columns
    ) -> Select:
        """Build a query for one playlist by ``(owner_address, slug)``."""
        return self.select(*columns).where(
            DBPlaylist.owner_address == owner_address,
            DBPlaylist.slug == slug,
        )

    async def _get_playlist_id(self, owner_address: str, slug: str) -> int:
        playlist_id = await self.execute_select_one(
            self.select_by_natural_key(owner_address, slug, DBPlaylist.id)
        )
        if playlist_id is None:
            raise NotFoundError()
        return playlist_id

    # -------------------------------------------------------------------------
    # READS
    # -------------------------------------------------------------------------

    @db_operation("list_playlists")
    async def list_by_owner(self, owner_address: str) -> list[Playlist]:
        """Get all playlists for an owner, oldest first, with raw tracks."""
        stmt = self.with_default_relationships(
            self.select()
            .where(DBPlaylist.owner_address == owner_address)
            .order_by(DBPlaylist.created_at, DBPlaylist.id)
        ).execution_options(populate_existing=True)
        db_playlists = await self.execute_select_many(stmt)
        return await self.mapper.map_collection(db_playlists)

    @db_operation("get_playlist")
    async def get_by_owner_and_slug(self, owner_address: str, slug: str) -> Playlist:
        """Get a playlist with its tracks by natural key.

        Raises:
            NotFoundError: No playlist matches the key
        """
        stmt = self.with_default_relationships(
            self.select_by_natural_key(owner_address, slug)
        ).execution_options(populate_existing=True)
        db_playlist = await self.execute_select_one(stmt)
        if db_playlist is None:
            raise NotFoundError()
        return await self.mapper.to_domain(db_playlist)

    # -------------------------------------------------------------------------
    # WRITES
    # -------------------------------------------------------------------------

    @db_operation("create_playlist")
    async def create(self, owner_address: str, title: str, slug: str) -> Playlist:
        """Create an empty playlist, registering the owner if needed.

        Raises:
            ConflictError: ``(owner_address, slug)`` already exists
        """

        async def _insert() -> DBPlaylist:
            dialect_name = self.session.get_bind().dialect.name
            await self.session.execute(
                insert_if_absent(dialect_name, DBUser, "address", address=owner_address)
            )
            db_playlist = DBPlaylist(
                owner_address=owner_address,
                title=title,
                slug=slug,
            )
            self.session.add(db_playlist)
            await self.session.flush()
            return db_playlist

        try:
            db_playlist = await self.execute_transaction(_insert)
        except IntegrityError as e:
            if not is_unique_violation(e):
                raise
            raise ConflictError() from e

        logger.info(
            "Created playlist",
            owner_address=owner_address,
            slug=slug,
            playlist_id=db_playlist.id,
        )
        return self.mapper.to_metadata(db_playlist)

    @db_operation("rename_playlist")
    async def rename(
        self, owner_address: str, old_slug: str, new_title: str, new_slug: str
    ) -> Playlist:
        """Change a playlist's title and slug in one conditional update.

        Returns metadata only; memberships are not loaded.

        Raises:
            NotFoundError: The old key does not exist
            ConflictError: The new key belongs to a different playlist
        """
        stmt = (
            update(DBPlaylist)
            .where(
                DBPlaylist.owner_address == owner_address,
                DBPlaylist.slug == old_slug,
            )
            .values(title=new_title, slug=new_slug)
            .returning(DBPlaylist)
            .execution_options(populate_existing=True)
        )

        async def _update() -> DBPlaylist | None:
            result = await self.session.execute(stmt)
            return result.scalar_one_or_none()

        try:
            db_playlist = await self.execute_transaction(_update)
        except IntegrityError as e:
            if not is_unique_violation(e):
                raise
            raise ConflictError() from e

        if db_playlist is None:
            raise NotFoundError()

        logger.info(
            "Renamed playlist",
            owner_address=owner_address,
            old_slug=old_slug,
            new_slug=new_slug,
        )
        return self.mapper.to_metadata(db_playlist)

    @db_operation("delete_playlist")
    async def delete(self, owner_address: str, slug: str) -> None:
        """Delete a playlist and all of its memberships.

        Raises:
            NotFoundError: The key does not exist
        """
        playlist_ids = self.select_by_natural_key(owner_address, slug, DBPlaylist.id)

        async def _delete() -> int | None:
            await self.session.execute(
                delete(DBPlaylistTrack)
                .where(DBPlaylistTrack.playlist_id.in_(playlist_ids))
            )
            result = await self.session.execute(
                delete(DBPlaylist)
                .where(
                    DBPlaylist.owner_address == owner_address,
                    DBPlaylist.slug == slug,
                )
                .returning(DBPlaylist.id)
            )
            return result.scalar_one_or_none()

        deleted_id = await self.execute_transaction(_delete)
        if deleted_id is None:
            raise NotFoundError()

        logger.info(
            "Deleted playlist",
            owner_address=owner_address,
            slug=slug,
            playlist_id=deleted_id,
        )

    @db_operation("add_track")
    async def add_track(
        self, owner_address: str, slug: str, track_id: str
    ) -> Playlist:
        """Append a track and return the playlist with its tracks.

        The membership row is written first, selecting the playlist and the
        track in the same statement; the reason for a missed insert is looked
        up afterwards. Concurrent writers therefore queue on the store lock.

        Raises:
            NotFoundError: The playlist or the track does not exist
            DuplicateMembershipError: The track is already in the playlist
        """
        now = datetime.now(UTC)
        stamps = [literal(now, type_=DateTime(timezone=True)) for _ in range(3)]
        source = (
            self.select(DBPlaylist.id, DBTrack.id, *stamps)
            .select_from(DBPlaylist)
            .join(DBTrack, DBTrack.id == track_id)
            .where(
                DBPlaylist.owner_address == owner_address,
                DBPlaylist.slug == slug,
            )
        )

        async def _insert() -> int | None:
            result = await self.session.execute(
                insert(DBPlaylistTrack)
                .from_select(
                    ["playlist_id", "track_id", "added_at", "created_at", "updated_at"],
                    source,
                )
                .returning(DBPlaylistTrack.id)
            )
            return result.scalar_one_or_none()

        try:
            membership_id = await self.execute_transaction(_insert)
        except IntegrityError as e:
            if not is_unique_violation(e):
                raise
            raise DuplicateMembershipError() from e

        if membership_id is None:
            await self._get_playlist_id(owner_address, slug)
            raise NotFoundError(TRACK_NOT_FOUND)

        logger.info(
            "Added track to playlist",
            owner_address=owner_address,
            slug=slug,
            track_id=track_id,
        )
        return await self.get_by_owner_and_slug(owner_address, slug)

    @db_operation("remove_track")
    async def remove_track(
        self, owner_address: str, slug: str, track_id: str
    ) -> Playlist:
        """Remove a track and return the playlist with its remaining tracks.

        Raises:
            NotFoundError: The playlist or the membership does not exist
        """
        playlist_ids = self.select_by_natural_key(owner_address, slug, DBPlaylist.id)

        async def _delete() -> int | None:
            result = await self.session.execute(
                delete(DBPlaylistTrack)
                .where(
                    DBPlaylistTrack.playlist_id.in_(playlist_ids),
                    DBPlaylistTrack.track_id == track_id,
                )
                .returning(DBPlaylistTrack.id)
            )
            return result.scalar_one_or_none()

        if await self.execute_transaction(_delete) is None:
            await self._get_playlist_id(owner_address, slug)
            raise NotFoundError(MEMBERSHIP_NOT_FOUND)

        logger.info(
            "Removed track from playlist",
            owner_address=owner_address,
            slug=slug,
            track_id=track_id,
        )
        return await self.get_by_owner_and_slug(owner_address, slug)
