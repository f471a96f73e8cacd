"""SQLAlchemy database models for the playlist service.

This module defines the persisted entities and their relationships using
SQLAlchemy 2.0 patterns with proper type annotations and relationship definitions.

Uniqueness invariants live here as constraints:
- ``playlists``: ``(owner_address, slug)``
- ``playlist_tracks``: ``(playlist_id, track_id)``
"""

from datetime import UTC, datetime

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Index,
    MetaData,
    String,
    UniqueConstraint,
)
from sqlalchemy.ext.asyncio import AsyncAttrs, AsyncEngine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from playlist_service.config import get_logger

# Create module logger
logger = get_logger(__name__)

# Define naming convention for constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Create metadata with naming convention
metadata = MetaData(naming_convention=convention)


class PlaylistDBBase(AsyncAttrs, DeclarativeBase):
    """Base class for all database models with store-managed timestamps."""

    metadata = metadata

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )


class DBUser(PlaylistDBBase):
    """Playlist owner, identified by chain address."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    address: Mapped[str] = mapped_column(String(64), nullable=False)

    playlists: Mapped[list["DBPlaylist"]] = relationship(
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (UniqueConstraint("address"),)


class DBTrack(PlaylistDBBase):
    """Catalogue track. Owned by ingestion, read-only to this service."""

    __tablename__ = "tracks"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    artist: Mapped[str | None] = mapped_column(String(255))
    duration_ms: Mapped[int | None]

    # Relationships
    tag_links: Mapped[list["DBTrackTag"]] = relationship(
        back_populates="track",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="DBTrackTag.id",
    )
    play_events: Mapped[list["DBPlayEvent"]] = relationship(
        back_populates="track",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    playlist_tracks: Mapped[list["DBPlaylistTrack"]] = relationship(
        back_populates="track",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (Index(None, "title"),)


class DBTag(PlaylistDBBase):
    """Tag vocabulary."""

    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(64), nullable=False)

    track_links: Mapped[list["DBTrackTag"]] = relationship(
        back_populates="tag",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (UniqueConstraint("name"),)


class DBTrackTag(PlaylistDBBase):
    """Association between tracks and tags, in insertion order."""

    __tablename__ = "track_tags"

    id: Mapped[int] = mapped_column(primary_key=True)
    track_id: Mapped[str] = mapped_column(ForeignKey("tracks.id", ondelete="CASCADE"))
    tag_id: Mapped[int] = mapped_column(ForeignKey("tags.id", ondelete="CASCADE"))

    # Relationships
    track: Mapped[DBTrack] = relationship(
        back_populates="tag_links",
        passive_deletes=True,
    )
    tag: Mapped[DBTag] = relationship(
        back_populates="track_links",
        passive_deletes=True,
    )

    __table_args__ = (Index(None, "track_id", "tag_id"),)


class DBPlayEvent(PlaylistDBBase):
    """Immutable record of a single track play."""

    __tablename__ = "play_events"

    id: Mapped[int] = mapped_column(primary_key=True)
    track_id: Mapped[str] = mapped_column(ForeignKey("tracks.id", ondelete="CASCADE"))
    listener_address: Mapped[str | None] = mapped_column(String(64))
    played_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    track: Mapped[DBTrack] = relationship(
        back_populates="play_events",
        passive_deletes=True,
    )

    __table_args__ = (Index(None, "track_id"),)


class DBPlaylist(PlaylistDBBase):
    """User playlist metadata."""

    __tablename__ = "playlists"

    id: Mapped[int] = mapped_column(primary_key=True)
    owner_address: Mapped[str] = mapped_column(
        ForeignKey("users.address", ondelete="CASCADE"),
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False)

    # Relationships
    owner: Mapped[DBUser] = relationship(
        back_populates="playlists",
        passive_deletes=True,
    )
    tracks: Mapped[list["DBPlaylistTrack"]] = relationship(
        back_populates="playlist",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by=lambda: [DBPlaylistTrack.added_at, DBPlaylistTrack.id],
    )

    __table_args__ = (UniqueConstraint("owner_address", "slug"),)


class DBPlaylistTrack(PlaylistDBBase):
    """Playlist membership."""

    __tablename__ = "playlist_tracks"

    id: Mapped[int] = mapped_column(primary_key=True)
    playlist_id: Mapped[int] = mapped_column(
        ForeignKey("playlists.id", ondelete="CASCADE"),
    )
    track_id: Mapped[str] = mapped_column(ForeignKey("tracks.id", ondelete="CASCADE"))
    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    # Relationships
    playlist: Mapped[DBPlaylist] = relationship(
        back_populates="tracks",
        passive_deletes=True,
    )
    track: Mapped[DBTrack] = relationship(
        back_populates="playlist_tracks",
        passive_deletes=True,
    )

    __table_args__ = (UniqueConstraint("playlist_id", "track_id"),)


async def init_db(engine: AsyncEngine | None = None) -> None:
    """Initialize database schema.

    Creates all tables if they don't exist.
    This is a safe operation that won't affect existing data.
    """
    from sqlalchemy import inspect

    from playlist_service.infrastructure.persistence.database.db_connection import (
        get_engine,
    )

    engine = engine or get_engine()

    try:
        async with engine.connect() as conn:
            existing_tables = await conn.run_sync(
                lambda sync_conn: inspect(sync_conn).get_table_names()
            )
            if existing_tables:
                logger.info(f"Found existing tables: {existing_tables}")

        # Create tables - SQLAlchemy will skip tables that already exist
        async with engine.begin() as conn:
            await conn.run_sync(PlaylistDBBase.metadata.create_all)
            logger.info("Database schema verified - all tables exist")

    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise
    else:
        logger.info("Database schema initialization complete")
