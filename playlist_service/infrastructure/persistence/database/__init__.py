"""Database engine, session management and ORM models."""

from .db_connection import (
    create_db_engine,
    create_session_factory,
    dispose_engine,
    get_engine,
    get_session,
    get_session_factory,
)
from .db_models import (
    DBPlayEvent,
    DBPlaylist,
    DBPlaylistTrack,
    DBTag,
    DBTrack,
    DBTrackTag,
    DBUser,
    PlaylistDBBase,
    init_db,
)

__all__ = [
    "DBPlayEvent",
    "DBPlaylist",
    "DBPlaylistTrack",
    "DBTag",
    "DBTrack",
    "DBTrackTag",
    "DBUser",
    "PlaylistDBBase",
    "create_db_engine",
    "create_session_factory",
    "dispose_engine",
    "get_engine",
    "get_session",
    "get_session_factory",
    "init_db",
]
