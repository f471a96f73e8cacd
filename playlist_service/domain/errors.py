"""Domain error hierarchy for playlist operations.

Every error carries a client-safe ``message``. Store-specific detail is kept
on the exception for logging only and never becomes part of ``message``.
"""


class PlaylistServiceError(Exception):
    """Base error for playlist service operations."""

    default_message = "Unknown Error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(PlaylistServiceError):
    """A required field is missing, empty, or unusable."""

    default_message = "Invalid data"

    def __init__(self, message: str | None = None, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class UnauthorizedError(PlaylistServiceError):
    """The caller is not the owner named in the request path."""

    default_message = "Unauthorized"


class NotFoundError(PlaylistServiceError):
    """No row matches the requested key."""

    default_message = "Playlist not found"


class ConflictError(PlaylistServiceError):
    """A write violated a uniqueness constraint at the store."""

    default_message = "Playlist already exists"


class DuplicateMembershipError(ConflictError):
    """The track is already a member of the playlist."""

    default_message = "Track already in the playlist"


class StoreError(PlaylistServiceError):
    """Any other store failure, translated at the manager boundary.

    Attributes:
        code: The database driver's error code, or SQLAlchemy's when the
            driver reports none; for logs only
    """

    def __init__(self, message: str | None = None, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code
