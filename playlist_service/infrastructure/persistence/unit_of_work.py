"""Transaction scope for one manager operation over a request's session."""

from typing import Self

from sqlalchemy.ext.asyncio import AsyncSession

from playlist_service.domain.repositories.interfaces import PlaylistRepositoryProtocol
from playlist_service.infrastructure.persistence.repositories.playlist.core import (
    PlaylistRepository,
)


class DatabaseUnitOfWork:
    """Commits the session when an operation succeeds, rolls it back when it raises.

    Repository writes run in savepoints inside this transaction. The same
    unit of work may be entered again for the next operation on the session.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._committed = False

    async def __aenter__(self) -> Self:
        self._committed = False
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        if exc_type is not None:
            await self.rollback()
        elif not self._committed:
            await self.commit()

    async def commit(self) -> None:
        await self._session.commit()
        self._committed = True

    async def rollback(self) -> None:
        await self._session.rollback()

    def get_playlist_repository(self) -> PlaylistRepositoryProtocol:
        """Playlist repository bound to this transaction's session."""
        return PlaylistRepository(self._session)
