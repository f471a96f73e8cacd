"""Shared repository plumbing: row-to-entity mappers and savepoint-scoped writes."""

from collections.abc import Awaitable, Callable
from typing import Any

from attrs import define
from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import LoaderOption

from playlist_service.config import get_logger
from playlist_service.infrastructure.persistence.database.db_models import (
    PlaylistDBBase,
)
from playlist_service.infrastructure.persistence.repositories.repo_decorator import (
    db_operation,
)

logger = get_logger(__name__)


async def safe_fetch_relationship(db_model: PlaylistDBBase, rel_name: str) -> list[Any]:
    """Await a relationship through ``awaitable_attrs`` and return it as a list.

    To-one relationships become a one-element list, and an unset one an
    empty list.
    """
    result = await getattr(db_model.awaitable_attrs, rel_name)
    if result is None:
        return []
    if isinstance(result, list):
        return result
    return [result]


@define(frozen=True, slots=True)
class BaseModelMapper[TDBModel: PlaylistDBBase, TDomainModel]:
    """Converts loaded rows of one table into domain entities.

    Subclasses implement ``to_domain`` and name the eager loads it relies on
    in ``get_default_relationships``.
    """

    @staticmethod
    async def to_domain(db_model: TDBModel) -> TDomainModel:
        raise NotImplementedError("Subclasses must implement to_domain")

    @staticmethod
    def get_default_relationships() -> list[LoaderOption]:
        return []

    @classmethod
    async def map_collection(cls, db_models: list[TDBModel]) -> list[TDomainModel]:
        """Map rows in order with the subclass's ``to_domain``."""
        return [await cls.to_domain(db_model) for db_model in db_models]


class BaseRepository[TDBModel: PlaylistDBBase, TDomainModel]:
    """Session-bound repository over one mapped table."""

    def __init__(
        self,
        session: AsyncSession,
        model_class: type[TDBModel],
        mapper: BaseModelMapper[TDBModel, TDomainModel],
    ) -> None:
        self.session = session
        self.model_class = model_class
        self.mapper = mapper

    def select(self, *columns: Any) -> Select[tuple[Any, ...]]:
        """Select whole rows of this table, or only ``columns``."""
        return select(*columns) if columns else select(self.model_class)

    def with_default_relationships(
        self, stmt: Select[tuple[TDBModel]]
    ) -> Select[tuple[TDBModel]]:
        """Attach the mapper's eager loads to ``stmt``."""
        return stmt.options(*self.mapper.get_default_relationships())

    @db_operation("execute_select_one")
    async def execute_select_one(self, stmt: Select[tuple[Any]]) -> Any | None:
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    @db_operation("execute_select_many")
    async def execute_select_many(self, stmt: Select[tuple[TDBModel]]) -> list[TDBModel]:
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    @db_operation("transaction")
    async def execute_transaction[T](self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run ``operation`` inside a savepoint and return its result.

        A failing statement rolls back to the savepoint only, so the caller
        can translate the error and keep using the session.
        """
        async with self.session.begin_nested():
            return await operation()
