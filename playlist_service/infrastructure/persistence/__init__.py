"""Persistence layer: database setup, repositories and the unit of work."""

from playlist_service.infrastructure.persistence.unit_of_work import DatabaseUnitOfWork

__all__ = ["DatabaseUnitOfWork"]
