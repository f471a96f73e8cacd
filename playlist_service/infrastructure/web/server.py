"""FastAPI application factory for the playlist service."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError, version

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from playlist_service.config import get_logger
from playlist_service.infrastructure.persistence.database import dispose_engine
from playlist_service.infrastructure.web.dependencies import (
    AddressValidator,
    CallerVerifier,
    header_caller_verifier,
    regex_address_validator,
)
from playlist_service.infrastructure.web.errors import register_error_handlers
from playlist_service.infrastructure.web.routes import playlists_router

logger = get_logger(__name__)


def _package_version() -> str:
    try:
        return version("playlist-service")
    except PackageNotFoundError:
        return "0.0.0"


def create_app(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    caller_verifier: CallerVerifier | None = None,
    address_validator: AddressValidator | None = None,
) -> FastAPI:
    """Build the HTTP application.

    Args:
        session_factory: Sessions for request handling; the global factory
            from settings is used when None
        caller_verifier: Resolves the authenticated caller address from a
            request; defaults to the trusted gateway header
        address_validator: Accepts or rejects owner addresses; defaults to
            the configured pattern

    Returns:
        Configured FastAPI application
    """
    owns_engine = session_factory is None

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Playlist service starting", version=app.version)
        yield
        if owns_engine:
            await dispose_engine()
        logger.info("Playlist service stopped")

    app = FastAPI(
        title="Playlist Service",
        description="Owner-scoped playlists of catalogue tracks",
        version=_package_version(),
        lifespan=lifespan,
    )

    app.state.session_factory = session_factory
    app.state.caller_verifier = caller_verifier or header_caller_verifier()
    app.state.address_validator = address_validator or regex_address_validator()

    register_error_handlers(app)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok"}

    app.include_router(playlists_router)
    return app
