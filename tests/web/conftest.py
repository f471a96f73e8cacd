"""HTTP API fixtures: the app over the seeded in-memory database."""

import pytest
from httpx import ASGITransport, AsyncClient

from playlist_service.config import settings
from playlist_service.infrastructure.web import create_app
from tests.fixtures.models import OTHER_OWNER, OWNER


@pytest.fixture
def app(session_factory, seeded_catalogue):
    """Application wired to the test database."""
    return create_app(session_factory=session_factory)


@pytest.fixture
async def client(app):
    """Async client speaking ASGI to the app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def owner_headers():
    """Caller header for the path owner."""
    return {settings.auth.caller_header: OWNER}


@pytest.fixture
def intruder_headers():
    """Caller header for someone else."""
    return {settings.auth.caller_header: OTHER_OWNER}
