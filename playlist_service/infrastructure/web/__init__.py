"""HTTP API for the playlist service."""

from playlist_service.infrastructure.web.server import create_app

__all__ = ["create_app"]
