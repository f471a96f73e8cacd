"""HTTP route modules."""

from playlist_service.infrastructure.web.routes.playlists import router as playlists_router

__all__ = ["playlists_router"]
