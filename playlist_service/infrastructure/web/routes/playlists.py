"""Playlist routes.

Reads are public. Every mutating route resolves the caller before it
validates the owner address, and the manager checks ownership before it
touches the store.
"""

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from playlist_service.application.services import PlaylistResourceManager
from playlist_service.infrastructure.web.dependencies import (
    authorized_owner,
    get_manager,
    valid_owner,
)

router = APIRouter(tags=["playlists"])


class TitleBody(BaseModel):
    """Body of create and rename."""

    title: str | None = None


class TrackBody(BaseModel):
    """Body of add-track."""

    model_config = ConfigDict(populate_by_name=True)

    track_id: str | None = Field(default=None, alias="trackId")


@router.get("/{owner}")
async def list_playlists(
    owner: str = Depends(valid_owner),
    manager: PlaylistResourceManager = Depends(get_manager),
) -> dict[str, Any]:
    """All playlists of ``owner`` with enriched tracks."""
    views = await manager.list_playlists(owner)
    return {"playlists": [view.to_dict() for view in views]}


@router.get("/{owner}/{slug}")
async def get_playlist(
    slug: str,
    owner: str = Depends(valid_owner),
    manager: PlaylistResourceManager = Depends(get_manager),
) -> dict[str, Any]:
    """One playlist with enriched tracks."""
    view = await manager.get_playlist(owner, slug)
    return {"playlist": view.to_dict()}


@router.post("/{owner}")
async def create_playlist(
    body: TitleBody,
    auth: tuple[str, str] = Depends(authorized_owner),
    manager: PlaylistResourceManager = Depends(get_manager),
) -> dict[str, Any]:
    """Create an empty playlist."""
    owner, caller = auth
    view = await manager.create_playlist(owner, caller, body.title)
    return {"playlist": view.to_dict()}


@router.put("/{owner}/{slug}")
async def rename_playlist(
    slug: str,
    body: TitleBody,
    auth: tuple[str, str] = Depends(authorized_owner),
    manager: PlaylistResourceManager = Depends(get_manager),
) -> dict[str, Any]:
    """Retitle a playlist; the response has no ``tracks`` key."""
    owner, caller = auth
    view = await manager.rename_playlist(owner, caller, slug, body.title)
    return {"playlist": view.to_dict()}


@router.delete("/{owner}/{slug}")
async def delete_playlist(
    slug: str,
    auth: tuple[str, str] = Depends(authorized_owner),
    manager: PlaylistResourceManager = Depends(get_manager),
) -> dict[str, Any]:
    """Delete a playlist and its memberships."""
    owner, caller = auth
    await manager.delete_playlist(owner, caller, slug)
    return {"ok": True}


@router.post("/{owner}/{slug}")
async def add_track(
    slug: str,
    body: TrackBody,
    auth: tuple[str, str] = Depends(authorized_owner),
    manager: PlaylistResourceManager = Depends(get_manager),
) -> dict[str, Any]:
    """Add a catalogue track to a playlist."""
    owner, caller = auth
    view = await manager.add_track(owner, caller, slug, body.track_id)
    return {"playlist": view.to_dict()}


@router.delete("/{owner}/{slug}/{track_id}")
async def remove_track(
    slug: str,
    track_id: str,
    auth: tuple[str, str] = Depends(authorized_owner),
    manager: PlaylistResourceManager = Depends(get_manager),
) -> dict[str, Any]:
    """Remove a track from a playlist."""
    owner, caller = auth
    view = await manager.remove_track(owner, caller, slug, track_id)
    return {"playlist": view.to_dict()}
