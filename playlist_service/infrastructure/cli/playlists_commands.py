"""Read-only playlist inspection commands."""

from typing import Annotated

import typer

from playlist_service.infrastructure.cli.runtime import run_with_manager
from playlist_service.infrastructure.cli.ui import (
    command_error_handler,
    display_playlist,
    display_playlists,
)

app = typer.Typer(
    help="Inspect stored playlists",
    no_args_is_help=True,
)


@app.command(name="list")
@command_error_handler
def list_playlists(
    owner: Annotated[str, typer.Argument(help="Owner chain address")],
) -> None:
    """List an owner's playlists."""
    views = run_with_manager(lambda manager: manager.list_playlists(owner))
    display_playlists(owner, views)


@app.command(name="show")
@command_error_handler
def show_playlist(
    owner: Annotated[str, typer.Argument(help="Owner chain address")],
    slug: Annotated[str, typer.Argument(help="Playlist slug")],
) -> None:
    """Show one playlist with play counts and tags."""
    view = run_with_manager(lambda manager: manager.get_playlist(owner, slug))
    display_playlist(view)
