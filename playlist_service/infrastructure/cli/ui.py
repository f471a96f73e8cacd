"""UI helpers for CLI interaction.

This module provides reusable UI components and helpers for the CLI,
keeping the presentation logic separate from business logic.
"""

from collections.abc import Callable
from datetime import UTC, datetime
import functools
from typing import ParamSpec, TypeVar

from rich.console import Console
from rich.table import Table
import typer

from playlist_service.config import get_logger
from playlist_service.domain.entities import PlaylistView
from playlist_service.domain.errors import PlaylistServiceError

# Initialize console and logger
console = Console()
logger = get_logger(__name__)

# Type variables for command handler decorator
P = ParamSpec("P")
R = TypeVar("R")


def command_error_handler[**P, R](func: Callable[P, R]) -> Callable[P, R]:
    """Decorator to standardize error handling for CLI commands.

    This decorator wraps a command function to:
    1. Provide consistent error handling using Typer's Exit mechanism
    2. Log errors using Loguru with proper context
    3. Display user-friendly error messages with Rich

    Args:
        func: The command function to wrap

    Returns:
        Wrapped function with integrated error handling
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        operation = func.__name__.replace("_", " ")

        with logger.contextualize(operation=operation):
            try:
                logger.debug(f"Executing {operation}")
                return func(*args, **kwargs)

            except typer.Exit:
                raise

            except typer.Abort:
                logger.info(f"Operation {operation} aborted by user")
                raise

            except PlaylistServiceError as e:
                # Expected outcome; the message is already user-facing
                logger.info(f"{operation} failed: {e.message}")
                console.print(f"\n[bold red]✗ {e.message}[/bold red]")
                raise typer.Exit(code=1) from e

            except Exception as e:
                logger.exception(f"Error during {operation}")
                console.print(f"\n[bold red]✗ Error during {operation}:[/bold red] {e}")
                raise typer.Exit(code=1) from e

    return wrapper


def format_millis(millis: int | None) -> str:
    """Render epoch milliseconds as a UTC timestamp."""
    if millis is None:
        return "-"
    return datetime.fromtimestamp(millis / 1000, tz=UTC).strftime("%Y-%m-%d %H:%M")


def display_playlists(owner_address: str, views: list[PlaylistView]) -> None:
    """Display an owner's playlists as a table."""
    if not views:
        console.print(f"[yellow]No playlists for {owner_address}[/yellow]")
        return

    table = Table(title=f"Playlists of {owner_address}")
    table.add_column("Slug", style="cyan")
    table.add_column("Title", style="green")
    table.add_column("Tracks", justify="right")
    table.add_column("Updated", style="dim")

    for view in views:
        table.add_row(
            view.slug,
            view.title,
            str(len(view.tracks or [])),
            format_millis(view.updated_at),
        )

    console.print(table)


def display_playlist(view: PlaylistView) -> None:
    """Display one playlist with its enriched tracks."""
    table = Table(title=f"{view.title} [dim]({view.slug})[/dim]")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Track ID", style="cyan")
    table.add_column("Title", style="green")
    table.add_column("Artist")
    table.add_column("Plays", justify="right")
    table.add_column("Tags", style="magenta")

    for position, track in enumerate(view.tracks or [], start=1):
        table.add_row(
            str(position),
            track.id,
            track.title,
            track.artist or "",
            str(track.play_count),
            ", ".join(track.tags),
        )

    console.print(table)
    console.print(
        f"[dim]Owner {view.owner_address} · created {format_millis(view.created_at)}"
        f" · updated {format_millis(view.updated_at)}[/dim]"
    )
