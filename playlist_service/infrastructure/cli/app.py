"""Playlist service CLI - Main application entry point and app structure."""

from importlib.metadata import PackageNotFoundError, version
from typing import Annotated

from rich.console import Console
import typer

from playlist_service.config import get_logger, settings, setup_loguru_logger
from playlist_service.infrastructure.cli import playlists_commands
from playlist_service.infrastructure.cli.setup_commands import register_setup_commands

try:
    VERSION = version("playlist-service")
except PackageNotFoundError:
    VERSION = "0.0.0"

# Initialize console and logger with reasonable width
console = Console(width=80)
logger = get_logger(__name__)

app = typer.Typer(
    help=f"🎵 Playlist Service v{VERSION} - Owner-scoped playlists over HTTP",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
    pretty_exceptions_enable=True,
    pretty_exceptions_short=True,
    pretty_exceptions_show_locals=False,
)

app.add_typer(
    playlists_commands.app,
    name="playlists",
    help="Inspect stored playlists",
    rich_help_panel="🎵 Playlists",
)

register_setup_commands(app)


@app.command(name="version", rich_help_panel="⚙️ System")
def version_command() -> None:
    """Show version information."""
    console.print(
        f"[bold bright_blue]🎵 Playlist Service[/bold bright_blue] [dim]v{VERSION}[/dim]"
    )


@app.callback()
def init_cli(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output"),
    ] = False,
) -> None:
    """Initialize the playlist service CLI."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    setup_loguru_logger(verbose)

    settings.data_dir.mkdir(exist_ok=True)


def main() -> int:
    """Application entry point."""
    try:
        return app() or 0
    except Exception:
        logger.exception("Unhandled exception")
        return 1
