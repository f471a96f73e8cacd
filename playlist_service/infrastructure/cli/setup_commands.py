"""Setup and server commands for the playlist service CLI."""

import asyncio
from typing import Annotated

from rich.console import Console
import typer
import uvicorn

from playlist_service.config import (
    configure_uvicorn_logging,
    get_logger,
    log_startup_info,
    settings,
)
from playlist_service.infrastructure.cli.ui import command_error_handler
from playlist_service.infrastructure.persistence.database import (
    create_db_engine,
    init_db,
)
from playlist_service.infrastructure.web import create_app

# Initialize console and logger
console = Console()
logger = get_logger(__name__)


def register_setup_commands(app: typer.Typer) -> None:
    """Register setup commands with the Typer app."""
    app.command(
        name="init-db",
        help="Initialize the database schema",
        rich_help_panel="⚙️ System",
    )(initialize_database)
    app.command(
        name="serve",
        help="Run the HTTP API",
        rich_help_panel="🌐 Server",
    )(serve)


async def _initialize_database() -> None:
    engine = create_db_engine()
    try:
        await init_db(engine)
    finally:
        await engine.dispose()


@command_error_handler
def initialize_database() -> None:
    """Initialize the database schema."""
    console.print("[bold]Initializing database...[/bold]")
    asyncio.run(_initialize_database())
    console.print("[bold green]✓ Database initialized successfully[/bold green]")


@command_error_handler
def serve(
    host: Annotated[
        str | None,
        typer.Option("--host", help="Bind address (defaults to settings)"),
    ] = None,
    port: Annotated[
        int | None,
        typer.Option("--port", "-p", help="Bind port (defaults to settings)"),
    ] = None,
) -> None:
    """Run the HTTP API under uvicorn."""
    bind_host = host or settings.server.host
    bind_port = port or settings.server.port

    log_startup_info()
    configure_uvicorn_logging()
    logger.info("Starting HTTP server", host=bind_host, port=bind_port)

    uvicorn.run(create_app(), host=bind_host, port=bind_port, log_config=None)
