"""Configuration module for the playlist service.

Public API:
----------
settings: Settings instance
    Pydantic settings object with nested configuration

get_logger(name: str) -> Logger
    Get a context-aware logger for your module

setup_loguru_logger(verbose: bool = False) -> None
    Configure Loguru logger for the application

log_startup_info() -> None
    Log configuration at startup

configure_uvicorn_logging() -> None
    Forward uvicorn logs to Loguru

Usage:
------
```python
from playlist_service.config import get_logger, settings

logger = get_logger(__name__)
logger.info("Connecting", url=settings.database.url)
```
"""

from .logging import (
    configure_uvicorn_logging,
    get_logger,
    log_startup_info,
    setup_loguru_logger,
)
from .settings import Settings, settings

__all__ = [
    "Settings",
    "configure_uvicorn_logging",
    "get_logger",
    "log_startup_info",
    "settings",
    "setup_loguru_logger",
]
