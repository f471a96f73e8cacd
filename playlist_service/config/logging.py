"""Logging configuration and utilities using Loguru.

This module provides centralized logging setup for the playlist service,
including structured logging with Loguru and integration with the stdlib
loggers used by uvicorn.

Public API:
----------
setup_loguru_logger(verbose: bool = False) -> None
    Configure Loguru logger for the application

get_logger(name: str) -> Logger
    Get a context-aware logger for your module
    Usage: logger = get_logger(__name__)

log_startup_info() -> None
    Log configuration at startup
    Call once when application initializes

configure_uvicorn_logging() -> None
    Forward uvicorn's stdlib loggers to Loguru

Quick Start:
-----------
```python
from playlist_service.config import get_logger
logger = get_logger(__name__)
logger.info("Playlist created", owner_address=address, slug=slug)
```
"""

import logging
from pathlib import Path
import sys
from typing import Any

from loguru import logger

from .settings import settings

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================


def setup_loguru_logger(verbose: bool = False) -> None:
    """Configure Loguru logger for the application.

    Args:
        verbose: Enable verbose logging with debug level and detailed tracebacks

    Note:
        - Removes default logger and sets up console and file handlers
        - Console format is colorized and simplified
        - File format is serialized JSON with rotation and retention
    """
    # Remove default logger
    logger.remove()

    # Create log directory structure
    log_file_path = Path(settings.logging.log_file)
    log_file_path.parent.mkdir(parents=True, exist_ok=True)

    # Add contextual info to all log records
    logger.configure(extra={"service": "playlist-service", "module": "root"})

    # -------------------------------------------------------------------------
    # Console Handler
    # -------------------------------------------------------------------------
    console_level = "DEBUG" if verbose else settings.logging.console_level
    logger.add(
        sink=sys.stdout,
        level=console_level,
        format=(
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:"
            "<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=verbose,
        diagnose=verbose,
    )

    # -------------------------------------------------------------------------
    # File Handler
    # -------------------------------------------------------------------------
    enqueue_logs = not settings.logging.real_time_debug
    logger.add(
        sink=str(log_file_path),
        level=settings.logging.file_level,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {process}:{thread} | {extra[service]} | {extra[module]} | {name}:{function}:{line} | {message}",
        rotation="10 MB",
        retention="1 week",
        compression="zip",
        backtrace=True,
        diagnose=False,
        enqueue=enqueue_logs,
        catch=True,
        serialize=True,
    )


# =============================================================================
# LOGGER FACTORY
# =============================================================================


def get_logger(name: str) -> Any:  # Use Any for Loguru logger type
    """Get a pre-configured logger instance for the given module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Loguru logger bound with module and service context
    """
    return logger.bind(
        module=name,
        service="playlist-service",
    )


# =============================================================================
# STARTUP LOGGING
# =============================================================================


def log_startup_info() -> None:
    """Log application configuration on startup.

    Displays a startup banner and logs all configuration values at debug level.
    """
    local_logger = get_logger(__name__)
    separator = "=" * 50

    local_logger.info("{}", separator)
    local_logger.info("Playlist Service")
    local_logger.info("{}", separator)

    local_logger.debug("Configuration:")
    config_dict = settings.model_dump()
    for section_name, section_values in config_dict.items():
        local_logger.debug("  {}:", section_name.upper())
        if isinstance(section_values, dict):
            for key, value in section_values.items():
                if isinstance(value, Path):
                    value = str(value)
                local_logger.debug("    {}: {}", key.upper(), value)
        else:
            if isinstance(section_values, Path):
                section_values = str(section_values)
            local_logger.debug("    {}", section_values)


# =============================================================================
# THIRD-PARTY LOGGING INTEGRATION
# =============================================================================


class _LoguruForwardHandler(logging.Handler):
    """Pass stdlib log records to Loguru, keeping the source logger name."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.bind(module=record.name).opt(exception=record.exc_info).log(
            level, record.getMessage()
        )


def configure_uvicorn_logging() -> None:
    """Route uvicorn's stdlib loggers through Loguru.

    Note:
        - Replaces handlers on the uvicorn loggers
        - Disables propagation to prevent duplicate logs
    """
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        std_logger = logging.getLogger(name)
        std_logger.handlers = [_LoguruForwardHandler()]
        std_logger.propagate = False
