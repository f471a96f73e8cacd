"""Configuration management using Pydantic Settings.

This module provides type-safe configuration management with automatic
environment variable loading and validation using Pydantic Settings v2.

The configuration is organized into logical groups:
- DatabaseConfig: Database connection settings
- LoggingConfig: Logging levels, files, and debugging options
- ServerConfig: HTTP server bind address
- AuthConfig: Caller resolution and owner address validation
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseConfig(BaseModel):
    """Database connection configuration."""

    url: str = "sqlite+aiosqlite:///data/db/playlists.db"
    echo: bool = False


class LoggingConfig(BaseModel):
    """Logging configuration for console and file output."""

    console_level: str = "INFO"
    file_level: str = "DEBUG"
    log_file: Path = Path("data/logs/playlist_service.log")
    real_time_debug: bool = True


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    host: str = "127.0.0.1"
    port: int = 8000


class AuthConfig(BaseModel):
    """Caller resolution and address validation settings.

    Token verification happens upstream; the gateway forwards the verified
    caller address in ``caller_header``.
    """

    caller_header: str = "X-Caller-Address"
    address_pattern: str = r"^0x[0-9a-fA-F]{40}$"


class Settings(BaseSettings):
    """Main application settings with environment variable support.

    Environment variables can be set using flat naming or nested naming:
    - Flat: DATABASE_URL, CONSOLE_LOG_LEVEL, SERVER_PORT, CALLER_HEADER
    - Nested: DATABASE__URL, LOGGING__CONSOLE_LEVEL, SERVER__PORT

    The .env file is automatically loaded for development convenience.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # Nested configuration groups
    database: DatabaseConfig = DatabaseConfig()
    logging: LoggingConfig = LoggingConfig()
    server: ServerConfig = ServerConfig()
    auth: AuthConfig = AuthConfig()

    # Top-level settings
    data_dir: Path = Path("data")

    @model_validator(mode="before")
    @classmethod
    def transform_flat_env_vars(cls, data: Any) -> Any:
        """Transform flat environment variables to nested structure.

        Handles flat env vars (DATABASE_URL) and maps them to the
        nested structure expected by the models (database.url).
        """
        if not isinstance(data, dict):
            return data

        transformed = {}

        mappings = {
            "database": {
                "database_url": "url",
                "database_echo": "echo",
            },
            "logging": {
                "console_log_level": "console_level",
                "file_log_level": "file_level",
                "log_file": "log_file",
                "log_real_time_debug": "real_time_debug",
            },
            "server": {
                "server_host": "host",
                "server_port": "port",
            },
            "auth": {
                "caller_header": "caller_header",
                "address_pattern": "address_pattern",
            },
        }
        for section, section_mapping in mappings.items():
            for env_key, field_key in section_mapping.items():
                if env_key in data:
                    transformed.setdefault(section, {})[field_key] = data.pop(env_key)

        # Merge transformed nested structure back into data
        for section, values in transformed.items():
            existing = data.get(section)
            if isinstance(existing, dict):
                values = {**existing, **values}
            data[section] = values

        return data


# Singleton instance for application use
settings = Settings()
