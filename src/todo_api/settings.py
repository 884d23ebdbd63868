from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List, Tuple

from .errors import ConfigurationError

_SQLITE_PREFIX = "sqlite:///"


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - DATABASE_URL: connection string for the store, 'sqlite:///<path>' or a bare
      file path (required)
    - APP_ENV: 'development' or 'production' (default). API docs are only served
      in development.
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - LOG_LEVEL: logging level name, 'INFO' by default
    - HOST / PORT: bind address used by the server entry point
    """

    database_url: str
    environment: str = "production"
    cors_allow_origins: Tuple[str, ...] = ("*",)
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def database_path(self) -> str:
        """Filesystem path of the SQLite database named by database_url."""
        return parse_database_url(self.database_url)


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


def _parse_port(value: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise ConfigurationError(f"PORT must be an integer, got {value!r}") from e


# PUBLIC_INTERFACE
def parse_database_url(url: str) -> str:
    """
    Resolve a connection string to a SQLite database path.

    Accepts 'sqlite:///relative/or/absolute.db' and bare paths. Any other URL
    scheme is rejected with ConfigurationError.
    """
    value = url.strip()
    if not value:
        raise ConfigurationError("DATABASE_URL is empty")
    if value.startswith(_SQLITE_PREFIX):
        path = value[len(_SQLITE_PREFIX):]
        if not path:
            raise ConfigurationError("DATABASE_URL does not name a database file")
        return path
    if "://" in value:
        scheme = value.split("://", 1)[0]
        raise ConfigurationError(f"Unsupported database scheme {scheme!r}; only sqlite is available")
    return value


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """
    Return application settings loaded from environment variables.

    Raises:
        ConfigurationError: DATABASE_URL is missing or unusable.
    """
    database_url = os.getenv("DATABASE_URL", "").strip()
    if not database_url:
        raise ConfigurationError("Missing required environment variable DATABASE_URL")
    # Validate eagerly so a bad connection string stops startup.
    parse_database_url(database_url)

    environment = _get_env("APP_ENV", "production").strip().lower()
    if environment not in {"development", "production"}:
        environment = "production"

    log_level = _get_env("LOG_LEVEL", "INFO").strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigurationError(f"Unknown LOG_LEVEL {log_level!r}")

    return Settings(
        database_url=database_url,
        environment=environment,
        cors_allow_origins=tuple(_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*"))),
        log_level=log_level,
        host=_get_env("HOST", "127.0.0.1").strip(),
        port=_parse_port(_get_env("PORT", "8000").strip()),
    )
