"""Core configuration.

Responsibilities:
- Centralize environment variables (pydantic-settings) outside the CLI.
- Give adapters (HTTP client, renderer, server) one consistent source of config.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Central application settings.

    Every value can be overridden with a `TOR_OVERLAY_<FIELD>` environment
    variable or a local `.env` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="TOR_OVERLAY_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    host: str = Field(
        default="localhost",
        min_length=1,
        description="Bind address for `serve`.",
    )
    port: int = Field(
        default=8888,
        ge=1,
        le=65535,
        description="Bind port for `serve`.",
    )
    route_prefix: str = Field(
        default="/warnings.txt",
        min_length=1,
        description="Request path prefix served by the overlay endpoint.",
    )

    archive_base_url: str = Field(
        default="https://mesonet.agron.iastate.edu/archive/data",
        min_length=8,
        description="Base URL of the daily text-product archive.",
    )
    fetch_max_concurrency: int = Field(
        default=8,
        ge=1,
        le=64,
        description="Maximum archive requests in flight per overlay request.",
    )
    http_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Per-request timeout (seconds). None disables the timeout.",
    )
    user_agent: str = Field(
        default="tor-overlay/0.1 (+https://local)",
        min_length=1,
        description="User-Agent sent to the archive.",
    )

    overlay_title: str = Field(
        default="Past TORs",
        min_length=1,
        description="Value of the overlay `Title:` header.",
    )
    overlay_refresh_seconds: int = Field(
        default=9999,
        ge=1,
        description="Value of the overlay `Refresh:` header.",
    )

    log_level: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ...).",
    )
