"""Client configuration using Pydantic Settings.

Configuration is environment-aware:
- PFP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_BASE_URL = "https://api.pfp.lgbt/v3/"

# Determine which environment to load (default: development)
PFP_ENV = os.getenv("PFP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

_env_filename = ENV_FILE_MAP.get(PFP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (deployments may inject env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Nested BaseSettings don't inherit env_file, so populate os.environ up front.
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


def _build_client_settings() -> "ClientSettings":
    return ClientSettings()


def _build_log_settings() -> "LogSettings":
    return LogSettings()


class ClientSettings(BaseSettings):
    """Gateway configuration."""

    base_url: str = Field(
        DEFAULT_BASE_URL,
        description="Base endpoint of the pride-flag image API (trailing slash kept)",
    )
    timeout_seconds: float | None = Field(
        None,
        description="Outbound request timeout in seconds; None disables it",
    )
    default_reset_ms: int = Field(
        5000,
        description="Rate-limit window assumed when x-ratelimit-reset is absent",
        ge=0,
    )
    max_image_bytes: int = Field(
        10 * 1024 * 1024,
        description="Largest image source accepted before upload",
        ge=1,
    )
    user_agent: str = Field(
        "pfp-client/0.1.0",
        description="User-Agent header sent with every request",
    )

    model_config = SettingsConfigDict(
        env_prefix="PFP_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging output configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field("json", description="'json' or 'plain'")
    output: str = Field("stdout", description="'stdout' or 'file'")
    file_path: str | None = Field(None, description="Log file path when output=file")
    max_bytes: int = Field(
        0,
        description="Rotate the log file at this size; 0 disables rotation",
        ge=0,
    )
    backup_count: int = Field(3, description="Rotated files to keep", ge=0)

    model_config = SettingsConfigDict(
        env_prefix="PFP_LOG_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Settings container composed from the client and logging settings."""

    pfp_env: str = PFP_ENV
    client: ClientSettings = Field(default_factory=_build_client_settings)
    log: LogSettings = Field(default_factory=_build_log_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


settings = Settings()
