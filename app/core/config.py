"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file

Every external collaborator is optional at load time. A missing bot token or
Airtable credential degrades the bot instead of preventing start-up.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (production might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Nested BaseSettings don't inherit env_file, so populate os.environ first.
# Tests set TESTING=true to keep a developer's .env out of the run.
if _env_file and os.getenv("TESTING") != "true":
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


def _build_telegram_settings() -> "TelegramSettings":
    return TelegramSettings()


def _build_airtable_settings() -> "AirtableSettings":
    return AirtableSettings()


def _build_app_settings() -> "AppSettings":
    return AppSettings()


def _build_log_settings() -> "LogSettings":
    return LogSettings()


class TelegramSettings(BaseSettings):
    """Telegram Bot API and admin allow-list configuration."""

    bot_token: str | None = Field(
        None,
        description="Bot token issued by BotFather. Replies are not sent without it.",
    )
    admin_ids: str | None = Field(
        None,
        description="Comma-separated numeric Telegram user ids allowed to run admin commands",
    )
    admin_policy: Literal["open_if_empty", "strict"] = Field(
        "open_if_empty",
        description=(
            "open_if_empty treats every sender as admin when admin_ids is empty; "
            "strict treats nobody as admin in that case"
        ),
    )
    api_url: str = Field(
        "https://api.telegram.org",
        description="Telegram Bot API base URL",
    )
    timeout_seconds: float = Field(
        10.0,
        description="Timeout for outbound sendMessage calls",
        gt=0,
    )

    model_config = SettingsConfigDict(
        env_prefix="TELEGRAM_",
        case_sensitive=False,
    )


class AirtableSettings(BaseSettings):
    """Airtable table holding the payment provider records."""

    api_key: str | None = Field(
        None,
        description="Airtable personal access token",
    )
    base_id: str | None = Field(
        None,
        description="Airtable base id (appXXXXXXXXXXXXXX)",
    )
    table: str = Field(
        "Payments",
        description="Table name holding Provider/Details rows",
    )
    view: str = Field(
        "Grid view",
        description="View used when listing records",
    )
    page_size: int = Field(
        50,
        description="Maximum number of records returned by a list call",
        ge=1,
        le=100,
    )
    api_url: str = Field(
        "https://api.airtable.com/v0",
        description="Airtable REST API base URL",
    )
    timeout_seconds: float = Field(
        10.0,
        description="Timeout for Airtable calls",
        gt=0,
    )

    model_config = SettingsConfigDict(
        env_prefix="AIRTABLE_",
        case_sensitive=False,
    )


class AppSettings(BaseSettings):
    """Application-wide configuration."""

    debug: bool = Field(
        False,
        description="Enable debug mode with verbose logging",
    )
    rate_limit_enabled: bool = Field(
        True,
        description="Throttle commands per conversation",
    )
    rate_limit_requests: int = Field(
        3,
        description="Maximum number of messages allowed per window (per conversation)",
        ge=1,
    )
    rate_limit_window_ms: int = Field(
        5000,
        description="Rate limit window size in milliseconds",
        ge=1,
    )
    rate_limit_max_tracked_keys: int = Field(
        10000,
        description="Number of tracked conversations above which expired windows are pruned",
        ge=1,
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging output configuration."""

    level: str = Field("INFO", description="Root log level")
    format: Literal["json", "plain"] = Field("json", description="Log line format")
    output: Literal["stdout", "file"] = Field("stdout", description="Log destination")
    file_path: str | None = Field(None, description="Log file path when output=file")
    max_bytes: int = Field(
        0,
        description="Rotate the log file at this size (0 disables rotation)",
        ge=0,
    )
    backup_count: int = Field(3, description="Rotated files to keep", ge=0)
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header carrying the correlation id",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main application settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    """

    app_env: str = APP_ENV
    telegram: TelegramSettings = Field(default_factory=_build_telegram_settings)
    airtable: AirtableSettings = Field(default_factory=_build_airtable_settings)
    app: AppSettings = Field(default_factory=_build_app_settings)
    log: LogSettings = Field(default_factory=_build_log_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
settings = Settings()
