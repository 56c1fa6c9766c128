"""Helpers for managing local configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values

from newswidget.core.flags import flag

ENV_PATH = Path(".env")

DEFAULT_SOURCE = "https://news.boltcms.io/"


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the dashboard and its news widget."""

    news_source: str = DEFAULT_SOURCE
    news_timeout: float = 6.0
    news_cache_seconds: int = 4 * 3600
    news_proxy: str | None = None
    news_verify_ssl: bool = True
    site_name: str = "Dashboard"
    app_env: str = "prod"
    app_host: str = "localhost"
    database_url: str | None = None
    log_dir: Path = Path("logs")
    log_level: str = "INFO"


def load_env_file() -> Mapping[str, str]:
    """Load key/value pairs from the local environment file."""
    if not ENV_PATH.exists():
        return {}
    return {key: value for key, value in dotenv_values(ENV_PATH).items() if value is not None}


def load_settings() -> Settings:
    """Build settings from the .env file, overridden by process variables."""
    values: dict[str, str] = dict(load_env_file())
    values.update(os.environ)

    def _get(name: str, default: str) -> str:
        raw = values.get(name)
        return raw.strip() if raw and raw.strip() else default

    return Settings(
        news_source=_get("NEWS_SOURCE", DEFAULT_SOURCE),
        news_timeout=float(_get("NEWS_TIMEOUT", "6")),
        news_cache_seconds=int(_get("NEWS_CACHE_SECONDS", str(4 * 3600))),
        news_proxy=values.get("NEWS_PROXY") or None,
        news_verify_ssl=flag("NEWS_VERIFY_SSL", "1", values),
        site_name=_get("SITE_NAME", "Dashboard"),
        app_env=_get("APP_ENV", "prod"),
        app_host=_get("APP_HOST", "localhost"),
        database_url=values.get("DATABASE_URL") or None,
        log_dir=Path(_get("LOG_DIR", "logs")),
        log_level=_get("LOG_LEVEL", "INFO"),
    )
