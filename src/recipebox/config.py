"""Application configuration helpers."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

ENV_FILE_CANDIDATES = (Path(".env"), Path(".env.local"))


class Settings(BaseModel):
    """Global application settings loaded from environment variables or .env files."""

    spoonacular_key: Optional[str] = Field(
        default=None,
        description="Spoonacular API key injected by the proxy endpoints.",
    )
    upstream_base_url: str = Field(
        default="https://api.spoonacular.com",
        description="Base URL of the upstream recipe provider.",
    )
    upstream_timeout: float = Field(
        default=10.0,
        description="Seconds before an upstream request is abandoned.",
    )
    database_path: Path = Field(
        default=Path("./data/recipebox.db"),
        description="SQLite file backing the client key-value store (favorites, theme).",
    )
    proxy_base_url: str = Field(
        default="http://127.0.0.1:8000",
        description="Base URL the command-line client uses to reach the proxy.",
    )
    default_page_size: int = Field(default=12, description="Results requested per search.")
    search_debounce_seconds: float = Field(
        default=0.3,
        description="Quiet period before search-as-you-type fires.",
    )
    favorites_batch_size: int = Field(
        default=5,
        description="Maximum concurrent detail requests when loading favorites.",
    )
    featured_count: int = Field(default=6, description="Recipes shown on the home page.")
    log_level: str = Field(default="INFO", description="Logging level (DEBUG/INFO/WARNING/ERROR)")
    log_format: str = Field(
        default="plain",
        description="Logging format (plain/json).",
    )
    log_requests: bool = Field(
        default=True,
        description="Emit request access logs when true.",
    )

    model_config = ConfigDict(frozen=True)


def _coerce_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_env_file(path: Path) -> dict[str, str]:
    payload: dict[str, str] = {}
    try:
        with path.open("r", encoding="utf-8") as handle:
            for raw_line in handle:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, raw_value = line.split("=", 1)
                payload[key.strip()] = raw_value.strip()
    except FileNotFoundError:
        return {}
    return payload


def _load_env_file_values() -> dict[str, str]:
    values: dict[str, str] = {}
    for candidate in ENV_FILE_CANDIDATES:
        values.update(_parse_env_file(candidate))
    return values


def _load_from_env() -> dict[str, object]:
    """Load optional overrides from env vars (with .env fallbacks)."""

    file_values = _load_env_file_values()

    def _env(key: str) -> Optional[str]:
        return os.environ.get(key) or file_values.get(key)

    payload: dict[str, object] = {}
    if (api_key := _env("SPOONACULAR_KEY") or _env("RECIPEBOX_SPOONACULAR_KEY")):
        payload["spoonacular_key"] = api_key
    if (base_url := _env("RECIPEBOX_UPSTREAM_BASE_URL")):
        payload["upstream_base_url"] = base_url.rstrip("/")
    if (timeout := _env("RECIPEBOX_UPSTREAM_TIMEOUT")):
        try:
            payload["upstream_timeout"] = float(timeout)
        except ValueError:
            pass
    if (db_path := _env("RECIPEBOX_DATABASE_PATH")):
        payload["database_path"] = Path(db_path)
    if (proxy_url := _env("RECIPEBOX_PROXY_BASE_URL")):
        payload["proxy_base_url"] = proxy_url.rstrip("/")
    if (page_size := _env("RECIPEBOX_DEFAULT_PAGE_SIZE")):
        try:
            payload["default_page_size"] = int(page_size)
        except ValueError:
            pass
    if (debounce := _env("RECIPEBOX_SEARCH_DEBOUNCE")):
        try:
            payload["search_debounce_seconds"] = float(debounce)
        except ValueError:
            pass
    if (batch_size := _env("RECIPEBOX_FAVORITES_BATCH_SIZE")):
        try:
            payload["favorites_batch_size"] = int(batch_size)
        except ValueError:
            pass
    if (featured := _env("RECIPEBOX_FEATURED_COUNT")):
        try:
            payload["featured_count"] = int(featured)
        except ValueError:
            pass
    if (log_level := _env("RECIPEBOX_LOG_LEVEL")):
        payload["log_level"] = log_level
    if (log_format := _env("RECIPEBOX_LOG_FORMAT")):
        payload["log_format"] = log_format
    if (log_requests := _env("RECIPEBOX_LOG_REQUESTS")):
        payload["log_requests"] = _coerce_bool(log_requests)
    return payload


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings(**_load_from_env())
