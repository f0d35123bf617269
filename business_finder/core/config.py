"""Configuration helpers for the business search service.

`SERPAPI_API_KEY` is a billable credential and must only come from the
environment (or a local `.env` file during development).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


class ConfigError(RuntimeError):
    """Raised when a configuration value is present but malformed."""


@dataclass(frozen=True)
class Settings:
    serpapi_api_key: str
    language: str = "en"
    country: str = "il"
    page_size: int = 100
    serpapi_retries: int = 0
    worker_port: int = 8080


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}.") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables and cache them for the process."""
    load_dotenv()

    serpapi_api_key = os.getenv("SERPAPI_API_KEY", "").strip()
    language = os.getenv("SERPAPI_HL", "").strip() or "en"
    country = os.getenv("SERPAPI_GL", "").strip().lower() or "il"
    page_size = _get_int_env("SERPAPI_NUM", 100)
    serpapi_retries = _get_int_env("SERPAPI_RETRIES", 0)
    worker_port = _get_int_env("PORT", _get_int_env("WORKER_PORT", 8080))

    if not serpapi_api_key:
        logger.warning("SERPAPI_API_KEY is not configured; searches will be rejected.")

    return Settings(
        serpapi_api_key=serpapi_api_key,
        language=language,
        country=country,
        page_size=page_size,
        serpapi_retries=serpapi_retries,
        worker_port=worker_port,
    )
