"""
Application settings.

Typed, immutable view over the environment: analysis service credential,
model, endpoint and timeout, plus API host/port and log level. Built once
and cached; tests call reset_settings_cache() after changing the env.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from backend_smpcguard.config.env import (
    get_analysis_api_key,
    get_analysis_base_url,
    get_analysis_model,
    get_analysis_timeout_sec,
    load_smpcguard_env,
)


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for the scoring core and its API adapter."""

    analysis_api_key: str
    analysis_model: str
    analysis_base_url: str
    analysis_timeout_sec: float
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"

    @property
    def has_analysis_credential(self) -> bool:
        return bool(self.analysis_api_key)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the current application settings (cached)."""
    load_smpcguard_env()
    try:
        api_port = int((os.getenv("API_PORT") or "8000").strip() or "8000")
    except ValueError:
        api_port = 8000
    return Settings(
        analysis_api_key=get_analysis_api_key(),
        analysis_model=get_analysis_model(),
        analysis_base_url=get_analysis_base_url(),
        analysis_timeout_sec=get_analysis_timeout_sec(),
        api_host=(os.getenv("API_HOST") or "0.0.0.0").strip(),
        api_port=api_port,
        log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
    )


def reset_settings_cache() -> None:
    get_settings.cache_clear()
