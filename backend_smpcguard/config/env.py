"""
Environment variable loading for SMPC Guard.

- GEMINI_API_KEY (or API_KEY): credential for the analysis service; optional.
- ANALYSIS_MODEL: model name (default: gemini-3-flash-preview)
- ANALYSIS_BASE_URL: REST endpoint root for the analysis service
- ANALYSIS_TIMEOUT_SEC: outbound request timeout (default: 15)
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

# Project root: config is backend_smpcguard/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_BACKEND_DIR = _CONFIG_DIR.parent
_ROOT = _BACKEND_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_ANALYSIS_MODEL = "gemini-3-flash-preview"
DEFAULT_ANALYSIS_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_ANALYSIS_TIMEOUT_SEC = 15.0


def load_smpcguard_env() -> None:
    """Load .env from project root. Safe to call multiple times."""
    try:
        from dotenv import load_dotenv
        load_dotenv(_ENV_PATH)
    except Exception:
        pass


def get_analysis_api_key() -> str:
    """
    Return the analysis service credential, or "" when not configured.

    Order: GEMINI_API_KEY > API_KEY. A missing key is not an error; outbound
    calls fail and the analysis gateway falls back.
    """
    load_smpcguard_env()
    return (os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or "").strip()


def get_analysis_model() -> str:
    load_smpcguard_env()
    return (os.getenv("ANALYSIS_MODEL") or "").strip() or DEFAULT_ANALYSIS_MODEL


def get_analysis_base_url() -> str:
    load_smpcguard_env()
    url = (os.getenv("ANALYSIS_BASE_URL") or "").strip() or DEFAULT_ANALYSIS_BASE_URL
    return url.rstrip("/")


def get_analysis_timeout_sec() -> float:
    """Return ANALYSIS_TIMEOUT_SEC; invalid or non-positive values use the default."""
    load_smpcguard_env()
    raw = (os.getenv("ANALYSIS_TIMEOUT_SEC") or "").strip()
    if not raw:
        return DEFAULT_ANALYSIS_TIMEOUT_SEC
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_ANALYSIS_TIMEOUT_SEC
    return value if value > 0 else DEFAULT_ANALYSIS_TIMEOUT_SEC


def mask_api_key(key: str) -> str:
    """Return a log-safe form of the credential."""
    if not key:
        return "<unset>"
    return key[:4] + "***"
