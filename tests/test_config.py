"""
Pytest tests for env-driven configuration.
"""

from __future__ import annotations


def test_defaults_without_env():
    from backend_smpcguard.config import get_settings
    from backend_smpcguard.config.env import (
        DEFAULT_ANALYSIS_BASE_URL,
        DEFAULT_ANALYSIS_MODEL,
        DEFAULT_ANALYSIS_TIMEOUT_SEC,
    )

    settings = get_settings()
    assert settings.analysis_api_key == ""
    assert settings.has_analysis_credential is False
    assert settings.analysis_model == DEFAULT_ANALYSIS_MODEL
    assert settings.analysis_base_url == DEFAULT_ANALYSIS_BASE_URL
    assert settings.analysis_timeout_sec == DEFAULT_ANALYSIS_TIMEOUT_SEC


def test_api_key_precedence(monkeypatch):
    from backend_smpcguard.config.env import get_analysis_api_key

    monkeypatch.setenv("API_KEY", "generic")
    assert get_analysis_api_key() == "generic"
    monkeypatch.setenv("GEMINI_API_KEY", " gemini ")
    assert get_analysis_api_key() == "gemini"


def test_timeout_parsing(monkeypatch):
    from backend_smpcguard.config.env import DEFAULT_ANALYSIS_TIMEOUT_SEC, get_analysis_timeout_sec

    monkeypatch.setenv("ANALYSIS_TIMEOUT_SEC", "2.5")
    assert get_analysis_timeout_sec() == 2.5
    monkeypatch.setenv("ANALYSIS_TIMEOUT_SEC", "soon")
    assert get_analysis_timeout_sec() == DEFAULT_ANALYSIS_TIMEOUT_SEC
    monkeypatch.setenv("ANALYSIS_TIMEOUT_SEC", "-3")
    assert get_analysis_timeout_sec() == DEFAULT_ANALYSIS_TIMEOUT_SEC


def test_settings_cache_reset(monkeypatch):
    from backend_smpcguard.config import get_settings, reset_settings_cache

    assert get_settings().has_analysis_credential is False
    monkeypatch.setenv("GEMINI_API_KEY", "abc123")
    monkeypatch.setenv("API_PORT", "not-a-port")
    assert get_settings().has_analysis_credential is False  # cached
    reset_settings_cache()
    settings = get_settings()
    assert settings.analysis_api_key == "abc123"
    assert settings.api_port == 8000


def test_mask_api_key():
    from backend_smpcguard.config.env import mask_api_key

    assert mask_api_key("") == "<unset>"
    assert mask_api_key("AIzaSySecret") == "AIza***"
