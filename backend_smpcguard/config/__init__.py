"""
Configuration management for SMPC Guard.

Loads settings from environment variables and an optional .env file.
"""

from backend_smpcguard.config.settings import Settings, get_settings, reset_settings_cache  # noqa: F401

__all__ = ["Settings", "get_settings", "reset_settings_cache"]
