"""Config loading with layered resolution: init > env > .env > config.toml > defaults."""

from __future__ import annotations

from functools import lru_cache

from chartfeed.config.settings import AppSettings


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Load and cache application settings."""
    return AppSettings()
