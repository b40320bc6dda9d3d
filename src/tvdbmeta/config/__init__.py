"""tvdbmeta Configuration Module

Unified access to configuration models and settings management:
- Settings: Main configuration facade
- Loader functions: get_config, load_settings, reload_config
- Domain models: API (TheTVDB), cache, matching and logging settings
"""

from __future__ import annotations

from .loader import SettingsLoader, get_config, load_settings, reload_config
from .models import (
    APISettings,
    CacheSettings,
    LoggingSettings,
    MatchingSettings,
    Settings,
    TvdbSettings,
)

__all__ = [
    "APISettings",
    "CacheSettings",
    "LoggingSettings",
    "MatchingSettings",
    "Settings",
    "SettingsLoader",
    "TvdbSettings",
    "get_config",
    "load_settings",
    "reload_config",
]
