"""Configuration models for tvdbmeta."""

from .api_settings import APISettings, TvdbSettings
from .app_settings import LoggingSettings
from .cache_settings import CacheSettings
from .matching_settings import MatchingSettings
from .settings import Settings

__all__ = [
    "APISettings",
    "CacheSettings",
    "LoggingSettings",
    "MatchingSettings",
    "Settings",
    "TvdbSettings",
]
