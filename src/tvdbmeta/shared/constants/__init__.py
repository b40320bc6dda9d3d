"""
tvdbmeta Constants Module

Centralized constants for tvdbmeta. Magic values used by the client, caches
and matching code are defined here.
"""

from .api import HTTPStatusCodes, TvdbConfig, TvdbEndpoints
from .cache import BASE_HOUR, BASE_MINUTE, BASE_SECOND, CacheConfig, SessionConfig
from .matching import (
    AirDays,
    ArtworkCategoryNames,
    DisplayOrder,
    MatchingConfig,
    PeopleTypes,
    ProviderNames,
    RemoteIdSources,
    SeasonTypes,
)

__all__ = [
    "BASE_HOUR",
    "BASE_MINUTE",
    "BASE_SECOND",
    "AirDays",
    "ArtworkCategoryNames",
    "CacheConfig",
    "DisplayOrder",
    "HTTPStatusCodes",
    "MatchingConfig",
    "PeopleTypes",
    "ProviderNames",
    "RemoteIdSources",
    "SeasonTypes",
    "SessionConfig",
    "TvdbConfig",
    "TvdbEndpoints",
]
