"""Services: caching, matching, ranking and metadata resolution."""

from .metadata_resolver import MetadataResolver
from .name_normalizer import normalize, parse_name
from .result_cache import ResultCache, build_cache_key
from .series_matcher import SeriesMatcher
from .session_cache import SessionCache
from .tvdb import TvdbClient, TvdbClientManager

__all__ = [
    "MetadataResolver",
    "ResultCache",
    "SeriesMatcher",
    "SessionCache",
    "TvdbClient",
    "TvdbClientManager",
    "build_cache_key",
    "normalize",
    "parse_name",
]
