"""Data models for tvdbmeta.

- tvdb: raw catalog records
- metadata: host-facing queries, results and call parameters
- matching: ranking inputs and outputs
"""

from .matching import ArtworkItem, RankedResult, SearchCandidate
from .metadata import (
    ArtworkFilters,
    EpisodeInfo,
    EpisodeMetadata,
    EpisodeQuery,
    ImageType,
    MetadataResult,
    ParsedName,
    PersonInfo,
    PersonType,
    RemoteImage,
    SearchFilters,
    SeriesInfo,
    SeriesMetadata,
    SeriesStatus,
)

__all__ = [
    "ArtworkFilters",
    "ArtworkItem",
    "EpisodeInfo",
    "EpisodeMetadata",
    "EpisodeQuery",
    "ImageType",
    "MetadataResult",
    "ParsedName",
    "PersonInfo",
    "PersonType",
    "RankedResult",
    "RemoteImage",
    "SearchCandidate",
    "SearchFilters",
    "SeriesInfo",
    "SeriesMetadata",
    "SeriesStatus",
]
