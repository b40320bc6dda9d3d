"""Host-facing metadata models.

Queries the host hands to the resolver, the records it gets back, and the
structured call parameters used by the cached catalog facade.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Generic, TypeVar

from tvdbmeta.shared.constants import ProviderNames
from tvdbmeta.shared.types.base import BaseDataclass

T = TypeVar("T")


class ImageType(str, Enum):
    """Host image slots."""

    BACKDROP = "Backdrop"
    THUMB = "Thumb"
    PRIMARY = "Primary"
    BANNER = "Banner"
    LOGO = "Logo"


class PersonType(str, Enum):
    ACTOR = "Actor"
    DIRECTOR = "Director"
    GUEST_STAR = "GuestStar"
    WRITER = "Writer"


class SeriesStatus(str, Enum):
    CONTINUING = "Continuing"
    ENDED = "Ended"
    UNRELEASED = "Unreleased"

    @classmethod
    def parse(cls, name: str | None) -> SeriesStatus | None:
        """Parse a catalog status name case-insensitively, None if unknown."""
        if not name:
            return None
        for status in cls:
            if status.value.lower() == name.strip().lower():
                return status
        return None


@dataclass
class PersonInfo(BaseDataclass):
    """A credited person."""

    name: str
    type: PersonType
    role: str = ""
    sort_order: int | None = None
    image_url: str | None = None


@dataclass
class RemoteImage(BaseDataclass):
    """Ranked image handed to the host image pipeline."""

    url: str
    type: ImageType
    thumbnail_url: str | None = None
    language: str | None = None
    width: int = 0
    height: int = 0
    vote_count: float | None = None
    community_rating: float | None = None
    provider_name: str = "TheTVDB"
    rating_type: str = "score"


@dataclass
class SeriesInfo(BaseDataclass):
    """Series lookup query from the host."""

    name: str = ""
    year: int | None = None
    language: str = ""
    provider_ids: dict[str, str] = field(default_factory=dict)

    def get_provider_id(self, provider: str) -> str | None:
        value = self.provider_ids.get(provider)
        return value or None


@dataclass
class EpisodeInfo(BaseDataclass):
    """Episode lookup query from the host.

    Attributes:
        series_provider_ids: Provider ids of the parent series
        season_number: Season (parent index) number
        episode_number: Episode (index) number
        episode_number_end: Last episode number for multi-episode files
        premiere_date: Air date, used when SxE is unknown
        series_display_order: "", "dvd" or "absolute"
    """

    name: str = ""
    language: str = ""
    series_provider_ids: dict[str, str] = field(default_factory=dict)
    season_number: int | None = None
    episode_number: int | None = None
    episode_number_end: int | None = None
    premiere_date: date | None = None
    series_display_order: str = ""
    path: str | None = None

    @property
    def series_tvdb_id(self) -> str | None:
        return self.series_provider_ids.get(ProviderNames.TVDB) or None


@dataclass
class SeriesMetadata(BaseDataclass):
    """Resolved series record."""

    tvdb_id: int
    name: str = ""
    overview: str = ""
    air_days: list[str] = field(default_factory=list)
    air_time: str | None = None
    status: SeriesStatus | None = None
    premiere_date: date | None = None
    end_date: date | None = None
    production_year: int | None = None
    runtime_minutes: int | None = None
    genres: list[str] = field(default_factory=list)
    studios: list[str] = field(default_factory=list)
    provider_ids: dict[str, str] = field(default_factory=dict)


@dataclass
class EpisodeMetadata(BaseDataclass):
    """Resolved episode record."""

    tvdb_id: int
    name: str = ""
    overview: str = ""
    season_number: int | None = None
    episode_number: int | None = None
    episode_number_end: int | None = None
    airs_before_episode: int | None = None
    airs_after_season: int | None = None
    airs_before_season: int | None = None
    premiere_date: date | None = None
    production_year: int | None = None
    official_rating: str = ""
    provider_ids: dict[str, str] = field(default_factory=dict)


@dataclass
class MetadataResult(Generic[T]):
    """Resolver result: the item (if matched) and its credited people.

    An unmatched lookup is an empty result (``has_metadata`` False) rather
    than an exception.
    """

    item: T | None = None
    has_metadata: bool = False
    queried_by_id: bool = True
    result_language: str | None = None
    people: list[PersonInfo] = field(default_factory=list)

    def add_person(self, person: PersonInfo) -> None:
        self.people.append(person)

    def reset_people(self) -> None:
        self.people.clear()


@dataclass(frozen=True)
class SearchFilters:
    """Search call parameters."""

    query: str | None = None
    type: str = "series"
    language: str | None = None
    remote_id: str | None = None

    def cache_key_items(self) -> list[tuple[str, Any]]:
        """Non-None (name, value) pairs in declaration order."""
        items = [
            ("query", self.query),
            ("type", self.type),
            ("language", self.language),
            ("remote_id", self.remote_id),
        ]
        return [(name, value) for name, value in items if value is not None]

    def to_params(self) -> dict[str, str]:
        return {name: str(value) for name, value in self.cache_key_items()}


@dataclass(frozen=True)
class ArtworkFilters:
    """Series artworks call parameters: artwork type id and language."""

    type: int | None = None
    lang: str | None = None

    def cache_key_items(self) -> list[tuple[str, Any]]:
        items = [("type", self.type), ("lang", self.lang)]
        return [(name, value) for name, value in items if value is not None]

    def to_params(self) -> dict[str, str]:
        return {name: str(value) for name, value in self.cache_key_items()}


@dataclass(frozen=True)
class EpisodeQuery:
    """Series episodes call parameters.

    ``page`` defaults to 0 so a query built with and without an explicit
    first page produce the same cache key.
    """

    page: int = 0
    season: int | None = None
    episode_number: int | None = None
    air_date: str | None = None

    def cache_key_items(self) -> list[tuple[str, Any]]:
        items = [
            ("page", self.page),
            ("season", self.season),
            ("episode_number", self.episode_number),
            ("air_date", self.air_date),
        ]
        return [(name, value) for name, value in items if value is not None]

    def to_params(self) -> dict[str, str]:
        params = {
            "page": self.page,
            "season": self.season,
            "episodeNumber": self.episode_number,
            "airDate": self.air_date,
        }
        return {name: str(value) for name, value in params.items() if value is not None}


@dataclass(frozen=True)
class ParsedName:
    """Library name split into title and optional year."""

    name: str
    year: int | None = None


__all__ = [
    "ArtworkFilters",
    "EpisodeInfo",
    "EpisodeMetadata",
    "EpisodeQuery",
    "ImageType",
    "MetadataResult",
    "ParsedName",
    "PersonInfo",
    "PersonType",
    "RemoteImage",
    "SearchFilters",
    "SeriesInfo",
    "SeriesMetadata",
    "SeriesStatus",
]
