"""TheTVDB API Response Models.

This module defines dataclasses for TheTVDB v4 API responses to ensure
type safety at the external API boundary. Records are built from the
``data`` payload of each response with ``from_dict()``; camelCase wire keys
are mapped through field aliases and unknown keys are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tvdbmeta.shared.types.base import BaseDataclass


@dataclass
class RemoteIdRecord(BaseDataclass):
    """Cross-provider id attached to a series or episode."""

    id: str = ""
    type: int | None = None
    source_name: str = field(default="", metadata={"alias": "sourceName"})


@dataclass
class SearchResultRecord(BaseDataclass):
    """Single item returned by the search endpoint."""

    id: str = ""
    name: str = ""
    tvdb_id: str | None = None
    aliases: list[str] = field(default_factory=list)
    first_air_time: str | None = None
    image_url: str | None = None
    overview: str | None = None
    year: str | None = None
    type: str | None = None
    remote_ids: list[RemoteIdRecord] = field(default_factory=list)

    @property
    def series_id(self) -> int | None:
        """Numeric series id, from ``tvdb_id`` or the ``series-<n>`` id."""
        for raw in (self.tvdb_id, self.id.rsplit("-", 1)[-1] if self.id else None):
            if raw and raw.isdigit():
                return int(raw)
        return None


@dataclass
class CharacterRecord(BaseDataclass):
    """Credit entry: a person in a role on a series or episode."""

    id: int = 0
    name: str | None = None
    people_id: int | None = field(default=None, metadata={"alias": "peopleId"})
    person_name: str | None = field(default=None, metadata={"alias": "personName"})
    people_type: str = field(default="", metadata={"alias": "peopleType"})
    sort: int = 0
    image: str | None = None
    person_img_url: str | None = field(default=None, metadata={"alias": "personImgURL"})


@dataclass
class GenreRecord(BaseDataclass):
    id: int = 0
    name: str = ""
    slug: str | None = None


@dataclass
class NetworkRecord(BaseDataclass):
    id: int = 0
    name: str = ""
    country: str | None = None


@dataclass
class StatusRecord(BaseDataclass):
    id: int | None = None
    name: str = ""
    record_type: str | None = field(default=None, metadata={"alias": "recordType"})


@dataclass
class AirsDaysRecord(BaseDataclass):
    """Weekday flags for a series' regular air days."""

    monday: bool = False
    tuesday: bool = False
    wednesday: bool = False
    thursday: bool = False
    friday: bool = False
    saturday: bool = False
    sunday: bool = False


@dataclass
class SeasonTypeRecord(BaseDataclass):
    id: int = 0
    name: str = ""
    type: str = ""


@dataclass
class SeasonRecord(BaseDataclass):
    """Season summary listed on a series record."""

    id: int = 0
    number: int = 0
    series_id: int | None = field(default=None, metadata={"alias": "seriesId"})
    type: SeasonTypeRecord | None = None


@dataclass
class EpisodeSummaryRecord(BaseDataclass):
    """Episode as listed on a series record or an episodes page."""

    id: int = 0
    series_id: int | None = field(default=None, metadata={"alias": "seriesId"})
    name: str | None = None
    aired: str | None = None
    season_number: int = field(default=0, metadata={"alias": "seasonNumber"})
    number: int = 0
    absolute_number: int | None = field(
        default=None, metadata={"alias": "absoluteNumber"}
    )
    overview: str | None = None
    runtime: int | None = None


@dataclass
class ArtworkRecord(BaseDataclass):
    """Single artwork item. ``category_id`` is the artwork type id."""

    id: int = 0
    image: str = ""
    thumbnail: str = ""
    language: str | None = None
    category_id: int = field(default=0, metadata={"alias": "type"})
    score: float | None = None
    width: int = 0
    height: int = 0
    season_id: int | None = field(default=None, metadata={"alias": "seasonId"})
    series_id: int | None = field(default=None, metadata={"alias": "seriesId"})


@dataclass
class SeriesRecord(BaseDataclass):
    """Extended series record."""

    id: int
    name: str = ""
    overview: str | None = None
    first_aired: str | None = field(default=None, metadata={"alias": "firstAired"})
    last_aired: str | None = field(default=None, metadata={"alias": "lastAired"})
    airs_days: AirsDaysRecord | None = field(
        default=None, metadata={"alias": "airsDays"}
    )
    airs_time: str | None = field(default=None, metadata={"alias": "airsTime"})
    status: StatusRecord | None = None
    average_runtime: int | None = field(
        default=None, metadata={"alias": "averageRuntime"}
    )
    genres: list[GenreRecord] = field(default_factory=list)
    latest_network: NetworkRecord | None = field(
        default=None, metadata={"alias": "latestNetwork"}
    )
    remote_ids: list[RemoteIdRecord] = field(
        default_factory=list, metadata={"alias": "remoteIds"}
    )
    characters: list[CharacterRecord] = field(default_factory=list)
    artworks: list[ArtworkRecord] = field(default_factory=list)
    episodes: list[EpisodeSummaryRecord] = field(default_factory=list)
    seasons: list[SeasonRecord] = field(default_factory=list)
    image: str | None = None


@dataclass
class SeriesArtworksRecord(BaseDataclass):
    """Payload of the series artworks endpoint."""

    id: int = 0
    artworks: list[ArtworkRecord] = field(default_factory=list)


@dataclass
class ContentRatingRecord(BaseDataclass):
    id: int = 0
    name: str = ""
    country: str | None = None
    content_type: str | None = field(default=None, metadata={"alias": "contentType"})


@dataclass
class EpisodeRecord(BaseDataclass):
    """Extended episode record."""

    id: int
    series_id: int | None = field(default=None, metadata={"alias": "seriesId"})
    name: str | None = None
    overview: str | None = None
    aired: str | None = None
    season_number: int = field(default=0, metadata={"alias": "seasonNumber"})
    number: int = 0
    runtime: int | None = None
    airs_after_season: int | None = field(
        default=None, metadata={"alias": "airsAfterSeason"}
    )
    airs_before_season: int | None = field(
        default=None, metadata={"alias": "airsBeforeSeason"}
    )
    airs_before_episode: int | None = field(
        default=None, metadata={"alias": "airsBeforeEpisode"}
    )
    content_ratings: list[ContentRatingRecord] = field(
        default_factory=list, metadata={"alias": "contentRatings"}
    )
    remote_ids: list[RemoteIdRecord] = field(
        default_factory=list, metadata={"alias": "remoteIds"}
    )
    characters: list[CharacterRecord] = field(default_factory=list)


@dataclass
class EpisodesPageSeriesRecord(BaseDataclass):
    id: int = 0
    name: str | None = None


@dataclass
class EpisodesPageRecord(BaseDataclass):
    """One page of the series episodes endpoint."""

    series: EpisodesPageSeriesRecord | None = None
    episodes: list[EpisodeSummaryRecord] = field(default_factory=list)


@dataclass
class ArtworkTypeRecord(BaseDataclass):
    """Artwork category: id, display name and the record type it applies to."""

    id: int
    name: str = ""
    record_type: str | None = field(default=None, metadata={"alias": "recordType"})
    slug: str | None = None
    image_format: str | None = field(default=None, metadata={"alias": "imageFormat"})


@dataclass
class LanguageRecord(BaseDataclass):
    id: str = ""
    name: str | None = None
    native_name: str | None = field(default=None, metadata={"alias": "nativeName"})
    short_code: str | None = field(default=None, metadata={"alias": "shortCode"})


@dataclass
class TranslationRecord(BaseDataclass):
    name: str | None = None
    overview: str | None = None
    language: str | None = None
    is_primary: bool = field(default=False, metadata={"alias": "isPrimary"})
    is_alias: bool = field(default=False, metadata={"alias": "isAlias"})


__all__ = [
    "AirsDaysRecord",
    "ArtworkRecord",
    "ArtworkTypeRecord",
    "CharacterRecord",
    "ContentRatingRecord",
    "EpisodeRecord",
    "EpisodeSummaryRecord",
    "EpisodesPageRecord",
    "EpisodesPageSeriesRecord",
    "GenreRecord",
    "LanguageRecord",
    "NetworkRecord",
    "RemoteIdRecord",
    "SearchResultRecord",
    "SeasonRecord",
    "SeasonTypeRecord",
    "SeriesArtworksRecord",
    "SeriesRecord",
    "StatusRecord",
    "TranslationRecord",
]
