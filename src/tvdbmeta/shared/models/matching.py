"""Ranking models for series matching and image selection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class SearchCandidate:
    """One unconfirmed search match, immutable once built.

    Attributes:
        titles: Primary title followed by alias titles, in remote order
        comparable_name: Normalized query name the candidate was searched with
        production_year: Year of the first air date, if parseable
        provider_ids: Provider name to id (always includes the TVDB id)
        tvdb_id: Numeric series id
        image_url: Poster URL from the search result
        position: Index in the remote result list
    """

    titles: tuple[str, ...]
    comparable_name: str
    production_year: int | None = None
    provider_ids: dict[str, str] = field(default_factory=dict)
    tvdb_id: int | None = None
    image_url: str | None = None
    position: int = 0
    overview: str | None = None

    @property
    def name(self) -> str:
        return self.titles[0] if self.titles else ""


@dataclass
class ArtworkItem:
    """Artwork record reduced to what ranking and mapping need."""

    url: str
    thumbnail_url: str | None = None
    language: str | None = None
    width: int = 0
    height: int = 0
    score: float | None = None
    category_id: int = 0
    season_affinity: str | None = None
    community_rating: float | None = None


@dataclass(frozen=True)
class RankedResult(Generic[T]):
    """Item paired with the sort key it was ordered by."""

    item: T
    sort_key: tuple[Any, ...]


__all__ = ["ArtworkItem", "RankedResult", "SearchCandidate"]
