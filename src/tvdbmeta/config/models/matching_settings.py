"""Series matching configuration model."""

from __future__ import annotations

from pydantic import BaseModel, Field

from tvdbmeta.shared.constants import MatchingConfig


class MatchingSettings(BaseModel):
    """Series matching configuration."""

    max_search_results: int = Field(
        default=MatchingConfig.MAX_SEARCH_RESULTS,
        gt=0,
        description="Maximum number of ranked candidates returned by a search",
    )
    year_tolerance: int = Field(
        default=MatchingConfig.YEAR_TOLERANCE,
        ge=0,
        description="Allowed difference between query year and candidate year",
    )


__all__ = ["MatchingSettings"]
