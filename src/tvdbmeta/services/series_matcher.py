"""Series matching and ranking.

Turns a free-text title into an ordered list of search candidates. The
remote search runs on the normalized name; candidates are then ordered by a
lexicographic key (lower is better):

    a. 0 if a title equals the raw query name (case-insensitive)
    b. 0 if a title contains the parsed library name
    c. 0 if the production year equals the parsed year
    d. 0 if a title contains the normalized name
    e. position in the remote result list

The year tolerance filter is a separate post-filter stage
(``filter_by_year``) applied by the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from tvdbmeta.services.name_normalizer import normalize, parse_name
from tvdbmeta.services.tvdb.client_manager import TvdbClientManager
from tvdbmeta.services.tvdb_utils import find_remote_id, parse_date, site_url
from tvdbmeta.shared.constants import MatchingConfig, ProviderNames, RemoteIdSources
from tvdbmeta.shared.errors import RemoteServiceError, TvdbMetaError
from tvdbmeta.shared.logging import log_operation_error
from tvdbmeta.shared.models.matching import RankedResult, SearchCandidate
from tvdbmeta.shared.models.metadata import ParsedName
from tvdbmeta.shared.models.tvdb import SearchResultRecord

logger = logging.getLogger(__name__)

NameParser = Callable[[str], ParsedName]
RankKey = tuple[int, int, int, int, int]


@dataclass(frozen=True)
class MatchQuery:
    """The three forms of a query name the ranking compares against."""

    raw_name: str
    parsed: ParsedName
    comparable_name: str

    @classmethod
    def build(cls, name: str, name_parser: NameParser = parse_name) -> MatchQuery:
        parsed = name_parser(name)
        return cls(raw_name=name, parsed=parsed, comparable_name=normalize(parsed.name))


def rank_key(candidate: SearchCandidate, query: MatchQuery) -> RankKey:
    """Compute the ascending sort key of one candidate.

    Args:
        candidate: Candidate to score
        query: Query forms

    Returns:
        (a, b, c, d, e) as described in the module docstring
    """
    titles = [title.casefold() for title in candidate.titles]
    raw_name = query.raw_name.casefold()
    parsed_name = query.parsed.name.casefold()
    comparable_name = query.comparable_name.casefold()

    exact = 0 if any(title == raw_name for title in titles) else 1
    contains_parsed = 0 if any(parsed_name in title for title in titles) else 1
    same_year = (
        0
        if candidate.production_year is not None
        and candidate.production_year == query.parsed.year
        else 1
    )
    contains_comparable = 0 if any(comparable_name in title for title in titles) else 1

    return (exact, contains_parsed, same_year, contains_comparable, candidate.position)


def rank_candidates(
    candidates: Iterable[SearchCandidate],
    query: MatchQuery,
) -> list[RankedResult[SearchCandidate]]:
    """Pair each candidate with its rank key and sort ascending."""
    ranked = [RankedResult(item=c, sort_key=rank_key(c, query)) for c in candidates]
    ranked.sort(key=lambda result: result.sort_key)
    return ranked


def filter_by_year(
    candidates: Iterable[SearchCandidate],
    year: int | None,
    tolerance: int = MatchingConfig.YEAR_TOLERANCE,
) -> list[SearchCandidate]:
    """Drop candidates whose known year is more than ``tolerance`` away.

    Candidates without a production year, and every candidate when ``year``
    is None, are kept.
    """
    if year is None:
        return list(candidates)
    return [
        c
        for c in candidates
        if c.production_year is None or abs(year - c.production_year) <= tolerance
    ]


class SeriesMatcher:
    """Finds and ranks series candidates for a free-text title.

    Args:
        client_manager: Cached catalog facade
        name_parser: Library name parser, defaults to ``parse_name``
        max_results: Number of ranked candidates to keep
    """

    def __init__(
        self,
        client_manager: TvdbClientManager,
        *,
        name_parser: NameParser = parse_name,
        max_results: int = MatchingConfig.MAX_SEARCH_RESULTS,
    ) -> None:
        self._client_manager = client_manager
        self._name_parser = name_parser
        self._max_results = max_results

    async def find_candidates(
        self,
        name: str,
        year: int | None,
        language: str,
    ) -> list[SearchCandidate]:
        """Search the catalog and return ranked candidates.

        Args:
            name: Title as given by the host
            year: Query year; only logged here, see ``filter_by_year``
            language: Metadata language

        Returns:
            At most ``max_results`` candidates, best first. Empty when the
            search call fails with a RemoteServiceError.

        Raises:
            AuthenticationError: If no session can be obtained
        """
        logger.debug("Finding series candidates for %s (%s)", name, year)
        query = MatchQuery.build(name, self._name_parser)

        try:
            results = await self._client_manager.get_series_by_name(
                query.comparable_name, language
            )
        except RemoteServiceError as e:
            log_operation_error(
                logger=logger,
                error=e,
                operation="find_candidates",
                additional_context={"query": query.comparable_name},
            )
            return []

        candidates = [
            await self._build_candidate(result, position, query, language)
            for position, result in enumerate(results)
        ]

        ranked = rank_candidates(candidates, query)
        return [result.item for result in ranked[: self._max_results]]

    async def _build_candidate(
        self,
        result: SearchResultRecord,
        position: int,
        query: MatchQuery,
        language: str,
    ) -> SearchCandidate:
        titles = (result.name, *result.aliases)
        first_aired = parse_date(result.first_air_time)
        series_id = result.series_id

        provider_ids: dict[str, str] = {}
        if series_id is not None:
            provider_ids.update(await self._lookup_remote_ids(series_id, result.name, language))
            provider_ids[ProviderNames.TVDB] = str(series_id)

        return SearchCandidate(
            titles=titles,
            comparable_name=query.comparable_name,
            production_year=first_aired.year if first_aired else None,
            provider_ids=provider_ids,
            tvdb_id=series_id,
            image_url=site_url(result.image_url),
            position=position,
            overview=result.overview,
        )

    async def _lookup_remote_ids(
        self,
        series_id: int,
        series_name: str,
        language: str,
    ) -> dict[str, str]:
        """Best-effort IMDb and Zap2It ids from the series detail record."""
        try:
            series = await self._client_manager.get_series_by_id(series_id, language)
        except TvdbMetaError as e:
            log_operation_error(
                logger=logger,
                error=e,
                operation="lookup_remote_ids",
                additional_context={"series_id": series_id, "series_name": series_name},
            )
            return {}

        provider_ids: dict[str, str] = {}
        imdb_id = find_remote_id(series.remote_ids, RemoteIdSources.IMDB)
        if imdb_id:
            provider_ids[ProviderNames.IMDB] = imdb_id
        zap2it_id = find_remote_id(series.remote_ids, RemoteIdSources.ZAP2IT)
        if zap2it_id:
            provider_ids[ProviderNames.ZAP2IT] = zap2it_id
        return provider_ids


__all__ = [
    "MatchQuery",
    "SeriesMatcher",
    "filter_by_year",
    "rank_candidates",
    "rank_key",
]
