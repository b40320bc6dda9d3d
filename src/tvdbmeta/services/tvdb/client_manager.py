"""Cached access to TheTVDB.

``TvdbClientManager`` is the facade every higher layer goes through. Each
method builds its own explicit cache key, runs the remote call through the
result cache (which obtains the language session on a miss) and parses the
raw payload into records.

Cached records are shared between callers and must be treated as read-only.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from tvdbmeta.config.models.settings import Settings
from tvdbmeta.services.result_cache import ResultCache, build_cache_key
from tvdbmeta.services.session_cache import Clock, Session, SessionCache
from tvdbmeta.services.tvdb.tvdb_client import TvdbClient
from tvdbmeta.shared.constants import (
    ArtworkCategoryNames,
    CacheConfig,
    DisplayOrder,
    HTTPStatusCodes,
    PeopleTypes,
    SeasonTypes,
    TvdbConfig,
)
from tvdbmeta.shared.errors import ErrorCode, ErrorContext, RemoteServiceError
from tvdbmeta.shared.models.metadata import (
    ArtworkFilters,
    EpisodeInfo,
    EpisodeQuery,
    SearchFilters,
)
from tvdbmeta.shared.models.tvdb import (
    ArtworkRecord,
    ArtworkTypeRecord,
    CharacterRecord,
    EpisodeRecord,
    EpisodesPageRecord,
    LanguageRecord,
    SearchResultRecord,
    SeriesArtworksRecord,
    SeriesRecord,
    TranslationRecord,
)
from tvdbmeta.shared.protocols.services import RemoteCatalogClientProtocol
from tvdbmeta.shared.utils.dataclass_serialization import from_dict

logger = logging.getLogger(__name__)

R = TypeVar("R")


def _parse(cls: type[R], data: Any, operation: str) -> R:
    """Build a record from a payload, as RemoteServiceError on bad shape."""
    if not isinstance(data, dict):
        raise RemoteServiceError(
            HTTPStatusCodes.OK,
            f"Unexpected payload for {operation}: {type(data).__name__}",
            ErrorContext(operation=operation),
            code=ErrorCode.TVDB_API_INVALID_RESPONSE,
        )
    try:
        return from_dict(cls, data)
    except (KeyError, TypeError, ValueError) as e:
        raise RemoteServiceError(
            HTTPStatusCodes.OK,
            f"Malformed {cls.__name__} payload for {operation}: {e}",
            ErrorContext(operation=operation),
            original_error=e,
            code=ErrorCode.TVDB_API_INVALID_RESPONSE,
        ) from e


def _parse_list(cls: type[R], data: Any, operation: str) -> list[R]:
    return [_parse(cls, item, operation) for item in (data or [])]


class TvdbClientManager:
    """Cached TheTVDB facade.

    Args:
        client: Remote catalog client
        cache: Result cache wrapping the session cache
    """

    def __init__(self, client: RemoteCatalogClientProtocol, cache: ResultCache) -> None:
        self._client = client
        self._cache = cache

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        client: RemoteCatalogClientProtocol | None = None,
        *,
        clock: Clock = time.monotonic,
    ) -> TvdbClientManager:
        """Wire client, session cache and result cache from settings."""
        client = client or TvdbClient.from_settings(settings.api.tvdb)
        sessions = SessionCache.from_settings(client, settings.api.tvdb, clock=clock)
        cache = ResultCache.from_settings(sessions, settings.cache, clock=clock)
        return cls(client, cache)

    @property
    def cache(self) -> ResultCache:
        return self._cache

    @property
    def sessions(self) -> SessionCache:
        return self._cache.sessions

    async def close(self) -> None:
        """Close the client if it holds network resources."""
        close = getattr(self._client, "close", None)
        if close is not None:
            await close()

    def _cached(
        self,
        key: str,
        language: str | None,
        compute: Callable[[Session], Awaitable[R]],
    ) -> Awaitable[R]:
        return self._cache.get_or_compute(key, language, compute)

    async def get_series_by_name(self, name: str, language: str) -> list[SearchResultRecord]:
        """Search series by name."""
        key = build_cache_key(CacheConfig.TYPE_SERIES_SEARCH, name, language)
        filters = SearchFilters(query=name, language=language)

        async def compute(session: Session) -> list[SearchResultRecord]:
            data = await self._client.search(session.token, filters)
            return _parse_list(SearchResultRecord, data, "search")

        return await self._cached(key, language, compute)

    async def get_series_by_id(self, series_id: int, language: str) -> SeriesRecord:
        """Get the extended series record."""
        key = build_cache_key(CacheConfig.TYPE_SERIES, series_id, language)

        async def compute(session: Session) -> SeriesRecord:
            data = await self._client.get_series_detail(session.token, series_id, language)
            return _parse(SeriesRecord, data, "get_series_detail")

        return await self._cached(key, language, compute)

    async def get_episode(self, episode_id: int, language: str) -> EpisodeRecord:
        """Get the extended episode record."""
        key = build_cache_key(CacheConfig.TYPE_EPISODE, episode_id, language)

        async def compute(session: Session) -> EpisodeRecord:
            data = await self._client.get_episode_detail(session.token, episode_id, language)
            return _parse(EpisodeRecord, data, "get_episode_detail")

        return await self._cached(key, language, compute)

    async def _search_remote_id(
        self,
        key_type: str,
        remote_id: str,
        language: str,
    ) -> list[SearchResultRecord]:
        key = build_cache_key(key_type, remote_id, language)
        filters = SearchFilters(language=language, remote_id=remote_id)

        async def compute(session: Session) -> list[SearchResultRecord]:
            data = await self._client.search(session.token, filters)
            return _parse_list(SearchResultRecord, data, "search")

        return await self._cached(key, language, compute)

    async def get_series_by_imdb_id(
        self,
        imdb_id: str,
        language: str,
    ) -> list[SearchResultRecord]:
        return await self._search_remote_id(CacheConfig.TYPE_SERIES_IMDB, imdb_id, language)

    async def get_series_by_zap2it_id(
        self,
        zap2it_id: str,
        language: str,
    ) -> list[SearchResultRecord]:
        return await self._search_remote_id(
            CacheConfig.TYPE_SERIES_ZAP2IT, zap2it_id, language
        )

    async def get_actors(self, series_id: int, language: str) -> list[CharacterRecord]:
        """Actors credited on a series, from the cached series record."""
        series = await self.get_series_by_id(series_id, language)
        return [c for c in series.characters if c.people_type == PeopleTypes.ACTOR]

    async def get_images(
        self,
        series_id: int,
        filters: ArtworkFilters,
        language: str,
    ) -> list[ArtworkRecord]:
        """Artworks of one series filtered by category and language."""
        key = build_cache_key(CacheConfig.TYPE_SERIES_IMAGES, series_id, filters, language)

        async def compute(session: Session) -> list[ArtworkRecord]:
            data = await self._client.get_artwork(session.token, series_id, filters, language)
            return _parse(SeriesArtworksRecord, data, "get_artwork").artworks

        return await self._cached(key, language, compute)

    async def get_languages(self) -> list[LanguageRecord]:
        """All catalog languages. Language agnostic, cached once."""
        key = build_cache_key(CacheConfig.TYPE_LANGUAGES)

        async def compute(session: Session) -> list[LanguageRecord]:
            data = await self._client.get_languages(session.token)
            return _parse_list(LanguageRecord, data, "get_languages")

        return await self._cached(key, None, compute)

    async def get_episodes_page(
        self,
        series_id: int,
        query: EpisodeQuery | None,
        language: str,
        season_type: str = SeasonTypes.DEFAULT,
    ) -> EpisodesPageRecord:
        """One page of a series' episodes. A missing query means page 0."""
        query = query or EpisodeQuery()
        key = build_cache_key(
            CacheConfig.TYPE_EPISODES_PAGE, language, series_id, query, season_type
        )

        async def compute(session: Session) -> EpisodesPageRecord:
            data = await self._client.get_series_episodes(
                session.token, series_id, season_type, query, language
            )
            return _parse(EpisodesPageRecord, data, "get_series_episodes")

        return await self._cached(key, language, compute)

    async def find_episode_tvdb_id(
        self,
        series_id: int,
        season_type: str,
        query: EpisodeQuery,
        language: str,
    ) -> int | None:
        """Id of the first episode matching ``query``, None if there is none."""
        page = await self.get_episodes_page(series_id, query, language, season_type)
        if not page.episodes:
            return None
        return page.episodes[0].id

    async def get_episode_tvdb_id(self, info: EpisodeInfo, language: str) -> int | None:
        """Look up an episode id from a host episode query.

        SxE is preferred over the premiere date as it is more robust. The
        season type follows the series display order.

        Returns:
            The episode id, or None when the series id is invalid, the query
            has neither SxE nor a date, or nothing matches
        """
        raw_series_id = info.series_tvdb_id
        if not raw_series_id or not raw_series_id.isdigit():
            return None

        season_type = SeasonTypes.DEFAULT
        if info.episode_number is not None and info.season_number is not None:
            query = EpisodeQuery(season=info.season_number, episode_number=info.episode_number)
            season_type = DisplayOrder.SEASON_TYPES.get(
                info.series_display_order.lower(), SeasonTypes.DEFAULT
            )
        elif info.premiere_date is not None:
            query = EpisodeQuery(air_date=info.premiere_date.strftime(TvdbConfig.AIR_DATE_FORMAT))
        else:
            return None

        return await self.find_episode_tvdb_id(int(raw_series_id), season_type, query, language)

    async def get_artwork_types(self, language: str | None = None) -> list[ArtworkTypeRecord]:
        """Artwork category table (id, name, record type)."""
        key = build_cache_key(CacheConfig.TYPE_ARTWORK_TYPES)

        async def compute(session: Session) -> list[ArtworkTypeRecord]:
            data = await self._client.get_artwork_categories(session.token)
            return _parse_list(ArtworkTypeRecord, data, "get_artwork_categories")

        return await self._cached(key, language, compute)

    async def _get_artwork_summary(self, series_id: int, language: str) -> list[ArtworkRecord]:
        # Images summary is language agnostic
        key = build_cache_key(CacheConfig.TYPE_SERIES_ARTWORKS, series_id)
        filters = ArtworkFilters()

        async def compute(session: Session) -> list[ArtworkRecord]:
            data = await self._client.get_artwork(session.token, series_id, filters, language)
            return _parse(SeriesArtworksRecord, data, "get_artwork").artworks

        return await self._cached(key, language, compute)

    async def _get_present_key_types(
        self,
        series_id: int,
        language: str,
        record_type: str,
    ) -> list[ArtworkTypeRecord]:
        artwork_types = await self.get_artwork_types(language)
        summary = await self._get_artwork_summary(series_id, language)
        present_ids = {artwork.category_id for artwork in summary}
        return [
            artwork_type
            for artwork_type in artwork_types
            if artwork_type.record_type == record_type and artwork_type.id in present_ids
        ]

    async def get_artwork_key_types_for_series(
        self,
        series_id: int,
        language: str,
    ) -> list[ArtworkTypeRecord]:
        """Series-level artwork categories that have at least one image."""
        return await self._get_present_key_types(
            series_id, language, ArtworkCategoryNames.RECORD_TYPE_SERIES
        )

    async def get_artwork_key_types_for_season(
        self,
        series_id: int,
        language: str,
    ) -> list[ArtworkTypeRecord]:
        """Season-level artwork categories that have at least one image."""
        return await self._get_present_key_types(
            series_id, language, ArtworkCategoryNames.RECORD_TYPE_SEASON
        )

    async def get_episode_name_translation(
        self,
        episode_id: int,
        language: str,
    ) -> TranslationRecord:
        """Episode translation; the endpoint expects ``eng`` for English."""
        translation_language = TvdbConfig.TRANSLATION_LANGUAGE_ALIASES.get(language, language)
        key = build_cache_key(
            CacheConfig.TYPE_EPISODE_TRANSLATION, translation_language, episode_id
        )

        async def compute(session: Session) -> TranslationRecord:
            data = await self._client.get_episode_translation(
                session.token, episode_id, translation_language
            )
            return _parse(TranslationRecord, data, "get_episode_translation")

        return await self._cached(key, language, compute)


__all__ = ["TvdbClientManager"]
