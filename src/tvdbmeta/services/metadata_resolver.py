"""Metadata resolution at the host boundary.

``MetadataResolver`` turns host queries (``SeriesInfo``, ``EpisodeInfo``,
image requests) into resolved records. It composes the cached catalog
facade, the series matcher, the image ranker and the credits parser.

Remote failures become empty results here: a ``RemoteServiceError`` is
logged and the caller gets an empty ``MetadataResult`` (or an empty list).
Authentication and configuration errors still propagate.
"""

from __future__ import annotations

import dataclasses
import logging
import time
from collections.abc import Sequence
from datetime import date

from tvdbmeta.config.models.settings import Settings
from tvdbmeta.services.credits import actors_to_people, episode_people
from tvdbmeta.services.image_ranker import rank, to_artwork_item, to_remote_images
from tvdbmeta.services.name_normalizer import normalize
from tvdbmeta.services.series_matcher import SeriesMatcher, filter_by_year
from tvdbmeta.services.session_cache import Clock
from tvdbmeta.services.tvdb.client_manager import TvdbClientManager
from tvdbmeta.services.tvdb_utils import find_remote_id, parse_date
from tvdbmeta.shared.constants import (
    AirDays,
    ArtworkCategoryNames,
    DisplayOrder,
    MatchingConfig,
    ProviderNames,
    RemoteIdSources,
    SeasonTypes,
)
from tvdbmeta.shared.errors import RemoteServiceError
from tvdbmeta.shared.logging import log_operation_error, log_operation_success
from tvdbmeta.shared.models.matching import SearchCandidate
from tvdbmeta.shared.models.metadata import (
    ArtworkFilters,
    EpisodeInfo,
    EpisodeMetadata,
    EpisodeQuery,
    MetadataResult,
    RemoteImage,
    SeriesInfo,
    SeriesMetadata,
    SeriesStatus,
)
from tvdbmeta.shared.models.tvdb import ArtworkTypeRecord, EpisodeRecord, SeriesRecord
from tvdbmeta.shared.protocols.services import RemoteCatalogClientProtocol

logger = logging.getLogger(__name__)

COMBINED_SEPARATOR = " / "

SERIES_ID_PROVIDERS = (ProviderNames.TVDB, ProviderNames.IMDB, ProviderNames.ZAP2IT)


def has_series_id(provider_ids: dict[str, str]) -> bool:
    """True if a TVDB, IMDb or Zap2It id is present and non-empty."""
    return any(provider_ids.get(provider) for provider in SERIES_ID_PROVIDERS)


def _can_locate_episode(info: EpisodeInfo) -> bool:
    """A series id plus either SxE or a premiere date."""
    return has_series_id(info.series_provider_ids) and (
        info.episode_number is not None or info.premiere_date is not None
    )


def _parse_id(value: str | None) -> int | None:
    if value and value.strip().isdigit():
        return int(value.strip())
    return None


def _air_days(series: SeriesRecord) -> list[str]:
    if series.airs_days is None:
        return []
    return [day.capitalize() for day in AirDays.ORDER if getattr(series.airs_days, day)]


def _season_affinity(series: SeriesRecord, season_number: int) -> str:
    """Season id of ``season_number`` in aired order, or the number itself."""
    for season in series.seasons:
        season_type = season.type.type if season.type else SeasonTypes.DEFAULT
        if season.number == season_number and season_type in (
            SeasonTypes.DEFAULT,
            SeasonTypes.OFFICIAL,
        ):
            return str(season.id)
    return str(season_number)


def _apply_display_order(
    item: EpisodeMetadata,
    episode: EpisodeRecord,
    display_order: str,
) -> None:
    order = display_order.lower()
    if order == DisplayOrder.DVD:
        item.episode_number = episode.number
        item.season_number = episode.season_number
    elif order == DisplayOrder.ABSOLUTE:
        if episode.number != 0:
            item.episode_number = episode.number
    elif episode.number != 0:
        item.episode_number = episode.number
    elif episode.season_number != 0:
        item.season_number = episode.season_number


def map_series(series: SeriesRecord) -> SeriesMetadata:
    """Map an extended series record to host metadata (without end date)."""
    premiere_date = parse_date(series.first_aired)

    provider_ids = {ProviderNames.TVDB: str(series.id)}
    imdb_id = find_remote_id(series.remote_ids, RemoteIdSources.IMDB)
    if imdb_id:
        provider_ids[ProviderNames.IMDB] = imdb_id
    zap2it_id = find_remote_id(series.remote_ids, RemoteIdSources.ZAP2IT)
    if zap2it_id:
        provider_ids[ProviderNames.ZAP2IT] = zap2it_id

    studios = []
    if series.latest_network is not None and series.latest_network.name:
        studios.append(series.latest_network.name)

    return SeriesMetadata(
        tvdb_id=series.id,
        name=series.name,
        overview=(series.overview or "").strip(),
        air_days=_air_days(series),
        air_time=series.airs_time,
        status=SeriesStatus.parse(series.status.name if series.status else None),
        premiere_date=premiere_date,
        production_year=premiere_date.year if premiere_date else None,
        runtime_minutes=series.average_runtime,
        genres=[genre.name for genre in series.genres if genre.name],
        studios=studios,
        provider_ids=provider_ids,
    )


def map_episode(
    info: EpisodeInfo,
    episode: EpisodeRecord,
    translated_name: str | None,
    language: str,
) -> MetadataResult[EpisodeMetadata]:
    """Map an extended episode record to a host result with credits."""
    aired = parse_date(episode.aired)
    content_type = episode.content_ratings[0].content_type if episode.content_ratings else None

    item = EpisodeMetadata(
        tvdb_id=episode.id,
        name=translated_name or episode.name or "",
        overview=(episode.overview or "").strip(),
        season_number=info.season_number,
        episode_number=info.episode_number,
        episode_number_end=info.episode_number_end,
        airs_before_episode=episode.airs_before_episode,
        airs_after_season=episode.airs_after_season,
        airs_before_season=episode.airs_before_season,
        premiere_date=aired,
        production_year=aired.year if aired else None,
        official_rating=content_type or "",
        provider_ids={ProviderNames.TVDB: str(episode.id)},
    )
    imdb_id = find_remote_id(episode.remote_ids, RemoteIdSources.IMDB)
    if imdb_id:
        item.provider_ids[ProviderNames.IMDB] = imdb_id

    _apply_display_order(item, episode, info.series_display_order)

    result: MetadataResult[EpisodeMetadata] = MetadataResult(
        item=item,
        has_metadata=True,
        result_language=language,
    )
    for person in episode_people(episode.characters):
        result.add_person(person)
    return result


def combine_episode_results(
    results: Sequence[MetadataResult[EpisodeMetadata]],
) -> MetadataResult[EpisodeMetadata]:
    """Merge the parts of a multi-episode file into the first part.

    Names and overviews of every matched part are joined with ``" / "``.
    If the first part is unmatched the whole file is.
    """
    first = results[0]
    if not first.has_metadata or first.item is None:
        return first

    parts = [result.item for result in results if result.has_metadata and result.item]
    first.item.name = COMBINED_SEPARATOR.join(part.name for part in parts)
    first.item.overview = COMBINED_SEPARATOR.join(part.overview for part in parts)
    return first


class MetadataResolver:
    """Resolves series, episodes and images for a media library host.

    Args:
        client_manager: Cached catalog facade
        matcher: Series matcher used for name searches
        year_tolerance: Year post-filter tolerance for name searches

    Example:
        >>> resolver = MetadataResolver.from_settings(get_config())
        >>> result = await resolver.resolve_series(SeriesInfo(name="The Office", year=2005))
        >>> result.item.provider_ids["Tvdb"]
        '73244'
    """

    def __init__(
        self,
        client_manager: TvdbClientManager,
        matcher: SeriesMatcher | None = None,
        *,
        year_tolerance: int = MatchingConfig.YEAR_TOLERANCE,
    ) -> None:
        self._client_manager = client_manager
        self._matcher = matcher or SeriesMatcher(client_manager)
        self._year_tolerance = year_tolerance

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        client: RemoteCatalogClientProtocol | None = None,
        *,
        clock: Clock = time.monotonic,
    ) -> MetadataResolver:
        client_manager = TvdbClientManager.from_settings(settings, client, clock=clock)
        matcher = SeriesMatcher(
            client_manager,
            max_results=settings.matching.max_search_results,
        )
        return cls(
            client_manager,
            matcher,
            year_tolerance=settings.matching.year_tolerance,
        )

    @property
    def client_manager(self) -> TvdbClientManager:
        return self._client_manager

    async def close(self) -> None:
        await self._client_manager.close()

    def _language(self, language: str | None) -> str:
        return self._client_manager.sessions.normalize(language)

    # Series

    async def search_series(
        self,
        name: str,
        year: int | None,
        language: str | None,
        provider_ids: dict[str, str] | None = None,
    ) -> list[SearchCandidate]:
        """Search candidates for a host series query.

        A known TVDB, IMDb or Zap2It id short-circuits the name search and
        yields at most one candidate.

        Args:
            name: Title as given by the host
            year: Query year for the tolerance post-filter
            language: Metadata language
            provider_ids: Known provider ids

        Returns:
            Ranked candidates, best first
        """
        language = self._language(language)
        provider_ids = provider_ids or {}

        if has_series_id(provider_ids):
            tvdb_id = await self._resolve_tvdb_id(provider_ids, language, name)
            if tvdb_id is None:
                return []
            candidate = await self._candidate_from_id(tvdb_id, language, name)
            return [candidate] if candidate else []

        candidates = await self._matcher.find_candidates(name, year, language)
        return filter_by_year(candidates, year, self._year_tolerance)

    async def _candidate_from_id(
        self,
        tvdb_id: int,
        language: str,
        name: str,
    ) -> SearchCandidate | None:
        try:
            series = await self._client_manager.get_series_by_id(tvdb_id, language)
            artwork_types = await self._client_manager.get_artwork_types(language)
        except RemoteServiceError as e:
            log_operation_error(
                logger=logger,
                error=e,
                operation="search_series",
                additional_context={"tvdb_id": tvdb_id, "series_name": name},
            )
            return None

        metadata = map_series(series)
        provider_ids = {ProviderNames.TVDB: str(series.id)}
        if ProviderNames.IMDB in metadata.provider_ids:
            provider_ids[ProviderNames.IMDB] = metadata.provider_ids[ProviderNames.IMDB]

        return SearchCandidate(
            titles=(series.name,),
            comparable_name=normalize(series.name),
            production_year=metadata.production_year,
            provider_ids=provider_ids,
            tvdb_id=series.id,
            image_url=self._poster_url(series, artwork_types),
            position=0,
            overview=metadata.overview,
        )

    @staticmethod
    def _poster_url(series: SeriesRecord, artwork_types: Sequence[ArtworkTypeRecord]) -> str | None:
        poster_type = next(
            (
                t
                for t in artwork_types
                if (t.name or "").lower() == ArtworkCategoryNames.POSTER
                and t.record_type == ArtworkCategoryNames.RECORD_TYPE_SERIES
            ),
            None,
        )
        if poster_type is None:
            return None
        poster = next((a for a in series.artworks if a.category_id == poster_type.id), None)
        return poster.image if poster else None

    async def _resolve_tvdb_id(
        self,
        provider_ids: dict[str, str],
        language: str,
        series_name: str,
    ) -> int | None:
        """TVDB id from the provider ids: TVDB first, then IMDb, then Zap2It."""
        tvdb_id = _parse_id(provider_ids.get(ProviderNames.TVDB))
        if tvdb_id is not None:
            return tvdb_id

        lookups = (
            (ProviderNames.IMDB, self._client_manager.get_series_by_imdb_id),
            (ProviderNames.ZAP2IT, self._client_manager.get_series_by_zap2it_id),
        )
        for provider, lookup in lookups:
            remote_id = provider_ids.get(provider)
            if not remote_id:
                continue
            try:
                results = await lookup(remote_id, language)
            except RemoteServiceError as e:
                log_operation_error(
                    logger=logger,
                    error=e,
                    operation="resolve_tvdb_id",
                    additional_context={
                        "provider": provider,
                        "remote_id": remote_id,
                        "series_name": series_name,
                    },
                )
                continue
            for result in results:
                if result.series_id is not None:
                    return result.series_id
        return None

    async def resolve_series(self, info: SeriesInfo) -> MetadataResult[SeriesMetadata]:
        """Resolve a host series query.

        Without any known id the series is identified by name first: the
        best candidate after the year post-filter wins.

        Returns:
            A result with the series and its actors, or an empty result when
            nothing matched or the remote failed
        """
        language = self._language(info.language)
        result: MetadataResult[SeriesMetadata] = MetadataResult(queried_by_id=True)
        provider_ids = {k: v for k, v in info.provider_ids.items() if v}

        if not has_series_id(provider_ids):
            result.queried_by_id = False
            candidates = await self.search_series(info.name, info.year, language)
            if candidates and candidates[0].tvdb_id is not None:
                provider_ids[ProviderNames.TVDB] = str(candidates[0].tvdb_id)

        if not has_series_id(provider_ids):
            logger.debug("No series identity found for %s", info.name)
            return result

        tvdb_id = await self._resolve_tvdb_id(provider_ids, language, info.name)
        if tvdb_id is None:
            return result

        metadata = await self.resolve_series_by_id(tvdb_id, language)
        if metadata is None:
            return result

        for provider in (ProviderNames.IMDB, ProviderNames.ZAP2IT):
            if provider in provider_ids:
                metadata.provider_ids.setdefault(provider, provider_ids[provider])

        result.item = metadata
        result.has_metadata = True
        result.result_language = language
        result.reset_people()

        try:
            actors = await self._client_manager.get_actors(tvdb_id, language)
        except RemoteServiceError as e:
            log_operation_error(
                logger=logger,
                error=e,
                operation="get_actors",
                additional_context={"tvdb_id": tvdb_id, "series_name": info.name},
            )
        else:
            for person in actors_to_people(actors):
                result.add_person(person)

        return result

    async def resolve_series_by_id(
        self,
        series_id: int,
        language: str | None,
    ) -> SeriesMetadata | None:
        """Fetch and map one series, None if the remote call fails.

        Ended series get their end date from the latest air date of the last
        season that has aired episodes.
        """
        language = self._language(language)
        start_time = time.time()
        try:
            series = await self._client_manager.get_series_by_id(series_id, language)
        except RemoteServiceError as e:
            log_operation_error(
                logger=logger,
                error=e,
                operation="resolve_series_by_id",
                additional_context={"tvdb_id": series_id},
            )
            return None

        metadata = map_series(series)
        if metadata.status == SeriesStatus.ENDED:
            metadata.end_date = await self._find_end_date(series, language)

        log_operation_success(
            logger=logger,
            operation="resolve_series_by_id",
            duration_ms=(time.time() - start_time) * 1000,
            result_info={"tvdb_id": series_id, "name": metadata.name},
        )
        return metadata

    async def _find_end_date(self, series: SeriesRecord, language: str) -> date | None:
        aired_seasons = [e.season_number for e in series.episodes if e.aired]
        last_season = max(aired_seasons, default=0)
        if last_season == 0:
            return None

        try:
            page = await self._client_manager.get_episodes_page(
                series.id, EpisodeQuery(season=last_season), language
            )
        except RemoteServiceError as e:
            log_operation_error(
                logger=logger,
                error=e,
                operation="find_end_date",
                additional_context={"tvdb_id": series.id, "series_name": series.name},
            )
            return None

        dates = [d for d in (parse_date(e.aired) for e in page.episodes) if d is not None]
        return max(dates, default=None)

    # Episodes

    async def resolve_episode(self, info: EpisodeInfo) -> MetadataResult[EpisodeMetadata]:
        """Resolve a host episode query.

        Needs a series id and either SxE or a premiere date. Multi-episode
        files (``episode_number_end`` set) resolve each part and combine
        them.
        """
        language = self._language(info.language)

        if not _can_locate_episode(info):
            logger.debug("No series identity found for %s", info.name)
            return MetadataResult(queried_by_id=True)

        if info.episode_number is not None and info.episode_number_end is not None:
            logger.debug("Multiple episodes found in %s", info.path)
            parts = [
                await self._get_episode(dataclasses.replace(info, episode_number=number), language)
                for number in range(info.episode_number, info.episode_number_end + 1)
            ]
            if not parts:
                return MetadataResult(queried_by_id=True)
            return combine_episode_results(parts)

        return await self._get_episode(info, language)

    async def search_episode(self, info: EpisodeInfo) -> list[EpisodeMetadata]:
        """Search results for an episode query: the resolved episode, if any.

        Only the first episode of a multi-episode file is looked up.
        """
        if not _can_locate_episode(info):
            return []

        result = await self._get_episode(info, self._language(info.language))
        if not result.has_metadata or result.item is None:
            return []
        return [result.item]

    async def _get_episode(
        self,
        info: EpisodeInfo,
        language: str,
    ) -> MetadataResult[EpisodeMetadata]:
        empty: MetadataResult[EpisodeMetadata] = MetadataResult(queried_by_id=True)
        series_tvdb_id = info.series_tvdb_id
        episode_id: int | None = None

        try:
            episode_id = await self._client_manager.get_episode_tvdb_id(info, language)
            if episode_id is None:
                logger.warning(
                    "Episode %sx%s not found for series %s:%s",
                    info.season_number,
                    info.episode_number,
                    series_tvdb_id,
                    info.name,
                )
                return empty
            episode = await self._client_manager.get_episode(episode_id, language)
        except RemoteServiceError as e:
            log_operation_error(
                logger=logger,
                error=e,
                operation="resolve_episode",
                additional_context={
                    "episode_id": episode_id,
                    "series_tvdb_id": series_tvdb_id,
                    "name": info.name,
                },
            )
            return empty

        translated_name: str | None = None
        try:
            translation = await self._client_manager.get_episode_name_translation(
                episode.id, language
            )
            translated_name = translation.name
        except RemoteServiceError as e:
            log_operation_error(
                logger=logger,
                error=e,
                operation="get_episode_name_translation",
                additional_context={"episode_id": episode.id, "language": language},
                level=logging.WARNING,
            )

        return map_episode(info, episode, translated_name, language)

    # Images

    async def get_series_images(self, series_id: int, language: str | None) -> list[RemoteImage]:
        """Ranked series-level images, grouped by artwork category."""
        language = self._language(language)
        try:
            key_types = await self._client_manager.get_artwork_key_types_for_series(
                series_id, language
            )
        except RemoteServiceError as e:
            log_operation_error(
                logger=logger,
                error=e,
                operation="get_series_images",
                additional_context={"tvdb_id": series_id},
            )
            return []
        return await self._collect_images(series_id, key_types, None, language)

    async def get_season_images(
        self,
        series_id: int,
        season_number: int,
        language: str | None,
    ) -> list[RemoteImage]:
        """Ranked images of one season, grouped by artwork category."""
        language = self._language(language)
        try:
            key_types = await self._client_manager.get_artwork_key_types_for_season(
                series_id, language
            )
            series = await self._client_manager.get_series_by_id(series_id, language)
        except RemoteServiceError as e:
            log_operation_error(
                logger=logger,
                error=e,
                operation="get_season_images",
                additional_context={"tvdb_id": series_id, "season_number": season_number},
            )
            return []
        affinity = _season_affinity(series, season_number)
        return await self._collect_images(series_id, key_types, affinity, language)

    async def _collect_images(
        self,
        series_id: int,
        key_types: Sequence[ArtworkTypeRecord],
        season_affinity: str | None,
        language: str,
    ) -> list[RemoteImage]:
        if not key_types:
            return []

        try:
            languages = await self._client_manager.get_languages()
            artwork_types = await self._client_manager.get_artwork_types(language)
        except RemoteServiceError as e:
            log_operation_error(
                logger=logger,
                error=e,
                operation="collect_images",
                additional_context={"tvdb_id": series_id},
            )
            return []

        images: list[RemoteImage] = []
        for key_type in key_types:
            filters = ArtworkFilters(type=key_type.id, lang=language)
            try:
                records = await self._client_manager.get_images(series_id, filters, language)
            except RemoteServiceError:
                logger.debug(
                    "No images of type %s found for series %s", key_type.name, series_id
                )
                continue
            items = [to_artwork_item(record, languages) for record in records]
            images.extend(to_remote_images(rank(items, season_affinity, language), artwork_types))
        return images


__all__ = [
    "MetadataResolver",
    "combine_episode_results",
    "has_series_id",
    "map_episode",
    "map_series",
]
