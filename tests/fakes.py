"""In-memory fakes and sample catalog payloads shared by the test suite."""

from __future__ import annotations

import asyncio
from collections import Counter
from typing import Any

from tvdbmeta.shared.models.metadata import ArtworkFilters, EpisodeQuery, SearchFilters

TEST_API_KEY = "test_api_key_for_ci_testing_only"  # pragma: allowlist secret


class FakeClock:
    """Monotonic clock the tests advance by hand."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeRemoteCatalogClient:
    """In-memory RemoteCatalogClientProtocol implementation.

    Every call is counted in ``calls`` and recorded with its arguments in
    ``requests``. Payloads are plain dicts keyed by id; ``errors`` maps a
    method name to an exception raised instead of answering.

    ``login_gate`` (an asyncio.Event) holds every login until it is set,
    which lets tests pile up concurrent callers on a cold shard.
    """

    def __init__(self) -> None:
        self.calls: Counter[str] = Counter()
        self.requests: list[tuple[str, tuple[Any, ...]]] = []
        self.errors: dict[str, Exception] = {}
        self.login_gate: asyncio.Event | None = None
        self.tokens: list[str] = []

        self.search_results: dict[str, list[dict[str, Any]]] = {}
        self.series: dict[int, dict[str, Any]] = {}
        self.episodes: dict[int, dict[str, Any]] = {}
        self.episode_pages: list[dict[str, Any]] = []
        self.translations: dict[tuple[int, str], dict[str, Any]] = {}
        self.artworks: dict[int, list[dict[str, Any]]] = {}
        self.languages: list[dict[str, Any]] = [
            {"id": "eng", "name": "English"},
            {"id": "en", "name": "English"},
            {"id": "de", "name": "German"},
            {"id": "", "name": "Unknown"},
        ]
        self.artwork_types: list[dict[str, Any]] = sample_artwork_types()

    def _record(self, method: str, *args: Any) -> None:
        self.calls[method] += 1
        self.requests.append((method, args))
        error = self.errors.get(method)
        if error is not None:
            raise error

    async def login(self, api_key: str, pin: str | None = None) -> str:
        self._record("login", api_key, pin)
        if self.login_gate is not None:
            await self.login_gate.wait()
        else:
            await asyncio.sleep(0)
        if self.tokens:
            return self.tokens.pop(0)
        return f"token-{self.calls['login']}"

    async def search(self, token: str, filters: SearchFilters) -> list[dict[str, Any]]:
        self._record("search", token, filters)
        await asyncio.sleep(0)
        lookup = filters.remote_id if filters.remote_id else filters.query
        return self.search_results.get(lookup or "", [])

    async def get_series_detail(
        self, token: str, series_id: int, language: str
    ) -> dict[str, Any]:
        self._record("get_series_detail", token, series_id, language)
        await asyncio.sleep(0)
        return self.series.get(series_id, {"id": series_id, "name": f"Series {series_id}"})

    async def get_episode_detail(
        self, token: str, episode_id: int, language: str
    ) -> dict[str, Any]:
        self._record("get_episode_detail", token, episode_id, language)
        return self.episodes[episode_id]

    async def get_series_episodes(
        self,
        token: str,
        series_id: int,
        season_type: str,
        query: EpisodeQuery,
        language: str,
    ) -> dict[str, Any]:
        self._record("get_series_episodes", token, series_id, season_type, query, language)
        episodes = [
            e
            for e in self.episode_pages
            if e.get("seriesId", series_id) == series_id
            and (query.season is None or e.get("seasonNumber") == query.season)
            and (query.episode_number is None or e.get("number") == query.episode_number)
            and (query.air_date is None or e.get("aired") == query.air_date)
        ]
        return {"series": {"id": series_id}, "episodes": episodes}

    async def get_episode_translation(
        self, token: str, episode_id: int, language: str
    ) -> dict[str, Any]:
        self._record("get_episode_translation", token, episode_id, language)
        return self.translations.get((episode_id, language), {"language": language})

    async def get_artwork(
        self, token: str, series_id: int, filters: ArtworkFilters, language: str
    ) -> dict[str, Any]:
        self._record("get_artwork", token, series_id, filters, language)
        artworks = [
            a
            for a in self.artworks.get(series_id, [])
            if filters.type is None or a.get("type") == filters.type
        ]
        return {"id": series_id, "artworks": artworks}

    async def get_languages(self, token: str) -> list[dict[str, Any]]:
        self._record("get_languages", token)
        return self.languages

    async def get_artwork_categories(self, token: str) -> list[dict[str, Any]]:
        self._record("get_artwork_categories", token)
        return self.artwork_types


def sample_artwork_types() -> list[dict[str, Any]]:
    """Artwork category table as served by the catalog (mixed-case names)."""
    return [
        {"id": 1, "name": "Banner", "recordType": "series", "slug": "banners"},
        {"id": 2, "name": "Poster", "recordType": "series", "slug": "posters"},
        {"id": 3, "name": "Background", "recordType": "series", "slug": "backgrounds"},
        {"id": 5, "name": "Icon", "recordType": "series", "slug": "icons"},
        {"id": 6, "name": "Banner", "recordType": "season", "slug": "banners"},
        {"id": 7, "name": "Poster", "recordType": "season", "slug": "posters"},
        {"id": 23, "name": "ClearLogo", "recordType": "series", "slug": "clearlogo"},
        {"id": 99, "name": "Cinemagraph", "recordType": "series", "slug": "cinemagraphs"},
    ]


def sample_series_payload(series_id: int = 73244, **overrides: Any) -> dict[str, Any]:
    """Extended series payload in wire (camelCase) form."""
    payload: dict[str, Any] = {
        "id": series_id,
        "name": "The Office",
        "overview": "  A mockumentary on a group of office workers.  ",
        "firstAired": "2005-03-24",
        "lastAired": "2013-05-16",
        "airsDays": {"monday": False, "thursday": True, "tuesday": True},
        "airsTime": "21:00",
        "status": {"id": 2, "name": "Ended", "recordType": "series"},
        "averageRuntime": 22,
        "genres": [{"id": 4, "name": "Comedy", "slug": "comedy"}],
        "latestNetwork": {"id": 10, "name": "NBC", "country": "usa"},
        "remoteIds": [
            {"id": "tt0386676", "type": 2, "sourceName": "IMDB"},
            {"id": "EP00687250", "type": 10, "sourceName": "TMS (Zap2It)"},
        ],
        "characters": [
            {
                "id": 1,
                "name": "Michael Scott",
                "peopleType": "Actor",
                "personName": " Steve Carell ",
                "sort": 0,
                "image": "/actors/1.jpg",
            },
            {
                "id": 2,
                "name": "Dwight Schrute",
                "peopleType": "Actor",
                "personName": "Rainn Wilson",
                "sort": 1,
            },
            {"id": 3, "name": "Nobody", "peopleType": "Actor", "personName": "  "},
            {"id": 4, "peopleType": "Director", "personName": "Ken Kwapis"},
        ],
        "artworks": [
            {"id": 500, "image": "https://artworks.example/poster.jpg", "type": 2},
        ],
        "episodes": [
            {"id": 1, "seasonNumber": 1, "number": 1, "aired": "2005-03-24"},
            {"id": 2, "seasonNumber": 9, "number": 23, "aired": "2013-05-16"},
            {"id": 3, "seasonNumber": 10, "number": 1, "aired": None},
        ],
        "seasons": [
            {"id": 9001, "number": 1, "type": {"id": 1, "name": "Aired Order", "type": "official"}},
            {"id": 9501, "number": 1, "type": {"id": 2, "name": "DVD Order", "type": "dvd"}},
            {"id": 9002, "number": 2, "type": {"id": 1, "name": "Aired Order", "type": "official"}},
        ],
    }
    payload.update(overrides)
    return payload


def sample_episode_payload(episode_id: int = 1001, **overrides: Any) -> dict[str, Any]:
    """Extended episode payload in wire (camelCase) form."""
    payload: dict[str, Any] = {
        "id": episode_id,
        "seriesId": 73244,
        "name": "Pilot",
        "overview": "The premiere episode.",
        "aired": "2005-03-24",
        "seasonNumber": 1,
        "number": 1,
        "contentRatings": [{"id": 1, "name": "TV-14", "contentType": "TV-14"}],
        "remoteIds": [{"id": "tt0664521", "sourceName": "IMDB"}],
        "characters": [
            {"id": 1, "peopleType": "Director", "personName": "Ken Kwapis"},
            {"id": 2, "peopleType": "Guest Star", "personName": "John Doe (Role1"},
            {"id": 3, "peopleType": "Guest Star", "personName": "Role2"},
            {"id": 4, "peopleType": "Guest Star", "personName": "Role3)"},
            {"id": 5, "peopleType": "Guest Star", "personName": "Jane Roe (Solo)"},
            {"id": 6, "peopleType": "Writer", "personName": "Greg Daniels"},
        ],
    }
    payload.update(overrides)
    return payload


