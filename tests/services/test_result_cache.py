"""Tests for the TTL result cache and the cache key builder."""

import asyncio

import pytest

from tvdbmeta.config.models.cache_settings import CacheSettings
from tvdbmeta.services.result_cache import CacheEntry, ResultCache, build_cache_key
from tvdbmeta.shared.errors import RemoteServiceError
from tvdbmeta.shared.models.metadata import ArtworkFilters, EpisodeQuery, SearchFilters


class TestBuildCacheKey:
    """Test cases for build_cache_key()."""

    def test_primitives(self):
        """Test that primitives contribute "value;" in call order."""
        assert build_cache_key("series", 81189, "en") == "series;81189;en;"

    def test_order_sensitive(self):
        """Test that swapping parts changes the key."""
        assert build_cache_key("a", "b") != build_cache_key("b", "a")

    def test_structured_parts_skip_none(self):
        """Test that structured parts render non-None fields as name=value;."""
        key = build_cache_key("episodes", EpisodeQuery(season=2, episode_number=5))
        assert key == "episodes;page=0;season=2;episode_number=5;"

    def test_equivalent_parameters_same_key(self):
        """Test that logically identical parameter sets build identical keys."""
        by_position = EpisodeQuery(0, 3, 4)
        by_keyword = EpisodeQuery(episode_number=4, season=3)
        assert build_cache_key("x", by_position) == build_cache_key("x", by_keyword)

        assert build_cache_key(ArtworkFilters(type=2, lang="en")) == build_cache_key(
            ArtworkFilters(lang="en", type=2)
        )

    def test_search_filters(self):
        """Test the rendering of search filters."""
        key = build_cache_key(SearchFilters(query="office", language="en"))
        assert key == "query=office;type=series;language=en;"

    def test_unsupported_part(self):
        """Test that arbitrary objects are rejected."""
        with pytest.raises(TypeError):
            build_cache_key(object())


class TestCacheEntry:
    """Test cases for CacheEntry expiry."""

    def test_expiry_boundary(self):
        """Test that an entry is live up to and including expires_at."""
        entry = CacheEntry(key="k", value=1, expires_at=100.0)
        assert not entry.is_expired(100.0)
        assert entry.is_expired(100.5)


class TestResultCache:
    """Test cases for ResultCache.get_or_compute()."""

    @staticmethod
    def _compute(counter: list[str], value: object = "value"):
        async def compute(session):
            counter.append(session.token)
            await asyncio.sleep(0)
            return value

        return compute

    @pytest.mark.asyncio
    async def test_hit_within_ttl(self, result_cache, fake_client, clock):
        """Test that a second call within the TTL does not compute again."""
        computed: list[str] = []

        first = await result_cache.get_or_compute("k", "en", self._compute(computed))
        clock.advance(3600)
        second = await result_cache.get_or_compute("k", "en", self._compute(computed))

        assert first == second == "value"
        assert computed == ["token-1"]
        assert fake_client.calls["login"] == 1

    @pytest.mark.asyncio
    async def test_miss_after_ttl(self, result_cache, clock):
        """Test that exactly one more compute happens after expiry."""
        computed: list[str] = []

        await result_cache.get_or_compute("k", "en", self._compute(computed))
        clock.advance(3601)
        await result_cache.get_or_compute("k", "en", self._compute(computed))
        await result_cache.get_or_compute("k", "en", self._compute(computed))

        assert len(computed) == 2

    @pytest.mark.asyncio
    async def test_hit_does_not_touch_sessions(self, result_cache, fake_client, auth_failure):
        """Test that a live entry is served even when login would fail."""
        await result_cache.get_or_compute("k", "en", self._compute([]))
        result_cache.sessions.invalidate()
        fake_client.errors["login"] = auth_failure

        assert await result_cache.get_or_compute("k", "en", self._compute([])) == "value"

    @pytest.mark.asyncio
    async def test_errors_not_cached(self, result_cache):
        """Test that a failing compute propagates and stores nothing."""

        async def failing(session):
            raise RemoteServiceError(503, "unavailable")

        with pytest.raises(RemoteServiceError):
            await result_cache.get_or_compute("k", "en", failing)

        assert "k" not in result_cache
        assert await result_cache.get_or_compute("k", "en", self._compute([])) == "value"

    @pytest.mark.asyncio
    async def test_cancellation_not_cached(self, result_cache):
        """Test that a cancelled compute propagates and stores nothing."""
        gate = asyncio.Event()

        async def slow(session):
            await gate.wait()
            return "late"

        task = asyncio.create_task(result_cache.get_or_compute("k", "en", slow))
        await asyncio.sleep(0.01)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert len(result_cache) == 0

    @pytest.mark.asyncio
    async def test_concurrent_misses_not_coalesced(self, result_cache):
        """Test that concurrent identical misses may each compute.

        No single-flight is an accepted property: every wrapped call is an
        idempotent read, so duplicate computation is harmless and the last
        write wins.
        """
        computed: list[str] = []
        values = iter(["first", "second"])

        async def compute(session):
            computed.append(session.token)
            await asyncio.sleep(0)
            return next(values)

        results = await asyncio.gather(
            result_cache.get_or_compute("k", "en", compute),
            result_cache.get_or_compute("k", "en", compute),
        )

        assert sorted(results) == ["first", "second"]
        assert len(computed) == 2
        assert await result_cache.get_or_compute("k", "en", compute) == "second"

    @pytest.mark.asyncio
    async def test_language_selects_session(self, result_cache, fake_client):
        """Test that the compute callable gets the session of its language."""
        tokens: list[str] = []

        await result_cache.get_or_compute("en-key", "en", self._compute(tokens))
        await result_cache.get_or_compute("de-key", "de", self._compute(tokens))

        assert tokens == ["token-1", "token-2"]
        assert fake_client.calls["login"] == 2

    @pytest.mark.asyncio
    async def test_disabled_cache_always_computes(self, session_cache, clock):
        """Test that a disabled cache stores nothing."""
        cache = ResultCache.from_settings(
            session_cache, CacheSettings(enabled=False), clock=clock
        )
        computed: list[str] = []

        await cache.get_or_compute("k", "en", self._compute(computed))
        await cache.get_or_compute("k", "en", self._compute(computed))

        assert len(computed) == 2
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_invalidate_clear_and_purge(self, result_cache, clock):
        """Test the maintenance operations."""
        await result_cache.get_or_compute("b", "en", self._compute([]))
        clock.advance(1800)
        await result_cache.get_or_compute("a", "en", self._compute([]))

        assert result_cache.invalidate("a") is True
        assert result_cache.invalidate("a") is False

        await result_cache.get_or_compute("a", "en", self._compute([]))
        clock.advance(3000)
        assert result_cache.purge_expired() == 1
        assert "b" not in result_cache
        assert "a" in result_cache

        result_cache.clear()
        assert len(result_cache) == 0
