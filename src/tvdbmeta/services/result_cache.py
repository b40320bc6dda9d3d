"""Request-result cache with a fixed TTL.

Values are keyed by a string built from the call parameters with
``build_cache_key``. On a miss the cache obtains a session for the call's
language and runs the compute callable with it. Failures and cancellation
propagate and are never stored.

Concurrent misses for the same key are not coalesced: each caller computes
and the last write wins. Every wrapped call is an idempotent read.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar, Union, runtime_checkable

from tvdbmeta.config.models.cache_settings import CacheSettings
from tvdbmeta.services.session_cache import Clock, Session, SessionCache
from tvdbmeta.shared.constants import CacheConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


@runtime_checkable
class CacheKeySource(Protocol):
    """Structured call parameters that contribute to a cache key."""

    def cache_key_items(self) -> list[tuple[str, Any]]:
        """Return non-None (name, value) pairs in declaration order."""


CacheKeyPart = Union[str, int, float, bool, CacheKeySource]


def build_cache_key(*parts: CacheKeyPart) -> str:
    """Build a deterministic, order-sensitive cache key.

    Primitive parts contribute ``value;``. Structured parts contribute
    ``name=value;`` for each pair returned by ``cache_key_items()``.

    Args:
        *parts: Key parts in call-site order

    Returns:
        The cache key

    Raises:
        TypeError: If a part is neither primitive nor a CacheKeySource

    Example:
        >>> build_cache_key("series", 81189, "en")
        'series;81189;en;'
    """
    separator = CacheConfig.KEY_SEPARATOR
    segments: list[str] = []
    for part in parts:
        if isinstance(part, (str, int, float, bool)):
            segments.append(f"{part}{separator}")
        elif isinstance(part, CacheKeySource):
            segments.extend(
                f"{name}={value}{separator}" for name, value in part.cache_key_items()
            )
        else:
            msg = f"Unsupported cache key part: {type(part).__name__}"
            raise TypeError(msg)
    return "".join(segments)


@dataclass
class CacheEntry(Generic[T]):
    """Cached value with its absolute expiry (clock seconds)."""

    key: str
    value: T
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at


class ResultCache:
    """In-memory TTL cache in front of the session cache.

    Args:
        sessions: Session cache used on misses
        ttl: Entry lifetime in seconds
        enabled: When False nothing is stored and every call computes
        clock: Monotonic clock in seconds, injectable for tests
    """

    def __init__(
        self,
        sessions: SessionCache,
        *,
        ttl: float = CacheConfig.DEFAULT_TTL,
        enabled: bool = True,
        clock: Clock = time.monotonic,
    ) -> None:
        self._sessions = sessions
        self._ttl = ttl
        self._enabled = enabled
        self._clock = clock
        self._entries: dict[str, CacheEntry[Any]] = {}

    @classmethod
    def from_settings(
        cls,
        sessions: SessionCache,
        settings: CacheSettings,
        *,
        clock: Clock = time.monotonic,
    ) -> ResultCache:
        return cls(sessions, ttl=settings.ttl, enabled=settings.enabled, clock=clock)

    @property
    def sessions(self) -> SessionCache:
        return self._sessions

    async def get_or_compute(
        self,
        key: str,
        language: str | None,
        compute: Callable[[Session], Awaitable[T]],
    ) -> T:
        """Return the cached value for ``key`` or compute and store it.

        A live entry is returned without touching the session cache.

        Args:
            key: Cache key from build_cache_key
            language: Language whose session the compute call needs
            compute: Remote call taking the session

        Returns:
            The cached or freshly computed value

        Raises:
            Whatever ``compute`` or the session cache raises; nothing is
            stored in that case.
        """
        if self._enabled:
            entry = self._entries.get(key)
            if entry is not None:
                if not entry.is_expired(self._clock()):
                    logger.debug("Cache hit: %s", key)
                    return entry.value
                del self._entries[key]

        logger.debug("Cache miss: %s", key)
        session = await self._sessions.get_session(language)
        value = await compute(session)

        if self._enabled:
            self._entries[key] = CacheEntry(
                key=key,
                value=value,
                expires_at=self._clock() + self._ttl,
            )
        return value

    def invalidate(self, key: str) -> bool:
        """Remove one entry. Returns True if it existed."""
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def purge_expired(self) -> int:
        """Remove expired entries and return how many were removed."""
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Purged %d expired cache entries", len(expired))
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


__all__ = [
    "CacheEntry",
    "CacheKeySource",
    "ResultCache",
    "build_cache_key",
]
