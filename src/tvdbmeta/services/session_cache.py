"""Per-language authenticated session cache.

Each normalized language code owns an independent shard: one asyncio.Lock
and at most one Session. Logins are lazy and refresh happens once a token is
older than the refresh interval, both under the shard lock with a second
check after acquiring it, so N concurrent callers for one language trigger
a single login. Shards never share a lock.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from tvdbmeta.config.models.api_settings import TvdbSettings
from tvdbmeta.services.tvdb_utils import normalize_language
from tvdbmeta.shared.constants import BASE_HOUR, SessionConfig
from tvdbmeta.shared.errors import (
    AuthenticationError,
    ErrorCode,
    create_authentication_error,
    create_config_error,
)
from tvdbmeta.shared.logging import log_operation_error, log_operation_success
from tvdbmeta.shared.protocols.services import RemoteCatalogClientProtocol

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass(frozen=True)
class Session:
    """Authenticated token for one language.

    Attributes:
        language: Normalized language code
        token: Bearer token, never empty
        issued_at: Clock reading (seconds) when the token was issued
    """

    language: str
    token: str
    issued_at: float


@dataclass
class _LanguageShard:
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    session: Session | None = None


class SessionCache:
    """Lazily logs in per language and refreshes stale tokens.

    Login failures propagate to the caller. A failed login or refresh leaves
    the shard without a session, so the next call retries. There is no
    internal retry.

    Args:
        client: Remote catalog client used for login calls
        api_key: Project API key; a blank key fails at the first login
        pin: Optional subscriber PIN
        default_language: Language used for blank language codes
        refresh_interval: Token age in seconds that triggers a refresh
        clock: Monotonic clock in seconds, injectable for tests
    """

    def __init__(
        self,
        client: RemoteCatalogClientProtocol,
        api_key: str,
        *,
        pin: str | None = None,
        default_language: str = SessionConfig.DEFAULT_LANGUAGE,
        refresh_interval: float = SessionConfig.TOKEN_REFRESH_INTERVAL,
        clock: Clock = time.monotonic,
    ) -> None:
        self._client = client
        self._api_key = api_key
        self._pin = pin
        self._default_language = default_language
        self._refresh_interval = refresh_interval
        self._clock = clock
        self._shards: dict[str, _LanguageShard] = {}

    @classmethod
    def from_settings(
        cls,
        client: RemoteCatalogClientProtocol,
        settings: TvdbSettings,
        *,
        clock: Clock = time.monotonic,
    ) -> SessionCache:
        """Build a session cache from TheTVDB settings."""
        return cls(
            client,
            settings.api_key,
            pin=settings.pin,
            default_language=settings.default_language,
            refresh_interval=settings.token_refresh_hours * BASE_HOUR,
            clock=clock,
        )

    @property
    def default_language(self) -> str:
        return self._default_language

    def normalize(self, language: str | None) -> str:
        """Normalize a language code to its shard key."""
        return normalize_language(language, self._default_language)

    def _shard(self, key: str) -> _LanguageShard:
        shard = self._shards.get(key)
        if shard is None:
            shard = _LanguageShard()
            self._shards[key] = shard
        return shard

    def _is_stale(self, session: Session) -> bool:
        return self._clock() - session.issued_at >= self._refresh_interval

    def _needs_login(self, session: Session | None) -> bool:
        return session is None or not session.token or self._is_stale(session)

    async def get_session(self, language: str | None = None) -> Session:
        """Return a valid session for ``language``, logging in if needed.

        Args:
            language: Language code, normalized before use

        Returns:
            A session whose token is non-empty and not stale

        Raises:
            AuthenticationError: If the login call fails
            ApplicationError: If no API key is configured
        """
        key = self.normalize(language)
        shard = self._shard(key)

        if self._needs_login(shard.session):
            async with shard.lock:
                # Another caller may have logged in while we waited
                if self._needs_login(shard.session):
                    refreshing = shard.session is not None
                    # A failed login leaves the shard unset so the next call retries
                    shard.session = None
                    shard.session = await self._login(key, refreshing=refreshing)

        session = shard.session
        if session is None:
            # Only reachable if invalidate() ran between release and read
            return await self.get_session(key)
        return session

    async def _login(self, key: str, *, refreshing: bool) -> Session:
        operation = "refresh_session" if refreshing else "login"

        if not self._api_key:
            error = create_config_error(
                "TheTVDB API key is not configured",
                config_key="api.tvdb.api_key",
                operation=operation,
                code=ErrorCode.CONFIG_MISSING,
            )
            log_operation_error(logger=logger, error=error, operation=operation)
            raise error

        start_time = time.time()
        try:
            token = await self._client.login(self._api_key, self._pin)
        except AuthenticationError as e:
            log_operation_error(
                logger=logger,
                error=e,
                operation=operation,
                additional_context={"language": key},
            )
            raise

        if not token:
            error = create_authentication_error("Login returned an empty token", language=key)
            log_operation_error(logger=logger, error=error, operation=operation)
            raise error

        log_operation_success(
            logger=logger,
            operation=operation,
            duration_ms=(time.time() - start_time) * 1000,
            context={"language": key},
        )
        return Session(language=key, token=token, issued_at=self._clock())

    def invalidate(self, language: str | None = None) -> None:
        """Drop the session for one language, or for all when None."""
        if language is None:
            for shard in self._shards.values():
                shard.session = None
            return
        shard = self._shards.get(self.normalize(language))
        if shard is not None:
            shard.session = None

    def languages(self) -> list[str]:
        """Languages that currently hold a session."""
        return [key for key, shard in self._shards.items() if shard.session is not None]


__all__ = ["Session", "SessionCache"]
