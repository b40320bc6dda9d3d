"""Async TheTVDB v4 API client.

This module provides the aiohttp implementation of
``RemoteCatalogClientProtocol``. It knows the REST endpoints and the
``{"status", "data"}`` response envelope, converts HTTP failures into
tvdbmeta errors and nothing else: sessions, caching and retries live above
it.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

import aiohttp

from tvdbmeta.config.models.api_settings import TvdbSettings
from tvdbmeta.shared.constants import HTTPStatusCodes, TvdbConfig, TvdbEndpoints
from tvdbmeta.shared.errors import (
    AuthenticationError,
    ErrorCode,
    ErrorContext,
    RemoteServiceError,
    create_remote_service_error,
)
from tvdbmeta.shared.logging import log_operation_error, log_operation_success
from tvdbmeta.shared.models.metadata import ArtworkFilters, EpisodeQuery, SearchFilters

logger = logging.getLogger(__name__)


class TvdbClient:
    """Asynchronous TheTVDB client using aiohttp.

    The ``aiohttp.ClientSession`` is created lazily on the first request and
    closed by ``close()`` or when leaving the async context manager. A
    session passed in by the caller is never closed by the client.

    Args:
        base_url: API base URL
        timeout: Total request timeout in seconds
        session: Optional externally managed aiohttp session

    Example:
        >>> async with TvdbClient() as client:
        ...     token = await client.login(api_key)
        ...     results = await client.search(token, SearchFilters(query="office"))
    """

    def __init__(
        self,
        base_url: str = TvdbConfig.BASE_URL,
        timeout: float = TvdbConfig.REQUEST_TIMEOUT,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session
        self._owns_session = session is None

    @classmethod
    def from_settings(cls, settings: TvdbSettings) -> TvdbClient:
        return cls(base_url=settings.base_url, timeout=settings.timeout)

    async def __aenter__(self) -> TvdbClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying session if the client created it."""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        if self._owns_session:
            self._session = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers=TvdbConfig.HEADERS,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )
            self._owns_session = True
        return self._session

    async def _request(
        self,
        method: str,
        endpoint: str,
        *,
        operation: str,
        token: str | None = None,
        params: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
        language: str | None = None,
    ) -> Any:
        """Send one request and return the unwrapped ``data`` payload.

        Raises:
            AuthenticationError: On HTTP 401/403
            RemoteServiceError: On any other non-2xx status, a transport
                error or timeout (status 0), or a malformed body
        """
        url = f"{self.base_url}{endpoint}"
        headers: dict[str, str] = {}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if language:
            headers["Accept-Language"] = language

        start_time = time.time()
        try:
            async with self._get_session().request(
                method,
                url,
                params=params,
                json=json_body,
                headers=headers,
            ) as response:
                if response.status in (
                    HTTPStatusCodes.UNAUTHORIZED,
                    HTTPStatusCodes.FORBIDDEN,
                ):
                    error: AuthenticationError | RemoteServiceError = AuthenticationError(
                        f"TheTVDB rejected the credentials (HTTP {response.status})",
                        ErrorContext(
                            operation=operation,
                            language=language,
                            additional_data={"status_code": response.status},
                        ),
                    )
                    log_operation_error(logger=logger, error=error, operation=operation)
                    raise error

                if response.status >= 300:
                    body = await response.text()
                    error = create_remote_service_error(
                        response.status,
                        f"TheTVDB request failed (HTTP {response.status}): {body[:200]}",
                        operation=operation,
                    )
                    log_operation_error(logger=logger, error=error, operation=operation)
                    raise error

                payload = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            error = create_remote_service_error(
                HTTPStatusCodes.NO_RESPONSE,
                f"TheTVDB request failed: {e}",
                operation=operation,
                original_error=e,
            )
            log_operation_error(logger=logger, error=error, operation=operation)
            raise error from e
        except ValueError as e:
            # Body was not JSON
            error = RemoteServiceError(
                HTTPStatusCodes.OK,
                "TheTVDB returned a malformed response",
                ErrorContext(operation=operation),
                original_error=e,
                code=ErrorCode.TVDB_API_INVALID_RESPONSE,
            )
            log_operation_error(logger=logger, error=error, operation=operation)
            raise error from e

        if not isinstance(payload, dict) or "data" not in payload:
            error = RemoteServiceError(
                HTTPStatusCodes.OK,
                "TheTVDB response has no data envelope",
                ErrorContext(operation=operation),
                code=ErrorCode.TVDB_API_INVALID_RESPONSE,
            )
            log_operation_error(logger=logger, error=error, operation=operation)
            raise error

        log_operation_success(
            logger=logger,
            operation=operation,
            duration_ms=(time.time() - start_time) * 1000,
            context={"endpoint": endpoint},
        )
        return payload["data"]

    async def login(self, api_key: str, pin: str | None = None) -> str:
        body: dict[str, Any] = {"apikey": api_key}
        if pin:
            body["pin"] = pin
        data = await self._request(
            "POST",
            TvdbEndpoints.LOGIN,
            operation="login",
            json_body=body,
        )
        token = data.get("token", "") if isinstance(data, dict) else ""
        return str(token or "")

    async def search(self, token: str, filters: SearchFilters) -> list[dict[str, Any]]:
        data = await self._request(
            "GET",
            TvdbEndpoints.SEARCH,
            operation="search",
            token=token,
            params=filters.to_params(),
            language=filters.language,
        )
        return data or []

    async def get_series_detail(
        self,
        token: str,
        series_id: int,
        language: str,
    ) -> dict[str, Any]:
        return await self._request(
            "GET",
            TvdbEndpoints.SERIES_EXTENDED.format(series_id=series_id),
            operation="get_series_detail",
            token=token,
            params={"meta": "translations"},
            language=language,
        )

    async def get_episode_detail(
        self,
        token: str,
        episode_id: int,
        language: str,
    ) -> dict[str, Any]:
        return await self._request(
            "GET",
            TvdbEndpoints.EPISODE_EXTENDED.format(episode_id=episode_id),
            operation="get_episode_detail",
            token=token,
            params={"meta": "translations"},
            language=language,
        )

    async def get_series_episodes(
        self,
        token: str,
        series_id: int,
        season_type: str,
        query: EpisodeQuery,
        language: str,
    ) -> dict[str, Any]:
        return await self._request(
            "GET",
            TvdbEndpoints.SERIES_EPISODES.format(
                series_id=series_id,
                season_type=season_type,
            ),
            operation="get_series_episodes",
            token=token,
            params=query.to_params(),
            language=language,
        )

    async def get_episode_translation(
        self,
        token: str,
        episode_id: int,
        language: str,
    ) -> dict[str, Any]:
        return await self._request(
            "GET",
            TvdbEndpoints.EPISODE_TRANSLATION.format(
                episode_id=episode_id,
                language=language,
            ),
            operation="get_episode_translation",
            token=token,
        )

    async def get_artwork(
        self,
        token: str,
        series_id: int,
        filters: ArtworkFilters,
        language: str,
    ) -> dict[str, Any]:
        return await self._request(
            "GET",
            TvdbEndpoints.SERIES_ARTWORKS.format(series_id=series_id),
            operation="get_artwork",
            token=token,
            params=filters.to_params(),
            language=language,
        )

    async def get_languages(self, token: str) -> list[dict[str, Any]]:
        data = await self._request(
            "GET",
            TvdbEndpoints.LANGUAGES,
            operation="get_languages",
            token=token,
        )
        return data or []

    async def get_artwork_categories(self, token: str) -> list[dict[str, Any]]:
        data = await self._request(
            "GET",
            TvdbEndpoints.ARTWORK_TYPES,
            operation="get_artwork_categories",
            token=token,
        )
        return data or []


__all__ = ["TvdbClient"]
