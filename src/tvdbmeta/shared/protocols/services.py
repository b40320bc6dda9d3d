"""Service protocols for dependency inversion.

The caches and the resolver depend on this protocol rather than on the
aiohttp client, so tests can substitute an in-memory fake.
"""

from __future__ import annotations

from typing import Any, Protocol

from tvdbmeta.shared.models.metadata import ArtworkFilters, EpisodeQuery, SearchFilters


class RemoteCatalogClientProtocol(Protocol):
    """Protocol for the remote catalog API client.

    Every method returns the unwrapped JSON ``data`` payload (dict or list).
    Failures raise ``AuthenticationError`` (login) or ``RemoteServiceError``
    (everything else). Cancellation propagates as ``asyncio.CancelledError``.

    Example:
        >>> from tvdbmeta.services.tvdb import TvdbClient
        >>> client: RemoteCatalogClientProtocol = TvdbClient()
        >>> token = await client.login("api-key")
    """

    async def login(self, api_key: str, pin: str | None = None) -> str:
        """Log in and return a bearer token.

        Args:
            api_key: Project API key
            pin: Optional subscriber PIN

        Returns:
            The issued token
        """

    async def search(self, token: str, filters: SearchFilters) -> list[dict[str, Any]]:
        """Search the catalog."""

    async def get_series_detail(
        self,
        token: str,
        series_id: int,
        language: str,
    ) -> dict[str, Any]:
        """Get the extended series record."""

    async def get_episode_detail(
        self,
        token: str,
        episode_id: int,
        language: str,
    ) -> dict[str, Any]:
        """Get the extended episode record."""

    async def get_series_episodes(
        self,
        token: str,
        series_id: int,
        season_type: str,
        query: EpisodeQuery,
        language: str,
    ) -> dict[str, Any]:
        """Get one page of a series' episodes for a season type."""

    async def get_episode_translation(
        self,
        token: str,
        episode_id: int,
        language: str,
    ) -> dict[str, Any]:
        """Get an episode's translation record for a 3-letter language."""

    async def get_artwork(
        self,
        token: str,
        series_id: int,
        filters: ArtworkFilters,
        language: str,
    ) -> dict[str, Any]:
        """Get a series' artworks, optionally filtered by type and language."""

    async def get_languages(self, token: str) -> list[dict[str, Any]]:
        """List the catalog's languages."""

    async def get_artwork_categories(self, token: str) -> list[dict[str, Any]]:
        """List artwork categories as (id, name, recordType) records."""


__all__ = ["RemoteCatalogClientProtocol"]
