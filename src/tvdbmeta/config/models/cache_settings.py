"""Cache configuration model."""

from __future__ import annotations

from pydantic import BaseModel, Field

from tvdbmeta.shared.constants import CacheConfig


class CacheSettings(BaseModel):
    """Result cache configuration.

    Disabling the cache makes every facade call hit the remote service;
    sessions are still cached.
    """

    enabled: bool = Field(default=True, description="Enable result caching")
    ttl: int = Field(
        default=CacheConfig.DEFAULT_TTL,
        gt=0,
        description="Cache time-to-live in seconds",
    )


__all__ = ["CacheSettings"]
