"""API configuration models (TheTVDB).

This module contains configuration models for the remote catalog service.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from tvdbmeta.shared.constants import SessionConfig, TvdbConfig


class TvdbSettings(BaseModel):
    """TheTVDB API configuration.

    The API key is not validated here: a missing key fails at the first
    login attempt, not at load time.

    Security: api_key is masked in __repr__ to prevent accidental exposure
    in logs.
    """

    # API authentication (sensitive - hidden from repr)
    api_key: str = Field(
        default="",
        repr=False,
        description="TheTVDB project API key (required for API access)",
    )
    pin: str | None = Field(
        default=None,
        repr=False,
        description="Optional subscriber PIN sent with the login request",
    )

    base_url: str = Field(
        default=TvdbConfig.BASE_URL,
        description="Base URL of the v4 REST API",
    )
    timeout: float = Field(
        default=TvdbConfig.REQUEST_TIMEOUT,
        gt=0,
        description="Request timeout in seconds",
    )

    default_language: str = Field(
        default=SessionConfig.DEFAULT_LANGUAGE,
        min_length=1,
        description="Language used when a call passes a blank language",
    )
    token_refresh_hours: float = Field(
        default=SessionConfig.TOKEN_REFRESH_HOURS,
        gt=0,
        description="Age in hours after which a session token is refreshed",
    )

    def __repr__(self) -> str:
        """Custom repr that masks sensitive api_key."""
        masked_key = "****" if self.api_key else "[empty]"
        return (
            f"TvdbSettings("
            f"api_key={masked_key}, "
            f"base_url={self.base_url}, "
            f"timeout={self.timeout}, "
            f"default_language={self.default_language}, "
            f"token_refresh_hours={self.token_refresh_hours})"
        )


class APISettings(BaseModel):
    """API configuration container.

    Note: Environment variable loading is handled by the parent Settings class.
    """

    tvdb: TvdbSettings = Field(
        default_factory=TvdbSettings,
        description="TheTVDB API configuration",
    )


__all__ = [
    "APISettings",
    "TvdbSettings",
]
