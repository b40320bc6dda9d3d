"""tvdbmeta Settings Configuration Model.

Main Settings class that consolidates all configuration domains.
"""

from __future__ import annotations

import logging
from pathlib import Path

import toml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from tvdbmeta.config.models.api_settings import APISettings, TvdbSettings
from tvdbmeta.config.models.app_settings import LoggingSettings
from tvdbmeta.config.models.cache_settings import CacheSettings
from tvdbmeta.config.models.matching_settings import MatchingSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Settings facade providing unified configuration access.

    Environment variables override values, e.g.
    ``TVDBMETA_API__TVDB__API_KEY`` or ``TVDBMETA_CACHE__TTL``.
    """

    model_config = SettingsConfigDict(
        env_prefix="TVDBMETA_",
        env_nested_delimiter="__",
        env_ignore_empty=True,
        extra="ignore",
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: APISettings = Field(default_factory=APISettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    matching: MatchingSettings = Field(default_factory=MatchingSettings)

    @property
    def tvdb(self) -> TvdbSettings:
        """Shortcut for ``settings.api.tvdb``."""
        return self.api.tvdb

    @classmethod
    def from_toml_file(cls, file_path: str | Path) -> Settings:
        """Load settings from a TOML file; keys the file omits come from the environment."""

        file_path = Path(file_path)
        if not file_path.exists():
            msg = f"Configuration file not found: {file_path}"
            raise FileNotFoundError(msg)

        raw_config = toml.load(file_path)
        logger.debug("Loaded configuration from %s", file_path)
        return cls(**raw_config)

    def to_toml_file(self, file_path: str | Path) -> None:
        """Save settings to TOML file.

        API keys are saved: config files are not logs. Logs mask the key
        via TvdbSettings.__repr__.
        """

        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        config_dict = self.model_dump(exclude_none=True, exclude_unset=False)

        with open(file_path, "w", encoding="utf-8") as f:
            toml.dump(config_dict, f)
