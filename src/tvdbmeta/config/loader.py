"""Settings loader and singleton manager.

This module handles:
- Environment variable loading from .env files (python-dotenv)
- Configuration file loading from TOML
- Thread-safe singleton pattern for the Settings instance
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from tvdbmeta.config.models.settings import Settings
from tvdbmeta.shared.errors import ErrorCode, create_config_error

logger = logging.getLogger(__name__)

# Plain environment variable accepted in addition to TVDBMETA_API__TVDB__API_KEY
API_KEY_ENV_VAR = "TVDB_API_KEY"

DEFAULT_CONFIG_PATHS: tuple[Path, ...] = (
    Path("config/tvdbmeta.toml"),
    Path("tvdbmeta.toml"),
    Path.home() / ".tvdbmeta" / "config.toml",
)


class SettingsLoader:
    """Thread-safe singleton manager for Settings.

    Uses double-checked locking pattern to ensure thread-safety
    while minimizing lock overhead.
    """

    _instance: Settings | None = None
    _lock: threading.RLock = threading.RLock()

    def get_config(self) -> Settings:
        """Get the global settings instance (thread-safe).

        Returns:
            The global Settings instance, loading it if necessary.
        """
        # First check (without lock for performance)
        if self._instance is None:
            # Second check (with lock for thread-safety)
            with self._lock:
                if self._instance is None:
                    self._instance = load_settings()

        return self._instance

    def reload_config(self) -> Settings:
        """Reload the global settings instance from configuration files.

        Returns:
            The reloaded Settings instance.
        """
        with self._lock:
            self._instance = load_settings()

        return self._instance

    def reset(self) -> None:
        """Drop the cached instance so the next get_config() reloads."""
        with self._lock:
            self._instance = None


def _load_env_file(env_file: Path | None = None) -> None:
    """Load environment variables from a .env file if one exists.

    A missing file is not an error: the API key may come from the process
    environment, a TOML file, or not at all until the first login.
    """
    env_file = env_file or Path(".env")
    if env_file.exists():
        load_dotenv(env_file, override=False)
        logger.debug("Loaded environment from %s", env_file)


def _apply_api_key_fallback(settings: Settings) -> Settings:
    if not settings.api.tvdb.api_key:
        api_key = os.getenv(API_KEY_ENV_VAR, "").strip()
        if api_key:
            settings.api.tvdb.api_key = api_key
    return settings


def load_settings(
    config_path: str | Path | None = None,
    env_file: str | Path | None = None,
) -> Settings:
    """Load settings from TOML configuration file or environment.

    Args:
        config_path: Optional path to TOML configuration file. If None, tries
            the default locations, then environment variables only.
        env_file: Optional .env file, defaults to ``./.env``

    Returns:
        Settings instance loaded from the specified source

    Raises:
        ApplicationError: If the configuration is invalid
        FileNotFoundError: If an explicit config_path does not exist
    """
    _load_env_file(Path(env_file) if env_file else None)

    try:
        if config_path:
            return _apply_api_key_fallback(Settings.from_toml_file(config_path))

        for default_path in DEFAULT_CONFIG_PATHS:
            if default_path.exists():
                return _apply_api_key_fallback(Settings.from_toml_file(default_path))

        return _apply_api_key_fallback(Settings())
    except ValidationError as e:
        raise create_config_error(
            f"Invalid configuration: {e}",
            operation="load_settings",
            original_error=e,
            code=ErrorCode.CONFIG_INVALID,
        ) from e


# Global loader instance
_loader = SettingsLoader()


def get_config() -> Settings:
    """Get the global settings instance (thread-safe)."""
    return _loader.get_config()


def reload_config() -> Settings:
    """Reload the global settings instance from configuration files."""
    return _loader.reload_config()


__all__ = [
    "SettingsLoader",
    "get_config",
    "load_settings",
    "reload_config",
]
