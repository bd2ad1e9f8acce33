"""Configuration utilities for regcheck.

Provides helpers to build a configuration accessor with service defaults
injected.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable, TypeVar

from starlette.config import Config
from starlette.datastructures import CommaSeparatedStrings

T = TypeVar("T")

DEFAULT_DATABASE_URL = "sqlite:///data/regcheck.db"

DEFAULTS: dict[str, str] = {
    "DATABASE_URL": DEFAULT_DATABASE_URL,
    "REGCHECK_DEBUG": "false",
    "LOG_LEVEL": "INFO",
    "CORS_ALLOW_ORIGINS": "*",
}


class RegcheckConfig:
    """Configuration wrapper with regcheck defaults.

    Wraps a Starlette Config object. Resolution order is environment
    variables, then the `.env` file, then the service defaults in
    `DEFAULTS`, then the caller's `default`.

    Attributes:
        _config: The underlying Starlette Config object
    """

    def __init__(self, env_file: str | None = None) -> None:
        """Initialize with environment file.

        Args:
            env_file: Path to a .env file to load environment variables from.
                      If the file doesn't exist, only environment variables are used.
        """
        if env_file and Path(env_file).exists():
            self._config = Config(env_file)
        else:
            self._config = Config()

    def __call__(
        self,
        key: str,
        *,
        cast: Callable[[Any], T] | type[T] | None = None,
        default: T | None = None,
    ) -> T | str | None:
        """Get a configuration value.

        Args:
            key: The configuration key to look up
            cast: Optional type to cast the value to
            default: Default value if not found in env, .env or DEFAULTS

        Returns:
            The configuration value, cast if specified
        """
        if key in DEFAULTS and default is None:
            default = DEFAULTS[key]  # type: ignore[assignment]
        if cast is not None:
            return self._config(key, cast=cast, default=default)
        if default is not None:
            return self._config(key, default=default)
        return self._config(key)

    @property
    def database_url(self) -> str:
        return str(self("DATABASE_URL"))

    @property
    def debug(self) -> bool:
        return bool(self("REGCHECK_DEBUG", cast=bool))

    @property
    def log_level(self) -> str:
        return str(self("LOG_LEVEL")).upper()

    @property
    def cors_allow_origins(self) -> list[str]:
        return list(self("CORS_ALLOW_ORIGINS", cast=CommaSeparatedStrings))


def build_config(env_file: str | None = ".env") -> RegcheckConfig:
    """Build a Config object with regcheck defaults.

    Args:
        env_file: Path to a .env file to load environment variables from.

    Returns:
        RegcheckConfig: A configuration accessor with service defaults.

    Note:
        If the .env file doesn't exist, only environment variables are used.
        This is not an error - it allows deployment without .env files.
        `REGCHECK_ENV_FILE` overrides the path when set.
    """
    return RegcheckConfig(os.getenv("REGCHECK_ENV_FILE", env_file or ""))
