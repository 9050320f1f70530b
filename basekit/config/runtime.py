"""
Runtime Configuration

Central configuration for default algorithm selection and logging.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from typing import Any, Optional
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from basekit.schemas.errors import ConfigurationException

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class HashConfig:
    """Configuration for hashing and HMAC helpers."""
    default_algorithm: str = "sha256"


@dataclass
class LoggingConfig:
    """Configuration for library logging."""
    level: str = "WARNING"
    log_file: Optional[str] = None

    def __post_init__(self):
        level = str(self.level).upper()
        if level not in _LOG_LEVELS:
            raise ConfigurationException(
                f"Unknown log level: {self.level!r}",
                key="logging.level",
                details={"allowed": list(_LOG_LEVELS)},
            )
        self.level = level


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for basekit.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    hash: HashConfig = field(default_factory=HashConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - BASEKIT_DEFAULT_HASH: Default algorithm for hash/HMAC helpers
        - BASEKIT_LOG_LEVEL: Log level name
        - BASEKIT_LOG_FILE: Optional log file path

        A .env file in the working directory is loaded first; variables
        already set in the process environment win over it.
        """
        load_dotenv(find_dotenv(usecwd=True))

        overrides: dict[str, Any] = {}

        if os.getenv("BASEKIT_DEFAULT_HASH"):
            overrides.setdefault("hash", {})["default_algorithm"] = os.getenv("BASEKIT_DEFAULT_HASH")

        if os.getenv("BASEKIT_LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv("BASEKIT_LOG_LEVEL")
        if os.getenv("BASEKIT_LOG_FILE"):
            overrides.setdefault("logging", {})["log_file"] = os.getenv("BASEKIT_LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        logger.debug(f"Loaded configuration from {path}")
        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        if not isinstance(data, dict):
            raise ConfigurationException(
                f"Configuration must be a mapping, got {type(data).__name__}"
            )
        hash_data = data.get("hash", {}) or {}
        logging_data = data.get("logging", {}) or {}

        try:
            hash_config = HashConfig(**hash_data) if hash_data else HashConfig()
            logging_config = LoggingConfig(**logging_data) if logging_data else LoggingConfig()
        except TypeError as e:
            raise ConfigurationException(f"Unknown configuration key: {e}") from e

        return cls(hash=hash_config, logging=logging_config)

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        import copy
        new_config = copy.deepcopy(self)

        if "hash" in overrides:
            for key, value in overrides["hash"].items():
                setattr(new_config.hash, key, value)

        if "logging" in overrides:
            merged = {
                "level": new_config.logging.level,
                "log_file": new_config.logging.log_file,
                **overrides["logging"],
            }
            new_config.logging = LoggingConfig(**merged)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "hash": {
                "default_algorithm": self.hash.default_algorithm,
            },
            "logging": {
                "level": self.logging.level,
                "log_file": self.logging.log_file,
            },
        }


def setup_logging(config: LoggingConfig | None = None) -> None:
    """
    Configure logging for applications embedding basekit.

    Args:
        config: Level and optional log file; None uses the default
            configuration (BASEKIT_LOG_LEVEL / BASEKIT_LOG_FILE)
    """
    if config is None:
        config = get_default_config().logging
    log_level = getattr(logging, config.level)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )
    logging.getLogger("basekit").setLevel(log_level)


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: RuntimeConfig | None) -> None:
    """Set the default runtime configuration (``None`` reloads from env on next use)."""
    global _default_config
    _default_config = config
