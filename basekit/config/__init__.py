"""
Runtime Configuration Module

Provides configuration loading and management for basekit.
"""

from .runtime import (
    HashConfig,
    LoggingConfig,
    RuntimeConfig,
    get_default_config,
    set_default_config,
    setup_logging,
)

__all__ = [
    "RuntimeConfig",
    "HashConfig",
    "LoggingConfig",
    "get_default_config",
    "set_default_config",
    "setup_logging",
]
