"""Application configuration helpers."""

from __future__ import annotations

from .env import env_seconds, require_env_vars
from .errors import ConfigurationError, InvalidConfigurationError, MissingConfigurationError
from .logging import configure_logging
from .queue import DEFAULT_RECALCULATION_DELAY, QueueConfig, get_queue_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "DEFAULT_RECALCULATION_DELAY",
    "ConfigurationError",
    "DatabaseConfig",
    "InvalidConfigurationError",
    "MissingConfigurationError",
    "QueueConfig",
    "StorageConfig",
    "configure_logging",
    "env_seconds",
    "get_database_config",
    "get_queue_config",
    "get_storage_config",
    "require_env_vars",
]
