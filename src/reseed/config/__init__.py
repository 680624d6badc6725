"""Application configuration helpers."""

from __future__ import annotations

from .database import DatabaseConfig, default_database_path, get_database_config
from .env import env_flag, env_text
from .errors import ConfigurationError
from .logging import ProgressFormatter, configure_logging
from .seeding import DEFAULT_FIXTURE_PATH, SeedingConfig, get_seeding_config

__all__ = [
    "DEFAULT_FIXTURE_PATH",
    "ConfigurationError",
    "DatabaseConfig",
    "ProgressFormatter",
    "SeedingConfig",
    "configure_logging",
    "default_database_path",
    "env_flag",
    "env_text",
    "get_database_config",
    "get_seeding_config",
]
