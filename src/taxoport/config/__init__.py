"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_int_env
from .errors import ConfigurationError
from .importer import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_DELIMITER,
    DEFAULT_MAX_FILE_SIZE,
    MAX_BATCH_SIZE,
    ImportOptions,
    get_import_options,
)
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "DEFAULT_DELIMITER",
    "DEFAULT_MAX_FILE_SIZE",
    "MAX_BATCH_SIZE",
    "ConfigurationError",
    "DatabaseConfig",
    "ImportOptions",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_import_options",
    "get_storage_config",
    "optional_int_env",
]
