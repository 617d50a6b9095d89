"""Where taxoport keeps its catalog database and run reports."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "taxoport"
DEFAULT_DB_FILENAME: Final[str] = "catalog.db"
IMPORT_LOG_DIRNAME: Final[str] = "import-logs"

DATA_DIR_ENV: Final[str] = "TAXOPORT_DATA_DIR"
DATABASE_URI_ENV: Final[str] = "DATABASE_URI"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Filesystem layout below one data directory.

    ``data_dir`` may be relative or start with ``~``; derived paths are absolute.
    """

    data_dir: Path

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def database_path(self) -> Path:
        return self.resolve_data_dir() / DEFAULT_DB_FILENAME

    def log_dir(self) -> Path:
        return self.resolve_data_dir() / IMPORT_LOG_DIRNAME

    def database_uri(self) -> str:
        """SQLite URI of the catalog database; creates the data directory if needed."""

        path = self.database_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        return f"sqlite+pysqlite:///{path}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def _platform_data_home() -> Path:
    if os.name == "nt":
        local = os.getenv("LOCALAPPDATA")
        return Path(local) if local else Path.home() / "AppData" / "Local"
    xdg = os.getenv("XDG_DATA_HOME")
    return Path(xdg) if xdg else Path.home() / ".local" / "share"


def get_storage_config() -> StorageConfig:
    """Use ``TAXOPORT_DATA_DIR`` when set, else ``taxoport`` under the platform data home."""

    override = os.getenv(DATA_DIR_ENV, "").strip()
    data_dir = Path(override) if override else _platform_data_home() / APP_DIR_NAME
    return StorageConfig(data_dir=data_dir)


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    """Use ``DATABASE_URI`` when set, else SQLite inside the data directory."""

    override = os.getenv(DATABASE_URI_ENV, "").strip()
    if override:
        return DatabaseConfig(uri=override)
    return DatabaseConfig(uri=(storage or get_storage_config()).database_uri())
