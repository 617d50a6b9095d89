"""Import run options and their defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from taxoport.domain.model import ImportMode

from .env import optional_int_env
from .errors import ConfigurationError
from .storage import get_storage_config

DEFAULT_DELIMITER: Final[str] = ","
DEFAULT_BATCH_SIZE: Final[int] = 100
MAX_BATCH_SIZE: Final[int] = 1000
DEFAULT_MAX_FILE_SIZE: Final[int] = 50 * 1024 * 1024


def _default_log_dir() -> Path:
    env_dir = os.getenv("TAXOPORT_LOG_DIR")
    if env_dir:
        return Path(env_dir).expanduser().resolve()
    return get_storage_config().log_dir()


@dataclass(frozen=True, slots=True)
class ImportOptions:
    """Options controlling one import run."""

    mode: ImportMode = ImportMode.UPDATE
    dry_run: bool = False
    delimiter: str = DEFAULT_DELIMITER
    skip_lines: int = 0
    batch_size: int = DEFAULT_BATCH_SIZE
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    log_dir: Path = field(default_factory=_default_log_dir)
    show_progress: bool = False

    def __post_init__(self) -> None:
        if len(self.delimiter) != 1:
            raise ConfigurationError("Delimiter must be a single character")
        if self.skip_lines < 0:
            raise ConfigurationError("Skip lines must be non-negative")
        if not 1 <= self.batch_size <= MAX_BATCH_SIZE:
            raise ConfigurationError(f"Batch size must be between 1 and {MAX_BATCH_SIZE}")
        if self.max_file_size < 1:
            raise ConfigurationError("Maximum file size must be positive")

    @property
    def append(self) -> bool:
        return self.mode is ImportMode.UPDATE


def get_import_options(
    *,
    mode: ImportMode = ImportMode.UPDATE,
    dry_run: bool = False,
    delimiter: str = DEFAULT_DELIMITER,
    skip_lines: int = 0,
    batch_size: int = DEFAULT_BATCH_SIZE,
    show_progress: bool = False,
) -> ImportOptions:
    """Build import options, reading environment overrides for limits and log location."""

    return ImportOptions(
        mode=mode,
        dry_run=dry_run,
        delimiter=delimiter,
        skip_lines=skip_lines,
        batch_size=batch_size,
        max_file_size=optional_int_env("TAXOPORT_MAX_FILE_SIZE", DEFAULT_MAX_FILE_SIZE),
        log_dir=_default_log_dir(),
        show_progress=show_progress,
    )
