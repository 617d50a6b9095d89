"""Logging setup for the command line entry point."""

from __future__ import annotations

import logging
from typing import Final

LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT: Final[str] = "%H:%M:%S"

# alembic announces its context and every applied revision at INFO on each startup
_MIGRATION_LOGGERS: Final[tuple[str, ...]] = ("alembic.runtime.migration", "alembic.env")


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Configure root logging for a CLI run.

    ``force=True`` replaces handlers installed earlier, which is how ``--verbose``
    lowers the level after startup. Migration messages only show when debugging.
    """

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=DATE_FORMAT, force=force)
    migration_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in _MIGRATION_LOGGERS:
        logging.getLogger(name).setLevel(migration_level)
