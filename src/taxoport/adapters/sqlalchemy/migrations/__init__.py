"""Catalog schema migrations shipped with the SQLAlchemy adapter."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Final

from alembic import command
from alembic.config import Config

from taxoport.config import get_database_config

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

MIGRATIONS_PATH: Final[Path] = Path(__file__).resolve().parent
HEAD_REVISION: Final[str] = "head"


def migration_config(*, database_uri: str | None = None) -> Config:
    """Alembic config pointing at the bundled revision scripts.

    Behaves the same from a source checkout and from an installed wheel. The
    ``[tool.alembic]`` table in pyproject.toml is only read by the ``alembic``
    command line when authoring new revisions.
    """

    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_PATH))
    config.set_main_option("path_separator", "os")
    if database_uri is not None:
        config.set_main_option("sqlalchemy.url", database_uri)
    return config


def upgrade_head(*, engine: Engine | None = None, database_uri: str | None = None) -> None:
    """Bring the catalog schema to the latest revision.

    With ``engine`` the upgrade runs on one of its connections, so tables created
    in an in-memory SQLite database stay visible to later sessions.
    """

    if engine is None:
        config = migration_config(database_uri=database_uri or get_database_config().uri)
        command.upgrade(config, HEAD_REVISION)
        return

    config = migration_config()
    with engine.begin() as connection:
        config.attributes["connection"] = connection
        command.upgrade(config, HEAD_REVISION)
