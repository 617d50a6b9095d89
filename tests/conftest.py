from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from taxoport.adapters.sqlalchemy import start_mappers
from taxoport.adapters.sqlalchemy.migrations import upgrade_head
from taxoport.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    shutdown,
    startup,
)

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def _isolated_storage(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep data and report directories inside the test's tmp_path."""

    monkeypatch.setenv("TAXOPORT_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("TAXOPORT_LOG_DIR", raising=False)
    monkeypatch.delenv("TAXOPORT_MAX_FILE_SIZE", raising=False)


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    # one shared connection, so every session sees the same in-memory database
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        future=True,
    )
    start_mappers()
    upgrade_head(engine=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session = sessionmaker(bind=sqlite_engine, future=True)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyCatalogUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)
    try:
        yield SqlAlchemyCatalogUnitOfWork
    finally:
        shutdown()
