"""SQLAlchemy-backed unit of work for catalog imports.

The adapter keeps one engine per process. ``startup`` creates it (or adopts a
caller's engine), applies the schema migrations and prepares the session
factory; every unit of work then opens its own session from that factory.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Literal, Self

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from taxoport.adapters.sqlalchemy.mappings import start_mappers
from taxoport.adapters.sqlalchemy.migrations import upgrade_head
from taxoport.adapters.sqlalchemy.repositories import (
    SqlAlchemyClassificationStore,
    SqlAlchemyNamespaceRepository,
    SqlAlchemyProductRepository,
)
from taxoport.config import get_database_config
from taxoport.domain.ports.unit_of_work import CatalogRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the catalog database is used before ``startup`` or twice started."""


@dataclass(slots=True)
class _CatalogDatabase:
    engine: Engine | None = None
    sessions: sessionmaker[Session] | None = None

    def attach(self, engine: Engine) -> None:
        self.engine = engine
        self.sessions = sessionmaker(bind=engine, expire_on_commit=False)

    def detach(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
        self.engine = None
        self.sessions = None

    def open_session(self) -> Session:
        if self.sessions is None:
            raise StartupError(
                "Catalog database not initialised; call "
                "taxoport.adapters.sqlalchemy.unit_of_work.startup() first."
            )
        return self.sessions()


_DATABASE = _CatalogDatabase()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Bind the adapter to ``engine`` (or a new one for ``database_uri``) and migrate it.

    Without ``force`` a second call raises ``StartupError``; with it the previous
    engine is disposed first.
    """

    if _DATABASE.engine is not None:
        if not force:
            raise StartupError("Catalog database already initialised. Pass force=True to rebind.")
        if _DATABASE.engine is not engine:
            _DATABASE.detach()

    if engine is None:
        engine = create_engine(database_uri or get_database_config().uri, future=True)
    start_mappers()
    upgrade_head(engine=engine)
    _DATABASE.attach(engine)
    log.debug("Catalog database ready: %s", engine.url.render_as_string(hide_password=True))


def is_started() -> bool:
    return _DATABASE.engine is not None


def shutdown() -> None:
    """Dispose the engine and forget it; a later ``startup`` may bind a new one."""

    _DATABASE.detach()


class SqlAlchemyCatalogUnitOfWork:
    """One session over the classification, namespace and product repositories.

    Leaving the block with an exception rolls back; nothing is committed
    implicitly, callers commit explicitly.
    """

    def __init__(self) -> None:
        if not is_started():
            raise StartupError("Catalog database not initialised; call startup() first.")
        self._session: Session | None = None
        self._repositories: CatalogRepositories | None = None

    def __enter__(self) -> Self:
        if self._session is not None:
            raise StartupError("Unit of work is already open")
        self._session = _DATABASE.open_session()
        self._repositories = CatalogRepositories(
            classifications=SqlAlchemyClassificationStore(self._session),
            namespaces=SqlAlchemyNamespaceRepository(self._session),
            products=SqlAlchemyProductRepository(self._session),
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self.session
        try:
            if exc_type is not None:
                session.rollback()
        finally:
            session.close()
            self._session = None
            self._repositories = None
        return False

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work is not open")
        return self._session

    @property
    def repositories(self) -> CatalogRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work is not open")
        return self._repositories

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


if TYPE_CHECKING:
    from taxoport.domain.ports.unit_of_work import CatalogUnitOfWork

    _uow_check: CatalogUnitOfWork = SqlAlchemyCatalogUnitOfWork()
