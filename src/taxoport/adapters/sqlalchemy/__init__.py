"""SQLAlchemy adapter package for taxoport."""

from __future__ import annotations

from .mappings import mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyClassificationStore,
    SqlAlchemyNamespaceRepository,
    SqlAlchemyProductRepository,
)
from .unit_of_work import SqlAlchemyCatalogUnitOfWork, StartupError, shutdown, startup

__all__ = [
    "SqlAlchemyCatalogUnitOfWork",
    "SqlAlchemyClassificationStore",
    "SqlAlchemyNamespaceRepository",
    "SqlAlchemyProductRepository",
    "StartupError",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
