"""SQLAlchemy mapping metadata for the catalog."""

from __future__ import annotations

import logging
from functools import cache

from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    orm,
)

from taxoport.domain.model import Product

log = logging.getLogger(__name__)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Catalog tables ----------------------------------------------------------------

namespace_table = Table(
    "namespace",
    mapper_registry.metadata,
    Column("name", String, primary_key=True),
    Column("label", String, nullable=True),
)

classification_node_table = Table(
    "classification_node",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "namespace",
        String,
        ForeignKey("namespace.name", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("name", String, nullable=False),
    Column(
        "parent_id",
        Integer,
        ForeignKey("classification_node.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column("usage_count", Integer, nullable=False, default=0, server_default="0"),
    Index("ix_classification_node_namespace_name", "namespace", "name"),
)

product_table = Table(
    "product",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("sku", String, nullable=False, unique=True),
    Column("name", String, nullable=True),
)

product_classification_table = Table(
    "product_classification",
    mapper_registry.metadata,
    Column(
        "product_id",
        Integer,
        ForeignKey("product.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "node_id",
        Integer,
        ForeignKey("classification_node.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model.

    Classification nodes are read through Core queries into frozen domain values,
    so only products are mapped.
    """

    log.info("Starting SQLAlchemy mappers")
    mapper_registry.map_imperatively(Product, product_table)
    return mapper_registry

