"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from sqlalchemy import delete, func, insert, select, update

from taxoport.adapters.sqlalchemy.mappings import (
    classification_node_table,
    namespace_table,
    product_classification_table,
    product_table,
)
from taxoport.domain.model import ROOT, ClassificationNode, Product

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy import Row, Select
    from sqlalchemy.orm import Session

    from taxoport.domain.model import ParentRef


_node = classification_node_table
_membership = product_classification_table


class SqlAlchemyClassificationStore:
    """Classification nodes; results are ordered by ascending id."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def add(
        self,
        namespace: str,
        name: str,
        parent: ClassificationNode | None = None,
    ) -> ClassificationNode:
        parent_id = parent.id if parent is not None else None
        result = self.session.execute(
            insert(_node).values(namespace=namespace, name=name, parent_id=parent_id)
        )
        node_id = cast(int, result.inserted_primary_key[0])
        return ClassificationNode(id=node_id, name=name, namespace=namespace, parent_id=parent_id)

    def find_by_name(self, name: str, namespace: str) -> ClassificationNode | None:
        stmt = self._select_named(namespace, name).limit(1)
        row = self.session.execute(stmt).one_or_none()
        return None if row is None else self._to_node(row)

    def find_all(
        self,
        namespace: str,
        name_filter: str,
        parent_filter: ParentRef | None = None,
        *,
        include_unused: bool = True,
    ) -> list[ClassificationNode]:
        stmt = self._select_named(namespace, name_filter)
        if parent_filter is ROOT:
            stmt = stmt.where(_node.c.parent_id.is_(None))
        elif parent_filter is not None:
            stmt = stmt.where(_node.c.parent_id == parent_filter)
        if not include_unused:
            stmt = stmt.where(_node.c.usage_count > 0)
        return [self._to_node(row) for row in self.session.execute(stmt)]

    def get(self, node_id: int) -> ClassificationNode:
        stmt = self._select_columns().where(_node.c.id == node_id)
        row = self.session.execute(stmt).one_or_none()
        if row is None:
            raise LookupError(f"Unknown classification node id: {node_id}")
        return self._to_node(row)

    def usage_count(self, node_id: int) -> int:
        stmt = select(_node.c.usage_count).where(_node.c.id == node_id)
        return self.session.execute(stmt).scalar_one()

    @staticmethod
    def _select_columns() -> Select[tuple[int, str, str, int | None]]:
        return select(_node.c.id, _node.c.name, _node.c.namespace, _node.c.parent_id)

    def _select_named(
        self, namespace: str, name: str
    ) -> Select[tuple[int, str, str, int | None]]:
        return (
            self._select_columns()
            .where(_node.c.namespace == namespace)
            .where(_node.c.name == name)
            .order_by(_node.c.id)
        )

    @staticmethod
    def _to_node(row: Row[tuple[int, str, str, int | None]]) -> ClassificationNode:
        node_id, name, namespace, parent_id = row
        return ClassificationNode(id=node_id, name=name, namespace=namespace, parent_id=parent_id)


class SqlAlchemyNamespaceRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, name: str, label: str | None = None) -> None:
        self.session.execute(insert(namespace_table).values(name=name, label=label))

    def exists(self, name: str) -> bool:
        stmt = select(namespace_table.c.name).where(namespace_table.c.name == name)
        return self.session.execute(stmt).scalar_one_or_none() is not None

    def recount_usage(self, name: str) -> None:
        """Refresh ``usage_count`` of every node in the namespace from product memberships."""

        assigned = (
            select(func.count())
            .select_from(_membership)
            .where(_membership.c.node_id == _node.c.id)
            .scalar_subquery()
        )
        self.session.execute(
            update(_node).where(_node.c.namespace == name).values(usage_count=assigned)
        )


class SqlAlchemyProductRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Product) -> None:
        self.session.add(entity)

    def id_for_sku(self, sku: str) -> int | None:
        stmt = select(product_table.c.id).where(product_table.c.sku == sku).limit(1)
        return self.session.execute(stmt).scalar_one_or_none()

    def term_ids(self, product_id: int, namespace: str) -> set[int]:
        stmt = (
            select(_membership.c.node_id)
            .join(_node, _node.c.id == _membership.c.node_id)
            .where(_membership.c.product_id == product_id)
            .where(_node.c.namespace == namespace)
        )
        return set(self.session.execute(stmt).scalars())

    def set_terms(
        self,
        product_id: int,
        namespace: str,
        node_ids: Iterable[int],
        *,
        append: bool,
    ) -> None:
        """Assign ``node_ids`` to the product; without ``append`` drop its other terms first."""

        wanted = list(dict.fromkeys(node_ids))
        if not append:
            namespace_nodes = select(_node.c.id).where(_node.c.namespace == namespace)
            self.session.execute(
                delete(_membership)
                .where(_membership.c.product_id == product_id)
                .where(_membership.c.node_id.in_(namespace_nodes))
                .where(_membership.c.node_id.not_in(wanted))
            )
        existing = self.term_ids(product_id, namespace)
        missing = [node_id for node_id in wanted if node_id not in existing]
        if missing:
            self.session.execute(
                insert(_membership),
                [{"product_id": product_id, "node_id": node_id} for node_id in missing],
            )


if TYPE_CHECKING:
    from taxoport.domain.ports.persistence import (
        ClassificationStore,
        NamespaceRepository,
        ProductRepository,
    )

    _session_stub = cast("Session", object())
    _store_check: ClassificationStore = SqlAlchemyClassificationStore(_session_stub)
    _namespace_check: NamespaceRepository = SqlAlchemyNamespaceRepository(_session_stub)
    _product_check: ProductRepository = SqlAlchemyProductRepository(_session_stub)
