"""Ports for reading and updating the catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from taxoport.domain.model import ClassificationNode, ParentRef, Product


@runtime_checkable
class ClassificationStore(Protocol):
    """Read access to the classification trees of all namespaces."""

    def find_by_name(self, name: str, namespace: str) -> ClassificationNode | None:
        """Return one node with exactly this display name; tie-break is store-defined."""
        ...

    def find_all(
        self,
        namespace: str,
        name_filter: str,
        parent_filter: ParentRef | None = None,
        *,
        include_unused: bool = True,
    ) -> Sequence[ClassificationNode]:
        """Return every matching node in store order.

        ``parent_filter=None`` leaves the parent unconstrained; ``ROOT`` restricts
        the query to top-level nodes.
        """
        ...

    def get(self, node_id: int) -> ClassificationNode: ...


@runtime_checkable
class NamespaceRepository(Protocol):
    """Catalog namespaces (classification dimensions)."""

    def exists(self, name: str) -> bool: ...

    def recount_usage(self, name: str) -> None: ...


@runtime_checkable
class ProductRepository(Protocol):
    """Products and their classification memberships."""

    def add(self, entity: Product) -> None: ...

    def id_for_sku(self, sku: str) -> int | None: ...

    def term_ids(self, product_id: int, namespace: str) -> set[int]: ...

    def set_terms(
        self,
        product_id: int,
        namespace: str,
        node_ids: Iterable[int],
        *,
        append: bool,
    ) -> None: ...
