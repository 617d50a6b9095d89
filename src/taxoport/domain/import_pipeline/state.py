"""Mutable run state shared by the import phases."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field


@dataclass(slots=True)
class ImportStats:
    total_rows: int = 0
    products_found: int = 0
    products_not_found: int = 0
    terms_updated: int = 0
    terms_skipped: int = 0
    terms_per_namespace: Counter[str] = field(default_factory=Counter[str])


@dataclass(slots=True)
class PendingChange:
    """Resolved node ids for one product, grouped by namespace.

    Ids keep the order in which they were first resolved; repeats are ignored.
    """

    sku: str
    product_id: int
    terms: dict[str, list[int]] = field(default_factory=dict[str, list[int]])

    def add(self, namespace: str, node_id: int) -> bool:
        ids = self.terms.setdefault(namespace, [])
        if node_id in ids:
            return False
        ids.append(node_id)
        return True

    def __bool__(self) -> bool:
        return any(self.terms.values())


@dataclass(slots=True)
class PreparedImport:
    changes: dict[str, PendingChange] = field(default_factory=dict[str, PendingChange])
    duplicate_skus: list[str] = field(default_factory=list[str])

    def put(self, change: PendingChange) -> None:
        self.changes[change.sku] = change

    def touched_namespaces(self) -> list[str]:
        seen: dict[str, None] = {}
        for change in self.changes.values():
            for namespace, ids in change.terms.items():
                if ids:
                    seen.setdefault(namespace, None)
        return list(seen)
