"""Resolve raw cell values to classification nodes.

A value is either a bare display name (``Shoes``) or a path walking down the
namespace tree (``Clothing > Shoes > Boots``). Bare names must be unique in
their namespace; paths are checked level by level against the parent chain.

Every failure comes back as a ``Failed`` value; nothing here raises for a
lookup miss, so the caller can carry on with the remaining cells of a row.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from taxoport.domain.model import HIERARCHY_SEPARATOR, ROOT, FailureKind

from .contracts import Failed, Resolved
from .ledger import ErrorLedger

if TYPE_CHECKING:
    from taxoport.domain.model import ParentRef
    from taxoport.domain.ports import ClassificationStore

    from .contracts import ResolutionResult

log = getLogger(__name__)

ROOT_LABEL = "root"


def is_hierarchical(raw_value: str) -> bool:
    return HIERARCHY_SEPARATOR in raw_value


def split_path(path: str) -> list[str]:
    return [level.strip() for level in path.split(HIERARCHY_SEPARATOR)]


def resolve_flat(store: ClassificationStore, name: str, namespace: str) -> ResolutionResult:
    """Resolve a single display name, rejecting names that occur more than once."""

    name = name.strip()
    node = store.find_by_name(name, namespace)
    if node is None:
        return Failed(FailureKind.NOT_FOUND, f'{namespace}: "{name}"')

    matches = store.find_all(namespace, name, include_unused=True)
    if len(matches) > 1:
        ids = ", ".join(str(match.id) for match in matches)
        return Failed(
            FailureKind.DUPLICATE_NAME,
            f'{namespace}: "{name}" (ids: {ids}) - use full path "parent > child"',
        )

    return Resolved(node)


def resolve_hierarchical(
    store: ClassificationStore,
    path: str,
    namespace: str,
) -> ResolutionResult:
    """Walk ``parent > child > ...`` from the root and return the deepest node.

    Stops at the first level that cannot be placed under the previous one. When a
    level name exists under several parents, the lookup restricted to the expected
    parent wins and its first match is used without a further duplicate check.
    """

    first, *rest = split_path(path)
    result = _resolve_level(store, first, namespace, parent=ROOT, path=path)
    for level_name in rest:
        if isinstance(result, Failed):
            return result
        result = _resolve_level(store, level_name, namespace, parent=result.node.id, path=path)
    return result


def _resolve_level(
    store: ClassificationStore,
    level_name: str,
    namespace: str,
    *,
    parent: ParentRef,
    path: str,
) -> ResolutionResult:
    node = store.find_by_name(level_name, namespace)
    if node is None:
        return Failed(
            FailureKind.NOT_FOUND,
            f'{namespace}: "{level_name}" in hierarchy "{path}"',
        )
    if node.parent == parent:
        return Resolved(node)

    children = store.find_all(namespace, level_name, parent_filter=parent, include_unused=True)
    if not children:
        return Failed(
            FailureKind.HIERARCHY_MISMATCH,
            f'{namespace}: term "{level_name}" not found as child of '
            f'"{_parent_label(store, parent)}" in hierarchy "{path}"',
        )
    return Resolved(children[0])


def _parent_label(store: ClassificationStore, parent: ParentRef) -> str:
    if parent is ROOT:
        return ROOT_LABEL
    return store.get(parent).name


class TermResolver:
    """Entry point used by the import pipeline, one instance per run.

    Failed resolutions are appended to ``ledger`` as well as returned.
    """

    def __init__(self, store: ClassificationStore, *, ledger: ErrorLedger | None = None) -> None:
        self._store = store
        self.ledger = ledger if ledger is not None else ErrorLedger()

    def resolve(self, raw_value: str, namespace: str) -> ResolutionResult:
        if not raw_value.strip():
            raise ValueError("Blank values must be skipped before resolution")

        if is_hierarchical(raw_value):
            result = resolve_hierarchical(self._store, raw_value, namespace)
        else:
            result = resolve_flat(self._store, raw_value, namespace)

        if isinstance(result, Failed):
            log.debug("Unresolved %s value: %s", result.kind, result.detail)
            self.ledger.record(result.kind, result.detail)
        return result
