"""Write prepared change-sets to the catalog."""

from __future__ import annotations

from itertools import batched
from logging import getLogger
from typing import TYPE_CHECKING

from tqdm import tqdm

if TYPE_CHECKING:
    from collections.abc import Callable

    from taxoport.config import ImportOptions
    from taxoport.domain.ports import CatalogUnitOfWork

    from .state import ImportStats, PreparedImport

log = getLogger(__name__)


class ImportApplyError(RuntimeError):
    """Raised when the catalog rejects a membership update; aborts the run."""

    def __init__(self, sku: str, message: str) -> None:
        super().__init__(f"Database error for product {sku}: {message}")
        self.sku = sku


def apply_changes(
    prepared: PreparedImport,
    *,
    unit_of_work_factory: Callable[[], CatalogUnitOfWork],
    options: ImportOptions,
    stats: ImportStats,
) -> int:
    """Apply every pending change, committing once per ``options.batch_size`` products.

    Returns the number of products updated. In update mode node ids are added to
    the existing memberships; in replace mode they replace the namespace's
    memberships of that product.
    """

    if not prepared.changes:
        log.warning("No data to process")
        return 0

    updated = 0
    changes = list(prepared.changes.values())
    with (
        unit_of_work_factory() as uow,
        tqdm(
            total=len(changes),
            desc="Updating products",
            unit="product",
            disable=not options.show_progress,
        ) as progress,
    ):
        products = uow.repositories.products
        for batch in batched(changes, options.batch_size):
            for change in batch:
                try:
                    for namespace, node_ids in change.terms.items():
                        products.set_terms(
                            change.product_id,
                            namespace,
                            node_ids,
                            append=options.append,
                        )
                        stats.terms_updated += len(node_ids)
                except Exception as exc:
                    log.exception("Failed to update product %s", change.sku)
                    raise ImportApplyError(change.sku, str(exc)) from exc
                updated += 1
                progress.update()
            uow.commit()
            log.debug("Committed batch of %s products", len(batch))

        for namespace in prepared.touched_namespaces():
            uow.repositories.namespaces.recount_usage(namespace)
        uow.commit()

    log.debug("Database update completed: products=%s", updated)
    return updated
