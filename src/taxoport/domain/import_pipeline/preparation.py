"""Turn input rows into per-product change-sets.

Each non-blank namespace cell goes through the term resolver. Resolution
failures are already on the ledger by the time they come back, so the row just
moves on to its next cell; only the resolved node ids end up in the change-set.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from tqdm import tqdm

from taxoport.domain.model import ImportIssue, ImportMode
from taxoport.domain.resolution import Resolved

from .csv_source import iter_rows
from .state import ImportStats, PendingChange, PreparedImport

if TYPE_CHECKING:
    from pathlib import Path

    from taxoport.config import ImportOptions
    from taxoport.domain.ports import ProductRepository
    from taxoport.domain.resolution import TermResolver

    from .csv_source import CsvLayout, CsvRow

log = getLogger(__name__)


def prepare_changes(
    path: Path,
    layout: CsvLayout,
    *,
    resolver: TermResolver,
    products: ProductRepository,
    options: ImportOptions,
    stats: ImportStats,
) -> PreparedImport:
    """Read every data row, resolve its cells and collect pending changes."""

    prepared = PreparedImport()
    seen_skus: set[str] = set()
    ledger = resolver.ledger

    with tqdm(
        total=layout.data_rows,
        desc="Preparing data",
        unit="row",
        disable=not options.show_progress,
    ) as progress:
        for row in iter_rows(path, options):
            stats.total_rows += 1
            progress.update()

            if row.is_blank:
                continue

            if len(row.cells) != len(layout.headers):
                log.warning(
                    "Line %s: incorrect number of columns (%s instead of %s)",
                    row.line_number,
                    len(row.cells),
                    len(layout.headers),
                )

            sku = row.cells[0].strip()
            if not sku:
                log.warning("Line %s: empty SKU", row.line_number)
                continue

            if sku in seen_skus:
                prepared.duplicate_skus.append(sku)
            seen_skus.add(sku)

            product_id = products.id_for_sku(sku)
            if product_id is None:
                ledger.record(ImportIssue.PRODUCT_NOT_FOUND, sku)
                stats.products_not_found += 1
                continue

            stats.products_found += 1
            change = _change_for_row(
                row,
                sku=sku,
                product_id=product_id,
                layout=layout,
                resolver=resolver,
                products=products,
                mode=options.mode,
                stats=stats,
            )
            if change:
                prepared.put(change)

    if prepared.duplicate_skus:
        unique = ", ".join(dict.fromkeys(prepared.duplicate_skus))
        log.warning("Duplicate SKUs found: %s", unique)

    log.debug("Data preparation completed: products to process=%s", len(prepared.changes))
    return prepared


def _change_for_row(
    row: CsvRow,
    *,
    sku: str,
    product_id: int,
    layout: CsvLayout,
    resolver: TermResolver,
    products: ProductRepository,
    mode: ImportMode,
    stats: ImportStats,
) -> PendingChange:
    change = PendingChange(sku=sku, product_id=product_id)
    existing_by_namespace: dict[str, set[int]] = {}

    for namespace, cell in zip(layout.namespaces, row.cells[1:], strict=False):
        value = cell.strip()
        if not value:
            continue

        result = resolver.resolve(value, namespace)
        if not isinstance(result, Resolved):
            continue
        node = result.node

        if mode is ImportMode.UPDATE:
            if namespace not in existing_by_namespace:
                existing_by_namespace[namespace] = products.term_ids(product_id, namespace)
            if node.id in existing_by_namespace[namespace]:
                resolver.ledger.record(
                    ImportIssue.ALREADY_ASSIGNED,
                    f'{sku}: {namespace} "{value}"',
                )
                stats.terms_skipped += 1
                continue

        if change.add(namespace, node.id):
            stats.terms_per_namespace[namespace] += 1

    return change
