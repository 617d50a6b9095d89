"""Application orchestration entry points."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from logging import getLogger
from typing import TYPE_CHECKING

from taxoport.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    is_started,
    startup,
)
from taxoport.domain.import_pipeline import (
    ImportStats,
    apply_changes,
    check_namespaces,
    prepare_changes,
    render_report,
    validate_csv,
    write_report,
)
from taxoport.domain.ports.unit_of_work import CatalogUnitOfWork
from taxoport.domain.resolution import ErrorLedger, TermResolver

if TYPE_CHECKING:
    from pathlib import Path

    from taxoport.config import ImportOptions
    from taxoport.domain.model import LedgerKind

UnitOfWorkFactory = Callable[[], CatalogUnitOfWork]

log = getLogger(__name__)


@dataclass(slots=True)
class ImportOutcome:
    """Summary of one import run."""

    stats: ImportStats
    errors: dict[LedgerKind, tuple[str, ...]]
    report_path: Path
    elapsed: float
    products_updated: int


def _now() -> datetime:
    return datetime.now().astimezone()


def run_import(
    csv_path: Path,
    options: ImportOptions,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    clock: Callable[[], datetime] = _now,
) -> ImportOutcome:
    """Validate, resolve and apply one delimited file, then write the run report."""

    started = time.perf_counter()
    if unit_of_work_factory is None:
        if not is_started():
            startup()
        unit_of_work_factory = SqlAlchemyCatalogUnitOfWork

    log.info(
        "Starting taxonomy import: file=%s, mode=%s, dry_run=%s, batch_size=%s",
        csv_path,
        options.mode,
        options.dry_run,
        options.batch_size,
    )

    layout = validate_csv(csv_path, options)
    stats = ImportStats()
    ledger = ErrorLedger()

    with unit_of_work_factory() as uow:
        check_namespaces(layout, uow.repositories.namespaces)
        resolver = TermResolver(uow.repositories.classifications, ledger=ledger)
        prepared = prepare_changes(
            csv_path,
            layout,
            resolver=resolver,
            products=uow.repositories.products,
            options=options,
            stats=stats,
        )

    products_updated = 0
    if options.dry_run:
        log.info("DRY RUN MODE: No changes will be made")
    else:
        products_updated = apply_changes(
            prepared,
            unit_of_work_factory=unit_of_work_factory,
            options=options,
            stats=stats,
        )

    elapsed = time.perf_counter() - started
    now = clock()
    errors = ledger.snapshot()
    report = render_report(
        csv_path=csv_path,
        mode=options.mode,
        elapsed=elapsed,
        stats=stats,
        errors=errors,
        now=now,
        dry_run=options.dry_run,
    )
    report_path = write_report(report, log_dir=options.log_dir, now=now)

    log.info(
        "Finished taxonomy import: rows=%s, products_found=%s, updated=%s, skipped=%s",
        stats.total_rows,
        stats.products_found,
        stats.terms_updated,
        stats.terms_skipped,
    )

    return ImportOutcome(
        stats=stats,
        errors=errors,
        report_path=report_path,
        elapsed=elapsed,
        products_updated=products_updated,
    )
