"""Plain-text run report and its log file."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Final

from taxoport.domain.model import FailureKind, ImportIssue

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import datetime
    from pathlib import Path

    from taxoport.domain.model import ImportMode, LedgerKind

    from .state import ImportStats

log = getLogger(__name__)

REPORT_FILENAME_PREFIX: Final[str] = "taxonomy_update_results_"

KIND_TITLES: Final[dict[LedgerKind, str]] = {
    ImportIssue.PRODUCT_NOT_FOUND: "Products not found",
    FailureKind.NOT_FOUND: "Terms not found",
    FailureKind.HIERARCHY_MISMATCH: "Hierarchy mismatches",
    FailureKind.DUPLICATE_NAME: "Duplicate terms found",
    ImportIssue.ALREADY_ASSIGNED: "Already existing taxonomies (skipped)",
}


def render_report(
    *,
    csv_path: Path,
    mode: ImportMode,
    elapsed: float,
    stats: ImportStats,
    errors: Mapping[LedgerKind, tuple[str, ...]],
    now: datetime,
    dry_run: bool = False,
) -> str:
    lines = [
        "=== TAXONOMY UPDATE RESULTS ===",
        f"Date: {now:%Y-%m-%d %H:%M:%S}",
        f"CSV File: {csv_path.name}",
        f"Mode: {mode.value.upper()}" + (" (DRY RUN)" if dry_run else ""),
        f"Execution Time: {elapsed:.2f} seconds",
        "",
        "STATISTICS:",
        f"- Total rows processed: {stats.total_rows}",
        f"- Products found: {stats.products_found}",
        f"- Products not found: {stats.products_not_found}",
        f"- Taxonomies updated: {stats.terms_updated}",
        f"- Taxonomies skipped (already existed): {stats.terms_skipped}",
    ]

    if stats.terms_per_namespace:
        lines.append("- Terms per taxonomy:")
        lines.extend(
            f"  * {namespace}: {count}" for namespace, count in stats.terms_per_namespace.items()
        )

    if stats.total_rows > 0 and elapsed > 0:
        lines.append(f"- Processing rate: {stats.total_rows / elapsed:.2f} rows/sec")

    lines.append("")

    if any(errors.values()):
        lines.append("ERRORS:")
        for kind, title in KIND_TITLES.items():
            messages = errors.get(kind, ())
            if not messages:
                continue
            lines.append(f"{title}:")
            lines.extend(f"- {message}" for message in messages)
            lines.append("")

    return "\n".join(lines) + "\n"


def write_report(report: str, *, log_dir: Path, now: datetime) -> Path:
    """Write ``report`` to a timestamped file under ``log_dir`` and return its path."""

    log_dir.mkdir(parents=True, exist_ok=True)
    path = log_dir / f"{REPORT_FILENAME_PREFIX}{now:%Y-%m-%d_%H-%M-%S}.log"
    path.write_text(report, encoding="utf-8")
    log.debug("Report written to %s", path)
    return path
