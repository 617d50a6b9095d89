"""Import pipeline: validate the file, prepare change-sets, apply them, report."""

from __future__ import annotations

from .apply import ImportApplyError, apply_changes
from .csv_source import CsvLayout, CsvRow, CsvValidationError, check_namespaces, validate_csv
from .preparation import prepare_changes
from .report import KIND_TITLES, render_report, write_report
from .state import ImportStats, PendingChange, PreparedImport

__all__ = [
    "KIND_TITLES",
    "CsvLayout",
    "CsvRow",
    "CsvValidationError",
    "ImportApplyError",
    "ImportStats",
    "PendingChange",
    "PreparedImport",
    "apply_changes",
    "check_namespaces",
    "prepare_changes",
    "render_report",
    "validate_csv",
    "write_report",
]
