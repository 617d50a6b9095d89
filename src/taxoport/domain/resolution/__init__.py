"""Term resolution: raw cell values to classification nodes."""

from __future__ import annotations

from .contracts import Failed, ResolutionResult, ResolutionStatus, Resolved
from .ledger import LEDGER_KINDS, ErrorLedger
from .resolve import (
    TermResolver,
    is_hierarchical,
    resolve_flat,
    resolve_hierarchical,
    split_path,
)

__all__ = [
    "LEDGER_KINDS",
    "ErrorLedger",
    "Failed",
    "ResolutionResult",
    "ResolutionStatus",
    "Resolved",
    "TermResolver",
    "is_hierarchical",
    "resolve_flat",
    "resolve_hierarchical",
    "split_path",
]
