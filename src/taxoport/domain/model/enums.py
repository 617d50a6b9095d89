"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class FailureKind(StrEnum):
    """Closed set of reasons a term value could not be resolved."""

    NOT_FOUND = "not_found"
    HIERARCHY_MISMATCH = "hierarchy_mismatch"
    DUPLICATE_NAME = "duplicate_name"


class ImportIssue(StrEnum):
    """Row-level problems reported by the import pipeline (not resolver failures)."""

    PRODUCT_NOT_FOUND = "product_not_found"
    ALREADY_ASSIGNED = "already_assigned"


class ImportMode(StrEnum):
    UPDATE = "update"
    REPLACE = "replace"


type LedgerKind = FailureKind | ImportIssue
