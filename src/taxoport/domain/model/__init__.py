"""Public domain model surface."""

from __future__ import annotations

from taxoport.domain.model.classification import (
    HIERARCHY_SEPARATOR,
    ROOT,
    ClassificationNode,
    ParentRef,
)
from taxoport.domain.model.enums import FailureKind, ImportIssue, ImportMode, LedgerKind
from taxoport.domain.model.product import Product

__all__ = [
    "HIERARCHY_SEPARATOR",
    "ROOT",
    "ClassificationNode",
    "FailureKind",
    "ImportIssue",
    "ImportMode",
    "LedgerKind",
    "ParentRef",
    "Product",
]
