"""Append-only collection of failures grouped by kind."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from taxoport.domain.model import FailureKind, ImportIssue

if TYPE_CHECKING:
    from collections.abc import Mapping

    from taxoport.domain.model import LedgerKind

LEDGER_KINDS: Final[tuple[LedgerKind, ...]] = (*FailureKind, *ImportIssue)


class ErrorLedger:
    """Failures recorded during one import run.

    Messages are kept per kind in insertion order and never deduplicated, so the
    same failure coming from two rows shows up twice in the report. Entries can
    only be removed all at once via ``clear``.
    """

    def __init__(self) -> None:
        self._buckets: dict[LedgerKind, list[str]] = {kind: [] for kind in LEDGER_KINDS}

    def record(self, kind: LedgerKind, message: str) -> None:
        if kind not in self._buckets:
            raise ValueError(f"Unknown ledger kind: {kind!r}")
        self._buckets[kind].append(message)

    def all(self) -> Mapping[LedgerKind, tuple[str, ...]]:
        """Return the non-empty buckets in a fixed kind order."""
        return {kind: tuple(messages) for kind, messages in self._buckets.items() if messages}

    def by_kind(self, kind: LedgerKind) -> tuple[str, ...]:
        return tuple(self._buckets.get(kind, ()))

    def has_any(self) -> bool:
        return any(self._buckets.values())

    def count(self, kind: LedgerKind) -> int:
        return len(self._buckets.get(kind, ()))

    def snapshot(self) -> dict[LedgerKind, tuple[str, ...]]:
        return dict(self.all())

    def clear(self) -> None:
        for messages in self._buckets.values():
            messages.clear()

    def __len__(self) -> int:
        return sum(len(messages) for messages in self._buckets.values())
