"""Result types produced by term resolution."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from taxoport.domain.model import ClassificationNode, FailureKind


class ResolutionStatus(StrEnum):
    RESOLVED = "resolved"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class Resolved:
    """The value resolved to exactly one node."""

    node: ClassificationNode
    status: Literal[ResolutionStatus.RESOLVED] = ResolutionStatus.RESOLVED


@dataclass(frozen=True, slots=True)
class Failed:
    """The value could not be resolved; ``detail`` is the human-readable report line."""

    kind: FailureKind
    detail: str
    status: Literal[ResolutionStatus.FAILED] = ResolutionStatus.FAILED


type ResolutionResult = Resolved | Failed
