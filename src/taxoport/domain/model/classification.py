"""Classification tree nodes as seen by the resolver.

Nodes belong to the catalog store; the domain only reads them. A node whose
``parent_id`` is ``None`` sits at the top of its namespace tree, which the
resolver addresses through the explicit ``ROOT`` marker.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Literal

HIERARCHY_SEPARATOR: Final[str] = " > "


class _RootMarker(Enum):
    ROOT = "root"

    def __repr__(self) -> str:
        return "ROOT"


ROOT: Final = _RootMarker.ROOT

type ParentRef = int | Literal[_RootMarker.ROOT]


@dataclass(frozen=True, slots=True)
class ClassificationNode:
    id: int
    name: str
    namespace: str
    parent_id: int | None = None

    @property
    def parent(self) -> ParentRef:
        return ROOT if self.parent_id is None else self.parent_id
