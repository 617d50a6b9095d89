"""Catalog products whose classification memberships get updated."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False, kw_only=True)
class Product:
    sku: str
    name: str | None = None
    id: int | None = None
