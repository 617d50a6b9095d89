"""Reading and validating the delimited input file.

Expected layout: optional leading lines (skipped), a header row whose first
column is ``sku`` and whose remaining columns name catalog namespaces, then one
row per product.
"""

from __future__ import annotations

import csv
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path
    from typing import TextIO

    from taxoport.config import ImportOptions
    from taxoport.domain.ports import NamespaceRepository

log = getLogger(__name__)

SKU_HEADER: Final[str] = "sku"
_BYTES_PER_MB: Final[int] = 1024 * 1024


class CsvValidationError(ValueError):
    """Raised when the input file cannot be imported."""


@dataclass(frozen=True, slots=True)
class CsvLayout:
    headers: tuple[str, ...]
    data_rows: int

    @property
    def namespaces(self) -> tuple[str, ...]:
        return self.headers[1:]


@dataclass(frozen=True, slots=True)
class CsvRow:
    line_number: int
    cells: tuple[str, ...]

    @property
    def is_blank(self) -> bool:
        return not any(cell.strip() for cell in self.cells)


def validate_csv(path: Path, options: ImportOptions) -> CsvLayout:
    """Check file existence, size, encoding and header structure."""

    if not path.is_file():
        raise CsvValidationError(f"File not found: {path}")

    file_size = path.stat().st_size
    if file_size > options.max_file_size:
        raise CsvValidationError(
            f"File too large: {file_size / _BYTES_PER_MB:.2f}MB. "
            f"Maximum: {options.max_file_size / _BYTES_PER_MB:.2f}MB"
        )

    bad_line = _first_undecodable_line(path)
    if bad_line is not None:
        raise CsvValidationError(f"File is not valid UTF-8: line {bad_line}")

    with _open(path) as handle:
        reader = csv.reader(handle, delimiter=options.delimiter)
        _skip(reader, options.skip_lines)
        headers = next(reader, None)
        data_rows = sum(1 for _ in reader)

    if not headers or not headers[0].strip():
        raise CsvValidationError("Failed to read CSV headers or first column is empty")

    headers = [header.strip() for header in headers]
    if headers[0].lower() != SKU_HEADER:
        raise CsvValidationError(f"First column must be SKU, found: {headers[0]}")
    if len(headers) < 2:  # noqa: PLR2004
        raise CsvValidationError("CSV must contain at least 2 columns (SKU + taxonomies)")

    layout = CsvLayout(headers=tuple(headers), data_rows=data_rows)
    log.debug(
        "CSV validation completed: columns=%s, taxonomies=%s",
        len(layout.headers),
        ", ".join(layout.namespaces),
    )
    return layout


def check_namespaces(layout: CsvLayout, namespaces: NamespaceRepository) -> None:
    """Ensure every namespace column refers to an existing catalog namespace."""

    for namespace in layout.namespaces:
        if not namespaces.exists(namespace):
            raise CsvValidationError(f"Taxonomy does not exist: {namespace}")


def iter_rows(path: Path, options: ImportOptions) -> Iterator[CsvRow]:
    """Yield the data rows after the header, numbered as lines of the file (1-based)."""

    with _open(path) as handle:
        reader = csv.reader(handle, delimiter=options.delimiter)
        _skip(reader, options.skip_lines)
        next(reader, None)
        line_number = options.skip_lines + 2
        for cells in reader:
            yield CsvRow(line_number=line_number, cells=tuple(cells))
            line_number += 1


def _open(path: Path) -> TextIO:
    return path.open(encoding="utf-8-sig", newline="")


def _skip(reader: Iterator[list[str]], count: int) -> None:
    for _ in range(count):
        if next(reader, None) is None:
            return


def _first_undecodable_line(path: Path) -> int | None:
    # 0x0A never occurs inside a multi-byte UTF-8 sequence, so lines decode independently
    with path.open("rb") as handle:
        for line_number, raw_line in enumerate(handle, start=1):
            try:
                raw_line.decode("utf-8")
            except UnicodeDecodeError:
                return line_number
    return None
