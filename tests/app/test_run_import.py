"""End-to-end import runs against an in-memory SQLite catalog."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

import pytest

from taxoport.adapters.sqlalchemy import (
    SqlAlchemyClassificationStore,
    SqlAlchemyNamespaceRepository,
)
from taxoport.app import run_import
from taxoport.config import ImportOptions
from taxoport.domain.import_pipeline import CsvValidationError
from taxoport.domain.model import FailureKind, ImportIssue, ImportMode, Product

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from taxoport.adapters.sqlalchemy import SqlAlchemyCatalogUnitOfWork

NOW = datetime(2026, 10, 19, 14, 5, 0)


@dataclass(frozen=True, slots=True)
class SeededCatalog:
    women_shoes: int
    men_shoes: int
    boots: int
    acme: int
    globex: int
    first_product: int
    second_product: int


@pytest.fixture
def catalog(
    sqlite_unit_of_work: Callable[[], SqlAlchemyCatalogUnitOfWork],
) -> SeededCatalog:
    with sqlite_unit_of_work() as uow:
        namespaces = SqlAlchemyNamespaceRepository(uow.session)
        namespaces.add("product_cat")
        namespaces.add("pa_brand")
        store = SqlAlchemyClassificationStore(uow.session)
        women = store.add("product_cat", "Women")
        men = store.add("product_cat", "Men")
        women_shoes = store.add("product_cat", "Shoes", women)
        men_shoes = store.add("product_cat", "Shoes", men)
        boots = store.add("product_cat", "Boots", men_shoes)
        acme = store.add("pa_brand", "Acme")
        globex = store.add("pa_brand", "Globex")
        first = Product(sku="A1")
        second = Product(sku="A2")
        uow.repositories.products.add(first)
        uow.repositories.products.add(second)
        uow.session.flush()
        uow.commit()

    assert first.id is not None
    assert second.id is not None
    return SeededCatalog(
        women_shoes=women_shoes.id,
        men_shoes=men_shoes.id,
        boots=boots.id,
        acme=acme.id,
        globex=globex.id,
        first_product=first.id,
        second_product=second.id,
    )


def _terms(
    factory: Callable[[], SqlAlchemyCatalogUnitOfWork],
    product_id: int,
    namespace: str,
) -> set[int]:
    with factory() as uow:
        return uow.repositories.products.term_ids(product_id, namespace)


def _write_csv(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "import.csv"
    path.write_text(content, encoding="utf-8")
    return path


def test_update_run_assigns_terms_and_writes_report(
    tmp_path: Path,
    catalog: SeededCatalog,
    sqlite_unit_of_work: Callable[[], SqlAlchemyCatalogUnitOfWork],
) -> None:
    csv_path = _write_csv(
        tmp_path,
        "sku,product_cat,pa_brand\n"
        "A1,Men > Shoes > Boots,Acme\n"
        "A2,Shoes,Globex\n"
        "ZZ9,Women,Acme\n",
    )

    outcome = run_import(
        csv_path,
        ImportOptions(log_dir=tmp_path / "logs"),
        unit_of_work_factory=sqlite_unit_of_work,
        clock=lambda: NOW,
    )

    assert outcome.products_updated == 2
    assert outcome.stats.total_rows == 3
    assert outcome.stats.products_found == 2
    assert outcome.stats.terms_updated == 3
    assert _terms(sqlite_unit_of_work, catalog.first_product, "product_cat") == {catalog.boots}
    assert _terms(sqlite_unit_of_work, catalog.first_product, "pa_brand") == {catalog.acme}
    assert _terms(sqlite_unit_of_work, catalog.second_product, "product_cat") == set()
    assert outcome.errors[ImportIssue.PRODUCT_NOT_FOUND] == ("ZZ9",)
    assert len(outcome.errors[FailureKind.DUPLICATE_NAME]) == 1

    with sqlite_unit_of_work() as uow:
        store = SqlAlchemyClassificationStore(uow.session)
        assert store.usage_count(catalog.acme) == 1
        assert store.usage_count(catalog.boots) == 1

    assert outcome.report_path == (
        tmp_path / "logs" / "taxonomy_update_results_2026-10-19_14-05-00.log"
    )
    report = outcome.report_path.read_text(encoding="utf-8")
    assert "Mode: UPDATE\n" in report
    assert "Products not found:\n- ZZ9\n" in report


def test_second_update_run_skips_existing_terms(
    tmp_path: Path,
    catalog: SeededCatalog,
    sqlite_unit_of_work: Callable[[], SqlAlchemyCatalogUnitOfWork],
) -> None:
    csv_path = _write_csv(tmp_path, "sku,pa_brand\nA1,Acme\n")
    options = ImportOptions(log_dir=tmp_path)

    run_import(csv_path, options, unit_of_work_factory=sqlite_unit_of_work)
    outcome = run_import(csv_path, options, unit_of_work_factory=sqlite_unit_of_work)

    assert outcome.products_updated == 0
    assert outcome.stats.terms_skipped == 1
    assert outcome.errors[ImportIssue.ALREADY_ASSIGNED] == ('A1: pa_brand "Acme"',)
    assert _terms(sqlite_unit_of_work, catalog.first_product, "pa_brand") == {catalog.acme}


def test_replace_run_swaps_namespace_terms(
    tmp_path: Path,
    catalog: SeededCatalog,
    sqlite_unit_of_work: Callable[[], SqlAlchemyCatalogUnitOfWork],
) -> None:
    run_import(
        _write_csv(tmp_path, "sku,product_cat,pa_brand\nA1,Women > Shoes,Acme\n"),
        ImportOptions(log_dir=tmp_path),
        unit_of_work_factory=sqlite_unit_of_work,
    )

    outcome = run_import(
        _write_csv(tmp_path, "sku,product_cat\nA1,Men > Shoes\n"),
        ImportOptions(mode=ImportMode.REPLACE, log_dir=tmp_path),
        unit_of_work_factory=sqlite_unit_of_work,
    )

    assert outcome.products_updated == 1
    assert _terms(sqlite_unit_of_work, catalog.first_product, "product_cat") == {
        catalog.men_shoes
    }
    assert _terms(sqlite_unit_of_work, catalog.first_product, "pa_brand") == {catalog.acme}


def test_dry_run_reports_without_writing(
    tmp_path: Path,
    catalog: SeededCatalog,
    sqlite_unit_of_work: Callable[[], SqlAlchemyCatalogUnitOfWork],
) -> None:
    outcome = run_import(
        _write_csv(tmp_path, "sku,pa_brand\nA1,Acme\nA2,Initech\n"),
        ImportOptions(dry_run=True, log_dir=tmp_path),
        unit_of_work_factory=sqlite_unit_of_work,
        clock=lambda: NOW,
    )

    assert outcome.products_updated == 0
    assert outcome.stats.terms_per_namespace == {"pa_brand": 1}
    assert outcome.errors[FailureKind.NOT_FOUND] == ('pa_brand: "Initech"',)
    assert _terms(sqlite_unit_of_work, catalog.first_product, "pa_brand") == set()
    assert "Mode: UPDATE (DRY RUN)" in outcome.report_path.read_text(encoding="utf-8")


def test_unknown_namespace_column_aborts_before_changes(
    tmp_path: Path,
    catalog: SeededCatalog,
    sqlite_unit_of_work: Callable[[], SqlAlchemyCatalogUnitOfWork],
) -> None:
    csv_path = _write_csv(tmp_path, "sku,pa_brand,pa_color\nA1,Acme,Red\n")

    with pytest.raises(CsvValidationError, match="Taxonomy does not exist: pa_color"):
        run_import(
            csv_path,
            ImportOptions(log_dir=tmp_path),
            unit_of_work_factory=sqlite_unit_of_work,
        )

    assert _terms(sqlite_unit_of_work, catalog.first_product, "pa_brand") == set()
    assert not list(tmp_path.glob("taxonomy_update_results_*.log"))
