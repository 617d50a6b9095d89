from __future__ import annotations

import logging
from pathlib import Path

import pytest

from taxoport.app import ImportOutcome
from taxoport.config import DEFAULT_BATCH_SIZE, ImportOptions
from taxoport.domain.import_pipeline import CsvValidationError, ImportStats
from taxoport.domain.model import FailureKind, ImportMode
from taxoport.ui import cli as cli_module


def _outcome(tmp_path: Path) -> ImportOutcome:
    return ImportOutcome(
        stats=ImportStats(total_rows=2, products_found=1),
        errors={FailureKind.NOT_FOUND: ('pa_brand: "Initech"',)},
        report_path=tmp_path / "report.log",
        elapsed=0.5,
        products_updated=1,
    )


@pytest.fixture(autouse=True)
def _log_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TAXOPORT_LOG_DIR", str(tmp_path / "logs"))


def test_cli_defaults(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    captured: dict[str, object] = {}

    def fake_run_import(csv_path: Path, options: ImportOptions) -> ImportOutcome:
        captured["csv_path"] = csv_path
        captured["options"] = options
        return _outcome(tmp_path)

    monkeypatch.setattr(cli_module, "run_import", fake_run_import)

    cli_module.main(["products.csv"])

    options = captured["options"]
    assert isinstance(options, ImportOptions)
    assert captured["csv_path"] == Path("products.csv")
    assert options.mode is ImportMode.UPDATE
    assert not options.dry_run
    assert options.delimiter == ","
    assert options.skip_lines == 0
    assert options.batch_size == DEFAULT_BATCH_SIZE
    assert options.log_dir == (tmp_path / "logs").resolve()


def test_cli_with_flags(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    captured: dict[str, ImportOptions] = {}

    def fake_run_import(_csv_path: Path, options: ImportOptions) -> ImportOutcome:
        captured["options"] = options
        return _outcome(tmp_path)

    monkeypatch.setattr(cli_module, "run_import", fake_run_import)
    monkeypatch.setenv("TAXOPORT_MAX_FILE_SIZE", "2048")

    cli_module.main(
        [
            "products.csv",
            "--mode",
            "replace",
            "--dry-run",
            "--delimiter",
            ";",
            "--skip-lines",
            "2",
            "--batch-size",
            "25",
        ]
    )

    options = captured["options"]
    assert options.mode is ImportMode.REPLACE
    assert options.dry_run
    assert options.delimiter == ";"
    assert options.skip_lines == 2
    assert options.batch_size == 25
    assert options.max_file_size == 2048


def test_cli_logs_summary(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    monkeypatch.setattr(cli_module, "run_import", lambda *_: _outcome(tmp_path))

    with caplog.at_level(logging.INFO, logger=cli_module.__name__):
        cli_module.main(["products.csv"])

    assert "Total rows processed: 2" in caplog.text
    assert "Terms not found: 1" in caplog.text
    assert "Detailed report saved" in caplog.text


@pytest.mark.parametrize(
    "argv",
    [
        ["products.csv", "--batch-size", "0"],
        ["products.csv", "--batch-size", "5000"],
        ["products.csv", "--delimiter", "::"],
        ["products.csv", "--skip-lines", "-1"],
    ],
)
def test_cli_rejects_invalid_options(monkeypatch: pytest.MonkeyPatch, argv: list[str]) -> None:
    def fake_run_import(*_: object) -> ImportOutcome:
        raise AssertionError("run_import should not be called")

    monkeypatch.setattr(cli_module, "run_import", fake_run_import)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(argv)

    assert excinfo.value.code == 2


def test_cli_rejects_unknown_mode() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["products.csv", "--mode", "merge"])

    assert excinfo.value.code == 2


def test_cli_exit_code_for_invalid_file(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run_import(*_: object) -> ImportOutcome:
        raise CsvValidationError("File not found: products.csv")

    monkeypatch.setattr(cli_module, "run_import", fake_run_import)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["products.csv"])

    assert excinfo.value.code == 2


def test_cli_exit_code_for_failed_run(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run_import(*_: object) -> ImportOutcome:
        raise RuntimeError("database is locked")

    monkeypatch.setattr(cli_module, "run_import", fake_run_import)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["products.csv"])

    assert excinfo.value.code == 1
