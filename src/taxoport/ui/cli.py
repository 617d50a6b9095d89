from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from taxoport.app import run_import
from taxoport.config import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_DELIMITER,
    ConfigurationError,
    configure_logging,
    get_import_options,
)
from taxoport.domain.import_pipeline import KIND_TITLES, CsvValidationError
from taxoport.domain.model import ImportMode

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from taxoport.app import ImportOutcome
    from taxoport.config import ImportOptions

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Assign catalog taxonomy terms to products from a CSV file",
    )
    parser.add_argument("file", type=Path, help="Path to the CSV file (first column: SKU)")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in ImportMode],
        default=ImportMode.UPDATE.value,
        help="update adds to existing terms, replace swaps them out (default: %(default)s)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve and report without changing the catalog",
    )
    parser.add_argument("--verbose", action="store_true", help="Verbose output")
    parser.add_argument(
        "--delimiter",
        default=DEFAULT_DELIMITER,
        help="CSV delimiter (default: %(default)s)",
    )
    parser.add_argument(
        "--skip-lines",
        type=int,
        default=0,
        help="Number of lines to skip before the header (default: %(default)s)",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=DEFAULT_BATCH_SIZE,
        help="Number of products to update per commit (default: %(default)s)",
    )
    return parser.parse_args(list(argv))


def _build_options(args: argparse.Namespace) -> ImportOptions:
    return get_import_options(
        mode=ImportMode(args.mode),
        dry_run=args.dry_run,
        delimiter=args.delimiter,
        skip_lines=args.skip_lines,
        batch_size=args.batch_size,
        show_progress=sys.stderr.isatty(),
    )


def _log_summary(outcome: ImportOutcome) -> None:
    stats = outcome.stats
    log.info("=== IMPORT RESULTS ===")
    log.info("Total rows processed: %s", stats.total_rows)
    log.info("Products found: %s", stats.products_found)
    log.info("Products not found: %s", stats.products_not_found)
    log.info("Taxonomies updated: %s", stats.terms_updated)
    log.info("Taxonomies skipped: %s", stats.terms_skipped)
    log.info("Execution time: %.2f sec", outcome.elapsed)
    for kind, title in KIND_TITLES.items():
        messages = outcome.errors.get(kind, ())
        if messages:
            log.warning("%s: %s", title, len(messages))
    log.info("Detailed report saved: %s", outcome.report_path)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        if parsed_args.verbose:
            configure_logging(level=logging.DEBUG, force=True)
        options = _build_options(parsed_args)
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        outcome = run_import(parsed_args.file, options)
    except CsvValidationError:
        log.exception("Invalid import file")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during import")
        sys.exit(1)

    _log_summary(outcome)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
