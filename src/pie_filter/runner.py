"""Command line entry point for filtering ledgers against a pie."""
from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import Iterable

from .allocation import filter_transactions
from .config import Settings
from .ingest import read_ledger, read_targets
from .logging_utils import configure_logging
from .normalizer import normalize_ledger
from .writer import unique_output_path, write_records

LOGGER = logging.getLogger(__name__)

GENERATED_STEM = "generated_file"


@dataclass(frozen=True)
class FilterReport:
    message: str
    total_invested: str
    output_file: Path


@dataclass(frozen=True)
class GenerateReport:
    message: str
    output_file: Path


def filter_stocks(
    all_data_file: str | PathLike[str],
    pie_file: str | PathLike[str],
    output_file: str | PathLike[str],
    settings: Settings,
) -> FilterReport:
    """Filter the ledger against the pie and write the result next to ``output_file``."""

    targets = read_targets(pie_file)
    ledger = read_ledger(
        all_data_file, buy_actions=settings.buy_actions, sell_actions=settings.sell_actions
    )
    result = filter_transactions(ledger, targets, base_currency=settings.base_currency)

    requested = Path(output_file)
    destination = unique_output_path(requested.parent, requested.stem, style="filtered")
    write_records(destination, result.transactions)

    return FilterReport(
        message="Filtering complete",
        total_invested=f"{result.remaining_target:.2f}",
        output_file=destination,
    )


def generate_all_data_csv(all_data_file: str | PathLike[str], settings: Settings) -> GenerateReport:
    """Export every buy and sell of the ledger into the downloads directory."""

    ledger = read_ledger(
        all_data_file, buy_actions=settings.buy_actions, sell_actions=settings.sell_actions
    )
    records = normalize_ledger(ledger)
    destination = unique_output_path(settings.downloads_dir, GENERATED_STEM, style="generated")
    write_records(destination, records)
    return GenerateReport(message="CSV generation complete", output_file=destination)


def _serve(settings: Settings) -> None:
    import uvicorn

    from .app import create_app

    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


def parse_args(args: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging output",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    filter_cmd = commands.add_parser("filter", help="Cap ledger rows at the pie's invested values")
    filter_cmd.add_argument("all_data_file", help="Broker ledger export (CSV)")
    filter_cmd.add_argument("pie_file", help="Pie export with invested values (CSV)")
    filter_cmd.add_argument("output_file", help="Output path; a timestamp suffix is added")

    generate_cmd = commands.add_parser("generate", help="Export all buys and sells")
    generate_cmd.add_argument("all_data_file", help="Broker ledger export (CSV)")

    commands.add_parser("serve", help="Run the HTTP API")
    return parser.parse_args(args=None if args is None else list(args))


def main(argv: Iterable[str] | None = None) -> int:
    options = parse_args(argv)
    settings = Settings.load()
    configure_logging(settings, verbose=options.verbose)

    if options.command == "serve":
        _serve(settings)
        return 0

    try:
        if options.command == "filter":
            report = filter_stocks(
                options.all_data_file, options.pie_file, options.output_file, settings
            )
            LOGGER.info("Total invested: %s", report.total_invested)
        else:
            report = generate_all_data_csv(options.all_data_file, settings)
    except OSError:
        LOGGER.exception("Failed to run %s", options.command)
        return 1

    print(report.output_file)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
