"""CLI + helpers for consolidating a tab-delimited transaction file."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from decimal import Context, Decimal
from pathlib import Path
from typing import Mapping, MutableMapping, Sequence

from fx_consolidator.config import LoaderConfig
from fx_consolidator.db.rate_store import ExchangeRateStore
from fx_consolidator.fx import RateLike
from fx_consolidator.ingestion.models import TransactionRecord
from fx_consolidator.ingestion.rates_csv import ExchangeRateCSVParser
from fx_consolidator.ingestion.source import read_lines
from fx_consolidator.loader import AggregatingLoader, LoadReport
from fx_consolidator.utils.logger import get_logger, set_level

LOGGER = get_logger(__name__)

__all__ = ["ConsolidationResult", "consolidate_file", "format_records", "parse_args", "main"]


@dataclass(slots=True)
class ConsolidationResult:
    """Records produced for one input file plus the loader's report."""

    records: MutableMapping[str, TransactionRecord]
    report: LoadReport
    rates_registered: int = 0


def _parse_rate_option(value: str) -> tuple[str, str]:
    pair, sep, rate = value.partition("=")
    if not sep or not pair.strip() or not rate.strip():
        raise argparse.ArgumentTypeError(f"expected PAIR=RATE, got {value!r}")
    return pair.strip().upper(), rate.strip()


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--input", dest="input_path", required=True, help="Transaction file")
    parser.add_argument("--rates", dest="rates_csv", help="CSV file with Pair,Rate columns")
    parser.add_argument(
        "--rate",
        dest="rates",
        action="append",
        type=_parse_rate_option,
        default=[],
        metavar="PAIR=RATE",
        help="Register a single rate, e.g. CHF/USD=0.9 (repeatable)",
    )
    parser.add_argument("--db", dest="db_path", help="SQLite rate store to provision rates from")
    parser.add_argument("--reference", default="EUR", help="Reference currency (default: EUR)")
    parser.add_argument(
        "--convert",
        help="Comma separated currencies to convert (default: CHF,GBP)",
    )
    parser.add_argument(
        "--places",
        type=int,
        default=2,
        help="Decimal places used when printing amounts (default: 2)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def consolidate_file(
    input_path: str | Path,
    *,
    config: LoaderConfig | None = None,
    rates_csv: str | Path | None = None,
    rates: Mapping[str, RateLike] | None = None,
    db_path: str | Path | None = None,
) -> ConsolidationResult:
    """Read ``input_path`` and return the consolidated records.

    Rates are registered in order: rate store, CSV file, then ``rates`` so that
    explicitly supplied values win.
    """

    loader = AggregatingLoader(config)
    if db_path is not None:
        with ExchangeRateStore(db_path) as store:
            store.provision(loader)
    if rates_csv is not None:
        for rate in ExchangeRateCSVParser().parse(rates_csv):
            loader.register_exchange_rate(rate.pair, rate)
    for pair, value in (rates or {}).items():
        loader.register_exchange_rate(pair, value)

    lines = read_lines(input_path)
    records = loader.load({}, lines)
    return ConsolidationResult(
        records=records if records is not None else {},
        report=loader.report,
        rates_registered=len(loader.rates),
    )


def format_records(records: Mapping[str, TransactionRecord], places: int = 2) -> list[str]:
    """Render records as ``key<TAB>amount`` lines sorted by key."""

    quantum = Decimal(1).scaleb(-places)
    return [
        f"{key}\t{_quantize(record.amount, quantum)}"
        for key, record in sorted(records.items())
    ]


def _quantize(amount: Decimal, quantum: Decimal) -> Decimal:
    # quantize needs room for every integer digit plus the requested places
    context = Context(prec=max(28, amount.adjusted() - quantum.as_tuple().exponent + 2))
    return amount.quantize(quantum, context=context)


def _build_config(args: argparse.Namespace) -> LoaderConfig:
    config = LoaderConfig(reference_currency=args.reference)
    if args.convert:
        codes = [code for code in args.convert.split(",") if code.strip()]
        config = config.with_conversions(codes)
    return config


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        set_level(logging.DEBUG)
    try:
        config = _build_config(args)
    except ValueError as exc:
        LOGGER.error("Invalid configuration: %s", exc)
        return 2
    try:
        result = consolidate_file(
            args.input_path,
            config=config,
            rates_csv=args.rates_csv,
            rates=dict(args.rates),
            db_path=args.db_path,
        )
    except FileNotFoundError as exc:
        LOGGER.error("File not found: %s", exc)
        return 1
    except ValueError as exc:
        LOGGER.error("Invalid rate input: %s", exc)
        return 2
    if result.report.has_warnings:
        LOGGER.warning("%s diagnostics recorded while loading", len(result.report.diagnostics))
    for line in format_records(result.records, args.places):
        print(line)
    LOGGER.info(
        "Consolidated %s records from %s (%s rates registered)",
        len(result.records),
        args.input_path,
        result.rates_registered,
    )
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
