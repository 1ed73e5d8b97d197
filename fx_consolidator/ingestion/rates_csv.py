"""CSV helpers for reading USD-pivot exchange rates."""

from __future__ import annotations

import csv
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Iterable

from fx_consolidator.ingestion.models import ExchangeRate
from fx_consolidator.utils.logger import get_logger

LOGGER = get_logger(__name__)

CSV_HEADER = ("Pair", "Rate")

__all__ = ["CSV_HEADER", "ExchangeRateCSVParser"]


class ExchangeRateCSVParser:
    """Parse ``Pair,Rate`` CSV files such as::

        Pair,Rate
        CHF/USD,0.9
        EUR/USD,1.1
    """

    def __init__(self, *, source: str = "csv") -> None:
        self.source = source

    def parse(self, csv_path: str | Path) -> list[ExchangeRate]:
        path = Path(csv_path)
        if not path.exists():
            raise FileNotFoundError(path)

        with path.open("r", newline="", encoding="utf-8") as handle:
            reader = csv.DictReader(handle)
            reader.fieldnames = self._validate_header(reader.fieldnames)
            rates: list[ExchangeRate] = []
            for row_number, row in enumerate(reader, start=2):
                pair = (row.get("Pair") or "").strip().upper()
                rate_raw = (row.get("Rate") or "").strip()
                if not pair:
                    continue
                try:
                    rate = Decimal(rate_raw)
                except InvalidOperation:
                    LOGGER.warning("Skipping %s row %s: invalid rate %r", path.name, row_number, rate_raw)
                    continue
                rates.append(ExchangeRate(pair=pair, rate=rate, source=self.source))
        return rates

    @staticmethod
    def _validate_header(fieldnames: Iterable[str] | None) -> list[str]:
        if not fieldnames:
            raise ValueError("CSV file does not contain a header row")
        normalized = [field.strip() for field in fieldnames]
        if normalized[: len(CSV_HEADER)] != list(CSV_HEADER):
            raise ValueError("Unexpected CSV header format")
        return normalized
