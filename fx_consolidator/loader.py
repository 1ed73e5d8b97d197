"""Aggregating loader: filter, parse, normalise currency and merge duplicates."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, MutableMapping

from fx_consolidator.config import LoaderConfig
from fx_consolidator.exceptions import FormatError, RateUnavailable
from fx_consolidator.fx import RateLike, RateTable, cross_rate
from fx_consolidator.ingestion.models import ExchangeRate, TransactionRecord
from fx_consolidator.ingestion.transaction_parser import TransactionLineParser
from fx_consolidator.utils.logger import get_logger

LOGGER = get_logger(__name__)

__all__ = ["AggregatingLoader", "Diagnostic", "LoadReport"]

STRUCTURAL_REJECTION = "structural_rejection"
FORMAT_ERROR = "format_error"
RATE_UNAVAILABLE = "rate_unavailable"
UNCONVERTED_CURRENCY = "unconverted_currency"


@dataclass(slots=True)
class Diagnostic:
    """A degraded-but-recovered condition observed while loading."""

    kind: str
    message: str
    line_number: int | None = None
    currency: str | None = None


@dataclass(slots=True)
class LoadReport:
    """Counters and diagnostics collected for one ``load`` call."""

    accepted: int = 0
    merged: int = 0
    skipped: int = 0
    converted: int = 0
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return bool(self.diagnostics)

    def of_kind(self, kind: str) -> list[Diagnostic]:
        return [entry for entry in self.diagnostics if entry.kind == kind]

    def record(
        self,
        kind: str,
        message: str,
        *,
        line_number: int | None = None,
        currency: str | None = None,
    ) -> Diagnostic:
        entry = Diagnostic(kind=kind, message=message, line_number=line_number, currency=currency)
        self.diagnostics.append(entry)
        return entry


class AggregatingLoader:
    """Build a business-key → record mapping from raw transaction lines.

    The loader owns its :class:`RateTable`. Every failure caused by input data
    (malformed lines, missing rates, unexpected files) is recorded on
    :attr:`report` instead of being raised, so a batch always completes.
    """

    def __init__(
        self,
        config: LoaderConfig | None = None,
        rates: RateTable | None = None,
    ) -> None:
        self.config = config or LoaderConfig()
        self.rates = rates if rates is not None else RateTable()
        self.parser = TransactionLineParser(self.config)
        self.report = LoadReport()
        self._context = self.config.decimal_context()

    def register_exchange_rate(self, pair: str, rate: RateLike) -> ExchangeRate:
        """Insert or overwrite ``pair`` in the loader's rate table."""

        entry = self.rates.register(pair, rate)
        LOGGER.debug("Registered %s = %s", pair, entry.rate)
        return entry

    def convert_to_reference(self, amount: Decimal, currency: str) -> Decimal:
        """Convert ``amount`` from ``currency`` into the reference currency.

        Returns ``amount`` unchanged (and records a diagnostic) when either
        pivot rate cannot be resolved.
        """

        return self._convert(amount, currency)[0]

    def _convert(
        self, amount: Decimal, currency: str, line_number: int | None = None
    ) -> tuple[Decimal, bool]:
        source_pair = self.config.rate_pair(currency)
        reference_pair = self.config.rate_pair(self.config.reference_currency)
        try:
            rate = cross_rate(
                self.rates.get(source_pair), self.rates.get(reference_pair), self._context
            )
        except RateUnavailable as exc:
            LOGGER.warning(
                "Amount %s %s left unchanged (%s → %s): %s",
                amount,
                currency,
                source_pair,
                reference_pair,
                exc,
            )
            self.report.record(
                RATE_UNAVAILABLE,
                f"{source_pair} / {reference_pair}: {exc}",
                line_number=line_number,
                currency=currency,
            )
            return amount, False
        return self._context.multiply(amount, rate), True

    def load(
        self,
        mapping: MutableMapping[str, TransactionRecord] | None,
        lines: Iterable[str] | None,
    ) -> MutableMapping[str, TransactionRecord] | None:
        """Merge ``lines`` into ``mapping`` and return it.

        Returns ``None`` when ``lines`` is ``None`` and a new empty dict when
        the input does not look like a transaction file.
        """

        if lines is None:
            return None
        self.report = LoadReport()
        target: MutableMapping[str, TransactionRecord] = {} if mapping is None else mapping
        return self._merge(target, lines)

    def _merge(
        self,
        target: MutableMapping[str, TransactionRecord],
        lines: Iterable[str],
    ) -> MutableMapping[str, TransactionRecord]:
        filtered = [line for line in lines if self.parser.is_structurally_valid(line)]
        if not filtered or not self.parser.is_header(filtered[0]):
            message = (
                "no structurally valid lines"
                if not filtered
                else f"first line lacks header marker {self.config.header_marker!r}"
            )
            LOGGER.warning("Rejecting input: %s", message)
            self.report.record(STRUCTURAL_REJECTION, message)
            return {}

        for line_number, line in enumerate(filtered[1:], start=2):
            if self.parser.is_header(line):
                LOGGER.debug("Skipping repeated header at line %s", line_number)
                continue
            try:
                record = self.parser.parse(line)
            except FormatError as exc:
                LOGGER.warning("Skipping line %s: %s", line_number, exc)
                self.report.skipped += 1
                self.report.record(FORMAT_ERROR, str(exc), line_number=line_number)
                continue
            self._normalise(record, line_number)
            existing = target.get(record.key)
            if existing is None:
                target[record.key] = record
                self.report.accepted += 1
            else:
                existing.merge_amount(record.amount, self._context)
                self.report.merged += 1

        LOGGER.info(
            "Loaded %s records (%s merged, %s skipped, %s converted)",
            self.report.accepted,
            self.report.merged,
            self.report.skipped,
            self.report.converted,
        )
        return target

    def _normalise(self, record: TransactionRecord, line_number: int) -> None:
        currency = record.currency
        if self.config.requires_conversion(currency):
            amount, converted = self._convert(record.amount, currency, line_number)
            record.set_amount(amount)
            if converted:
                self.report.converted += 1
        elif not self.config.is_known_currency(currency):
            self.report.record(
                UNCONVERTED_CURRENCY,
                f"{currency} is not configured for conversion; amount kept as-is",
                line_number=line_number,
                currency=currency,
            )
