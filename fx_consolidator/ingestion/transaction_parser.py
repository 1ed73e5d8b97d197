"""Parser turning tab-delimited transaction lines into records."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from fx_consolidator.config import LoaderConfig
from fx_consolidator.exceptions import FormatError
from fx_consolidator.ingestion.models import TransactionRecord

__all__ = ["TransactionLineParser"]


class TransactionLineParser:
    """Parse a single line laid out as company code, descriptors, currency, amount."""

    def __init__(self, config: LoaderConfig | None = None) -> None:
        self.config = config or LoaderConfig()

    def split(self, line: str) -> list[str]:
        return line.rstrip("\r\n").split(self.config.delimiter)

    def is_structurally_valid(self, line: str) -> bool:
        """Return True for non-empty lines with exactly the expected field count."""

        if not line or not line.strip():
            return False
        return len(self.split(line)) == self.config.field_count

    def is_header(self, line: str) -> bool:
        return self.config.header_marker in line

    def parse(self, line: str) -> TransactionRecord:
        fields = [value.strip() for value in self.split(line)]
        if len(fields) != self.config.field_count:
            raise FormatError(
                f"Expected {self.config.field_count} fields, found {len(fields)}", line=line
            )
        company_code, *descriptors, currency, amount_raw = fields
        return TransactionRecord(
            company_code=company_code,
            descriptors=tuple(descriptors),
            currency=currency.upper(),
            amount=self._parse_amount(amount_raw, line),
        )

    @staticmethod
    def _parse_amount(value: str, line: str) -> Decimal:
        # Decimal() also accepts digit-group underscores (1_000); plain literals do not
        if "_" in value:
            raise FormatError(f"Invalid amount {value!r}", line=line)
        try:
            amount = Decimal(value)
        except InvalidOperation as exc:
            raise FormatError(f"Invalid amount {value!r}", line=line) from exc
        if not amount.is_finite():
            raise FormatError(f"Amount must be finite, got {value!r}", line=line)
        return amount
