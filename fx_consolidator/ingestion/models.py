"""Data models shared across ingestion modules."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Context, Decimal, getcontext

KEY_SEPARATOR = "/"


class TransactionRecord:
    """A single transaction row with a running average of its amount.

    ``amount`` is read-only and always equals ``amount_total / amount_count``.
    Use :meth:`set_amount` or :meth:`merge_amount` to change it so that three
    or more duplicates still average correctly.
    """

    __slots__ = ("company_code", "descriptors", "currency", "_amount", "_total", "_count")

    def __init__(
        self,
        company_code: str,
        descriptors: tuple[str, ...],
        currency: str,
        amount: Decimal,
    ) -> None:
        self.company_code = company_code
        self.descriptors = tuple(descriptors)
        self.currency = currency
        self.set_amount(amount)

    @property
    def amount(self) -> Decimal:
        return self._amount

    @property
    def amount_total(self) -> Decimal:
        return self._total

    @property
    def amount_count(self) -> int:
        return self._count

    @property
    def key(self) -> str:
        """Business key identifying duplicates (``C1/x/y/z/w``)."""

        return KEY_SEPARATOR.join((self.company_code, *self.descriptors))

    def set_amount(self, amount: Decimal) -> None:
        """Replace the amount and reset the accumulator to one observation."""

        self._amount = amount
        self._total = amount
        self._count = 1

    def merge_amount(self, amount: Decimal, context: Context | None = None) -> Decimal:
        """Fold ``amount`` into the running average and return the new mean."""

        ctx = context or getcontext()
        self._total = ctx.add(self._total, amount)
        self._count += 1
        self._amount = ctx.divide(self._total, Decimal(self._count))
        return self._amount

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TransactionRecord):
            return NotImplemented
        return (
            self.company_code,
            self.descriptors,
            self.currency,
            self._total,
            self._count,
        ) == (other.company_code, other.descriptors, other.currency, other._total, other._count)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"TransactionRecord(company_code={self.company_code!r}, "
            f"descriptors={self.descriptors!r}, currency={self.currency!r}, "
            f"amount={self._amount!r})"
        )


@dataclass(frozen=True, slots=True)
class ExchangeRate:
    """A USD-pivot rate such as ``CHF/USD = 0.9`` (1 CHF buys 0.9 USD)."""

    pair: str
    rate: Decimal
    source: str = "manual"

    @property
    def base(self) -> str:
        return self.pair.partition("/")[0]

    @property
    def quote(self) -> str:
        return self.pair.partition("/")[2]
