"""Configuration for the aggregating loader."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import (
    ROUND_05UP,
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    ROUND_UP,
    Context,
)
from types import MappingProxyType
from typing import Iterable, Mapping

__all__ = [
    "DEFAULT_CURRENCY_CONVERSION",
    "DEFAULT_HEADER_MARKER",
    "LoaderConfig",
]

DEFAULT_HEADER_MARKER = "Company Code"
ROUNDING_MODES = frozenset(
    {
        ROUND_05UP,
        ROUND_CEILING,
        ROUND_DOWN,
        ROUND_FLOOR,
        ROUND_HALF_DOWN,
        ROUND_HALF_EVEN,
        ROUND_HALF_UP,
        ROUND_UP,
    }
)
DEFAULT_CURRENCY_CONVERSION: Mapping[str, bool] = MappingProxyType(
    {"CHF": True, "GBP": True, "EUR": False}
)


def _normalise_code(code: str) -> str:
    cleaned = code.strip().upper()
    if len(cleaned) != 3 or not cleaned.isalpha():
        raise ValueError(f"Currency codes must be three letters, got {code!r}")
    return cleaned


@dataclass(frozen=True, slots=True)
class LoaderConfig:
    """Options controlling parsing, conversion and decimal arithmetic.

    ``currency_conversion`` maps a currency code to whether amounts in that
    currency must be converted into ``reference_currency``. Codes absent from
    the mapping are passed through unchanged.
    """

    reference_currency: str = "EUR"
    pivot_currency: str = "USD"
    currency_conversion: Mapping[str, bool] = field(
        default_factory=lambda: DEFAULT_CURRENCY_CONVERSION
    )
    header_marker: str = DEFAULT_HEADER_MARKER
    field_count: int = 7
    delimiter: str = "\t"
    precision: int = 28
    rounding: str = ROUND_HALF_EVEN

    def __post_init__(self) -> None:
        if self.precision <= 0:
            raise ValueError("precision must be positive")
        if self.field_count < 3:
            raise ValueError("field_count must allow company code, currency and amount")
        if not isinstance(self.rounding, str) or self.rounding not in ROUNDING_MODES:
            raise ValueError(f"Unknown rounding mode {self.rounding!r}")
        if not self.delimiter:
            raise ValueError("delimiter must not be empty")
        object.__setattr__(self, "reference_currency", _normalise_code(self.reference_currency))
        object.__setattr__(self, "pivot_currency", _normalise_code(self.pivot_currency))
        conversions = {
            _normalise_code(code): bool(flag) for code, flag in self.currency_conversion.items()
        }
        object.__setattr__(self, "currency_conversion", MappingProxyType(conversions))

    def requires_conversion(self, currency: str) -> bool:
        """Return True when ``currency`` is configured for conversion."""

        return self.currency_conversion.get(currency.upper(), False)

    def is_known_currency(self, currency: str) -> bool:
        """Return True for the reference currency or any configured currency."""

        code = currency.upper()
        return code == self.reference_currency or code in self.currency_conversion

    def rate_pair(self, currency: str) -> str:
        """Return the pivot pair identifier for ``currency`` (``CHF`` → ``CHF/USD``)."""

        return f"{currency.upper()}/{self.pivot_currency}"

    def decimal_context(self) -> Context:
        """Build the decimal context used for every monetary operation."""

        return Context(prec=self.precision, rounding=self.rounding)

    def with_conversions(self, currencies: Iterable[str]) -> "LoaderConfig":
        """Return a copy converting exactly ``currencies`` into the reference currency."""

        conversions = {code.strip().upper(): True for code in currencies}
        conversions.setdefault(self.reference_currency, False)
        return replace(self, currency_conversion=conversions)
