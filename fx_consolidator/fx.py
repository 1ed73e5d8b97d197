"""Exchange-rate table and USD-pivot cross-rate resolution."""

from __future__ import annotations

from decimal import Context, Decimal, InvalidOperation, getcontext
from typing import Iterator

from fx_consolidator.exceptions import RateUnavailable
from fx_consolidator.ingestion.models import ExchangeRate

__all__ = ["RateLike", "RateTable", "coerce_decimal", "cross_rate"]

RateLike = ExchangeRate | Decimal | str | int | float


def coerce_decimal(value: Decimal | str | int | float) -> Decimal:
    """Convert ``value`` to :class:`Decimal` without binary float artefacts."""

    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("booleans are not valid decimal amounts")
    if isinstance(value, float):
        # repr() is the shortest literal that round-trips: 0.9, not 0.90000000000000002220
        value = repr(value)
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError) as exc:
        raise ValueError(f"Invalid decimal value: {value!r}") from exc


class RateTable:
    """Mutable pair → :class:`ExchangeRate` lookup owned by a single loader."""

    __slots__ = ("_rates",)

    def __init__(self, rates: dict[str, RateLike] | None = None) -> None:
        self._rates: dict[str, ExchangeRate] = {}
        for pair, rate in (rates or {}).items():
            self.register(pair, rate)

    def register(self, pair: str, rate: RateLike) -> ExchangeRate:
        """Insert or overwrite ``pair``. The identifier format is not validated."""

        if isinstance(rate, ExchangeRate):
            entry = ExchangeRate(pair, coerce_decimal(rate.rate), rate.source)
        else:
            entry = ExchangeRate(pair=pair, rate=coerce_decimal(rate))
        self._rates[pair] = entry
        return entry

    def get(self, pair: str) -> ExchangeRate | None:
        return self._rates.get(pair)

    def pairs(self) -> list[str]:
        return sorted(self._rates)

    def __contains__(self, pair: object) -> bool:
        return pair in self._rates

    def __len__(self) -> int:
        return len(self._rates)

    def __iter__(self) -> Iterator[ExchangeRate]:
        return iter(self._rates.values())


def _validated_rate(rate: ExchangeRate | None, label: str) -> Decimal:
    if rate is None:
        raise RateUnavailable(f"{label} rate is not registered")
    try:
        value = coerce_decimal(rate.rate)
    except (TypeError, ValueError) as exc:
        raise RateUnavailable(
            f"{rate.pair} rate is not a decimal: {rate.rate!r}", pair=rate.pair
        ) from exc
    if not value.is_finite() or value <= 0:
        raise RateUnavailable(f"{rate.pair} rate must be positive, got {value}", pair=rate.pair)
    return value


def cross_rate(
    source: ExchangeRate | None,
    reference: ExchangeRate | None,
    context: Context | None = None,
) -> Decimal:
    """Return the rate converting ``source`` currency into ``reference`` currency.

    Both rates must share the same pivot (``CHF/USD`` and ``EUR/USD``); the
    result is ``source / reference``. Raises :class:`RateUnavailable` when
    either rate is missing or not strictly positive.
    """

    ctx = context or getcontext()
    source_value = _validated_rate(source, "source")
    reference_value = _validated_rate(reference, "reference")
    return ctx.divide(source_value, reference_value)
