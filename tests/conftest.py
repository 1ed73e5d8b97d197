from __future__ import annotations

from decimal import Decimal

import pytest

from fx_consolidator.loader import AggregatingLoader

HEADER = "Company Code\tA\tB\tC\tD\tCUR\tAMT"


@pytest.fixture
def loader() -> AggregatingLoader:
    instance = AggregatingLoader()
    instance.register_exchange_rate("CHF/USD", Decimal("0.9"))
    instance.register_exchange_rate("EUR/USD", Decimal("1.1"))
    return instance


@pytest.fixture
def header() -> str:
    return HEADER
