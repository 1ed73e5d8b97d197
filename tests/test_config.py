from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP

import pytest

from fx_consolidator.config import DEFAULT_HEADER_MARKER, LoaderConfig


def test_defaults() -> None:
    config = LoaderConfig()

    assert config.reference_currency == "EUR"
    assert config.pivot_currency == "USD"
    assert config.header_marker == DEFAULT_HEADER_MARKER == "Company Code"
    assert config.field_count == 7
    assert config.requires_conversion("CHF")
    assert config.requires_conversion("gbp")
    assert not config.requires_conversion("EUR")
    assert not config.requires_conversion("JPY")


def test_known_currency_covers_reference_and_configured_codes() -> None:
    config = LoaderConfig()

    assert config.is_known_currency("EUR")
    assert config.is_known_currency("CHF")
    assert not config.is_known_currency("USD")


def test_rate_pair_uses_pivot() -> None:
    assert LoaderConfig().rate_pair("chf") == "CHF/USD"
    assert LoaderConfig(pivot_currency="GBP").rate_pair("EUR") == "EUR/GBP"


def test_decimal_context_follows_options() -> None:
    context = LoaderConfig(precision=12, rounding=ROUND_HALF_UP).decimal_context()

    assert context.prec == 12
    assert context.rounding == ROUND_HALF_UP
    assert LoaderConfig().decimal_context().rounding == ROUND_HALF_EVEN


def test_with_conversions_replaces_set() -> None:
    config = LoaderConfig().with_conversions(["usd", "JPY"])

    assert config.requires_conversion("USD")
    assert config.requires_conversion("JPY")
    assert not config.requires_conversion("CHF")
    assert not config.requires_conversion("EUR")
    assert config.is_known_currency("EUR")


def test_conversion_mapping_is_read_only() -> None:
    config = LoaderConfig()

    with pytest.raises(TypeError):
        config.currency_conversion["JPY"] = True  # type: ignore[index]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"precision": 0},
        {"field_count": 2},
        {"delimiter": ""},
        {"reference_currency": "EURO"},
        {"currency_conversion": {"C1": True}},
        {"rounding": "bogus"},
        {"rounding": None},
    ],
)
def test_invalid_options_raise(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        LoaderConfig(**kwargs)
