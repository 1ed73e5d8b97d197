"""Tests for the public package facade."""

from decimal import Decimal
from pathlib import Path

import pytest

import fx_consolidator
from fx_consolidator import AggregatingLoader, LoaderConfig, __version__


def test_version_is_exposed() -> None:
    assert isinstance(__version__, str)
    assert __version__


def test_public_names_are_importable() -> None:
    for name in fx_consolidator.__all__:
        assert getattr(fx_consolidator, name) is not None


def test_rate_store_is_exposed_lazily() -> None:
    from fx_consolidator.db.rate_store import ExchangeRateStore

    assert fx_consolidator.ExchangeRateStore is ExchangeRateStore


def test_unknown_attribute_raises() -> None:
    with pytest.raises(AttributeError):
        getattr(fx_consolidator, "does_not_exist")


def test_consolidate_file_wrapper(tmp_path: Path) -> None:
    path = tmp_path / "input.txt"
    path.write_text("Company Code\tA\tB\tC\tD\tCUR\tAMT\nC1\ta\tb\tc\td\tEUR\t3\n")

    result = fx_consolidator.consolidate_file(path)

    assert result.records["C1/a/b/c/d"].amount == Decimal("3")


def test_loader_defaults_to_eur_reference() -> None:
    loader = AggregatingLoader()

    assert isinstance(loader.config, LoaderConfig)
    assert loader.config.reference_currency == "EUR"
