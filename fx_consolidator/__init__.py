"""Public interface for the fx_consolidator package."""

from __future__ import annotations

from importlib import metadata as importlib_metadata
from typing import TYPE_CHECKING, Any

from fx_consolidator.config import LoaderConfig
from fx_consolidator.exceptions import FormatError, FxConsolidatorError, RateUnavailable
from fx_consolidator.fx import RateTable, cross_rate
from fx_consolidator.ingestion.models import ExchangeRate, TransactionRecord
from fx_consolidator.ingestion.transaction_parser import TransactionLineParser
from fx_consolidator.loader import AggregatingLoader, Diagnostic, LoadReport

if TYPE_CHECKING:  # pragma: no cover - import only for static analyzers
    from fx_consolidator.db.rate_store import ExchangeRateStore as ExchangeRateStore

__all__ = [
    "__version__",
    "AggregatingLoader",
    "Diagnostic",
    "ExchangeRate",
    "ExchangeRateStore",
    "FormatError",
    "FxConsolidatorError",
    "LoadReport",
    "LoaderConfig",
    "RateTable",
    "RateUnavailable",
    "TransactionLineParser",
    "TransactionRecord",
    "consolidate_file",
    "cross_rate",
]

try:
    __version__ = importlib_metadata.version("fx-consolidator")
except importlib_metadata.PackageNotFoundError:  # pragma: no cover - fallback for local runs
    __version__ = "0.1.0"


def consolidate_file(*args, **kwargs):
    from fx_consolidator.scripts.consolidate import consolidate_file as _consolidate_file

    return _consolidate_file(*args, **kwargs)


def __getattr__(name: str) -> Any:
    """Lazily expose the SQLAlchemy-backed rate store."""

    if name == "ExchangeRateStore":
        from fx_consolidator.db.rate_store import ExchangeRateStore as _store

        return _store
    raise AttributeError(f"module 'fx_consolidator' has no attribute {name}")
