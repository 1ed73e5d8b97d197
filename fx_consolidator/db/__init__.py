"""Storage helpers for exchange rates used to provision loaders."""

from __future__ import annotations

from pathlib import Path
from typing import Final

__all__ = ["DEFAULT_RATES_DB_NAME", "default_rates_db_path"]

DEFAULT_RATES_DB_NAME: Final[str] = "exchange_rates.db"


def default_rates_db_path(directory: str | Path | None = None) -> Path:
    """Return the rates database path inside ``directory`` (cwd by default)."""

    base = Path(directory) if directory else Path.cwd()
    return base.expanduser().resolve() / DEFAULT_RATES_DB_NAME
