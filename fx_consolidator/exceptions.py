"""Exception hierarchy shared across fx_consolidator modules."""

from __future__ import annotations

__all__ = ["FxConsolidatorError", "FormatError", "RateUnavailable"]


class FxConsolidatorError(Exception):
    """Base class for errors raised by the package."""


class FormatError(FxConsolidatorError, ValueError):
    """A transaction line could not be parsed into a record."""

    def __init__(self, message: str, *, line: str | None = None) -> None:
        super().__init__(message)
        self.line = line


class RateUnavailable(FxConsolidatorError, LookupError):
    """A cross-rate could not be resolved from the registered rates."""

    def __init__(self, message: str, *, pair: str | None = None) -> None:
        super().__init__(message)
        self.pair = pair
