"""SQLite persistence for exchange rates (SQLAlchemy ORM)."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, cast

from sqlalchemy import Column, DateTime, String, create_engine, select, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from fx_consolidator.ingestion.models import ExchangeRate
from fx_consolidator.utils.logger import get_logger

if TYPE_CHECKING:  # pragma: no cover - import only for static analyzers
    from fx_consolidator.loader import AggregatingLoader

LOGGER = get_logger(__name__)

__all__ = ["ExchangeRateStore", "PersistenceResult"]


class Base(DeclarativeBase):
    pass


class _ExchangeRateRow(Base):
    __tablename__ = "exchange_rates"

    pair = Column(String, primary_key=True)
    # Text keeps the decimal exact; SQLite has no native decimal type.
    rate = Column(String, nullable=False)
    source = Column(String, nullable=False, default="manual")
    updated_at = Column(DateTime, server_default=text("CURRENT_TIMESTAMP"))


@dataclass(slots=True)
class PersistenceResult:
    """Represents how many rows were inserted or updated in a batch."""

    inserted: int = 0
    updated: int = 0

    @property
    def total(self) -> int:
        """Return the total number of affected rows."""

        return self.inserted + self.updated


class ExchangeRateStore:
    """Store USD-pivot rates in SQLite and hand them to loaders on demand."""

    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path).expanduser().resolve()
        self.engine: Engine = create_engine(
            f"sqlite:///{self.db_path}",
            echo=False,
            future=True,
        )
        Base.metadata.create_all(self.engine)
        self._SessionFactory: sessionmaker[Session] = sessionmaker(
            bind=self.engine, expire_on_commit=False, future=True
        )

    def insert_rates(self, rates: Iterable[ExchangeRate]) -> PersistenceResult:
        result = PersistenceResult()
        with self._SessionFactory() as session:
            for rate in rates:
                existing = session.get(_ExchangeRateRow, rate.pair)
                if existing is None:
                    session.add(
                        _ExchangeRateRow(pair=rate.pair, rate=str(rate.rate), source=rate.source)
                    )
                    result.inserted += 1
                else:
                    setattr(existing, "rate", str(rate.rate))
                    setattr(existing, "source", rate.source)
                    result.updated += 1
            session.commit()
        LOGGER.info(
            "Inserted %s rates, updated %s rates (total %s)",
            result.inserted,
            result.updated,
            result.total,
        )
        return result

    def fetch_all(self) -> list[ExchangeRate]:
        with self._SessionFactory() as session:
            rows = session.execute(select(_ExchangeRateRow).order_by(_ExchangeRateRow.pair))
            return [self._to_record(cast(_ExchangeRateRow, row)) for row in rows.scalars()]

    def get(self, pair: str) -> ExchangeRate | None:
        with self._SessionFactory() as session:
            row = session.get(_ExchangeRateRow, pair)
            return None if row is None else self._to_record(row)

    def provision(self, loader: "AggregatingLoader") -> int:
        """Register every stored rate on ``loader`` and return the count."""

        rates = self.fetch_all()
        for rate in rates:
            loader.register_exchange_rate(rate.pair, rate)
        LOGGER.info("Provisioned %s exchange rates from %s", len(rates), self.db_path)
        return len(rates)

    @staticmethod
    def _to_record(row: _ExchangeRateRow) -> ExchangeRate:
        return ExchangeRate(
            pair=cast(str, row.pair),
            rate=Decimal(cast(str, row.rate)),
            source=cast(str, row.source),
        )

    def close(self) -> None:  # pragma: no cover - trivial
        self.engine.dispose()

    def __enter__(self) -> "ExchangeRateStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
