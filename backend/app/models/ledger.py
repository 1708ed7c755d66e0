"""Trade ledger and price history tables."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import Date, DateTime, Enum, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base

TRADE_TYPES = ("Buy", "Sell")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Trade(Base):
    __tablename__ = "trades"
    __table_args__ = (Index("ix_trades_symbol_trade_date", "symbol", "trade_date"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    symbol: Mapped[str] = mapped_column(String(20))
    trade_type: Mapped[str] = mapped_column(Enum(*TRADE_TYPES, name="trade_type"))
    quantity: Mapped[int] = mapped_column(Integer)
    price: Mapped[Decimal] = mapped_column(Numeric(18, 4))
    trade_date: Mapped[date] = mapped_column(Date)
    notes: Mapped[str | None] = mapped_column(String(512), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)


class Price(Base):
    __tablename__ = "prices"
    __table_args__ = (Index("ix_prices_symbol_fetched_at", "symbol", "fetched_at"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    symbol: Mapped[str] = mapped_column(String(20))
    price: Mapped[Decimal] = mapped_column(Numeric(18, 4))
    change_value: Mapped[Decimal | None] = mapped_column(Numeric(18, 4), nullable=True)
    percentage: Mapped[str | None] = mapped_column(String(32), nullable=True)
    direction: Mapped[str | None] = mapped_column(String(16), nullable=True)
    fetched_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)


__all__ = ["Trade", "Price", "TRADE_TYPES"]
