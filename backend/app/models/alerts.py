"""Price band alerts."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, Enum, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.models.ledger import TRADE_TYPES


class Alert(Base):
    __tablename__ = "alerts"

    id: Mapped[int] = mapped_column(primary_key=True)
    symbol: Mapped[str] = mapped_column(String(20), index=True)
    min_price: Mapped[Decimal] = mapped_column(Numeric(18, 4))
    max_price: Mapped[Decimal] = mapped_column(Numeric(18, 4))
    enabled: Mapped[bool] = mapped_column(Boolean, default=True)
    trigger: Mapped[bool] = mapped_column(Boolean, default=False)
    trade_type: Mapped[str | None] = mapped_column(Enum(*TRADE_TYPES, name="alert_trade_type"), nullable=True)
    quantity: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(String(512), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )


__all__ = ["Alert"]
