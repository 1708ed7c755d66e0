"""Stock metadata with scraped fundamentals stored as JSON blobs."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


def _empty_financials() -> dict[str, list[Any]]:
    return {"annual": [], "quarterly": []}


class Stock(Base):
    __tablename__ = "stocks"

    id: Mapped[int] = mapped_column(primary_key=True)
    symbol: Mapped[str] = mapped_column(String(20), unique=True, index=True)
    payouts: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    financials: Mapped[dict[str, Any]] = mapped_column(JSON, default=_empty_financials)
    ratios: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )


__all__ = ["Stock"]
