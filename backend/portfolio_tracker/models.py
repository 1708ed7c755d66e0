"""Domain models consumed and produced by the valuation engine."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional

from .exceptions import InvalidTradeError


class TradeType(str, Enum):
    BUY = "Buy"
    SELL = "Sell"


@dataclass(frozen=True)
class Trade:
    """A single executed buy or sell from the ledger."""

    symbol: str
    trade_type: TradeType
    quantity: int
    price: Decimal
    trade_date: date
    notes: Optional[str] = None
    id: Optional[int] = None

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "trade_type", TradeType(self.trade_type))
        except ValueError as exc:
            raise InvalidTradeError(f"Unknown trade type {self.trade_type!r}") from exc
        try:
            object.__setattr__(self, "price", Decimal(str(self.price)))
        except (InvalidOperation, ValueError) as exc:
            raise InvalidTradeError(f"price must be a number (got {self.price!r} for {self.symbol})") from exc
        if not isinstance(self.quantity, int) or isinstance(self.quantity, bool):
            raise InvalidTradeError(f"quantity must be a whole number (got {self.quantity!r} for {self.symbol})")
        if not self.price.is_finite():
            raise InvalidTradeError(f"price must be finite (got {self.price} for {self.symbol})")
        if self.quantity <= 0:
            raise InvalidTradeError(f"quantity must be > 0 (got {self.quantity} for {self.symbol})")
        if self.price <= 0:
            raise InvalidTradeError(f"price must be > 0 (got {self.price} for {self.symbol})")

    @property
    def is_buy(self) -> bool:
        return self.trade_type is TradeType.BUY


@dataclass(frozen=True)
class PriceSnapshot:
    """A fetched market price plus display metadata passed through untouched."""

    symbol: str
    price: Decimal
    fetched_at: datetime
    change_value: Optional[Decimal] = None
    percentage: Optional[str] = None
    direction: Optional[str] = None


@dataclass(frozen=True)
class Holding:
    """Current position and performance for one symbol."""

    symbol: str
    shares_held: int
    avg_buy_price: Decimal
    latest_price: Optional[Decimal]
    change_percentage: Optional[str]
    market_value: Decimal
    investment: Decimal
    unrealized_pl: Decimal
    percent_updown: Decimal
    last_update: Optional[datetime] = None


@dataclass(frozen=True)
class PortfolioSummary:
    total_investment: Decimal = Decimal("0")
    total_market_value: Decimal = Decimal("0")
    total_unrealized_pl: Decimal = Decimal("0")
    total_percent_updown: Decimal = Decimal("0")
    realized_profit: Decimal = Decimal("0")


@dataclass(frozen=True)
class OpenLot:
    """Unsold remainder of a buy after FIFO matching."""

    quantity: int
    price: Decimal


__all__ = [
    "TradeType",
    "Trade",
    "PriceSnapshot",
    "Holding",
    "PortfolioSummary",
    "OpenLot",
]
