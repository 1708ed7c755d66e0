"""Pydantic schemas for computed holdings and portfolio summary."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class HoldingSchema(BaseModel):
    symbol: str
    shares_held: int
    avg_buy_price: float
    latest_price: float | None = None
    change_percentage: str | None = None
    market_value: float
    investment: float
    percent_updown: float
    unrealized_pl: float
    last_update: datetime | None = None


class PortfolioSummarySchema(BaseModel):
    total_investment: float = 0.0
    total_market_value: float = 0.0
    total_unrealized_pl: float = 0.0
    total_percent_updown: float = 0.0
    realized_profit: float = 0.0


class OpenLotSchema(BaseModel):
    quantity: int
    price: float


class SymbolRealizedSchema(BaseModel):
    symbol: str
    realized_profit: float
    open_lots: list[OpenLotSchema]
    unmatched_sell_quantity: int = 0


class PortfolioResponse(BaseModel):
    portfolio: list[HoldingSchema]
    summary: PortfolioSummarySchema
    realized: list[SymbolRealizedSchema] = []


__all__ = [
    "HoldingSchema",
    "PortfolioSummarySchema",
    "OpenLotSchema",
    "SymbolRealizedSchema",
    "PortfolioResponse",
]
