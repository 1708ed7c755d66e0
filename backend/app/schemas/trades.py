"""Pydantic schemas for the trade ledger."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field, field_validator

from app.models.ledger import TRADE_TYPES


class TradeCreateRequest(BaseModel):
    symbol: str = Field(..., min_length=1, max_length=20, examples=["OGDC"])
    trade_type: str = Field(..., pattern="^(" + "|".join(TRADE_TYPES) + ")$")
    quantity: int = Field(..., gt=0)
    price: float = Field(..., gt=0)
    trade_date: date | None = Field(default=None, description="Defaults to today when omitted")
    notes: str | None = None

    @field_validator("symbol")
    @classmethod
    def _normalise_symbol(cls, value: str) -> str:
        normalized = value.strip().upper()
        if not normalized:
            raise ValueError("Symbol must not be empty")
        return normalized


class TradeSchema(BaseModel):
    id: int
    symbol: str
    trade_type: str
    quantity: int
    price: float
    trade_date: date
    notes: str | None = None
    notional_value: float

    class Config:
        json_schema_extra = {
            "example": {
                "id": 1,
                "symbol": "OGDC",
                "trade_type": "Buy",
                "quantity": 100,
                "price": 120.5,
                "trade_date": "2024-03-01",
                "notes": "Initial position",
                "notional_value": 12050.0,
            }
        }


__all__ = ["TradeCreateRequest", "TradeSchema"]
