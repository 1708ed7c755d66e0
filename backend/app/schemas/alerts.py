"""Pydantic schemas for price alerts."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator

from app.models.ledger import TRADE_TYPES


class AlertCreateRequest(BaseModel):
    symbol: str = Field(..., min_length=1, max_length=20)
    min_price: float = Field(..., ge=0)
    max_price: float = Field(..., ge=0)
    enabled: bool = True
    trade_type: str | None = Field(default=None, pattern="^(" + "|".join(TRADE_TYPES) + ")$")
    quantity: int | None = Field(default=None, gt=0)
    notes: str | None = None

    @field_validator("symbol")
    @classmethod
    def _normalise_symbol(cls, value: str) -> str:
        return value.strip().upper()

    @model_validator(mode="after")
    def _check_band(self) -> "AlertCreateRequest":
        if self.min_price > self.max_price:
            raise ValueError("min_price cannot exceed max_price")
        return self


class AlertFlagUpdate(BaseModel):
    value: bool


class AlertSchema(BaseModel):
    id: int
    symbol: str
    min_price: float
    max_price: float
    enabled: bool
    trigger: bool
    trade_type: str | None = None
    quantity: int | None = None
    notes: str | None = None


class AlertBreachSchema(BaseModel):
    alert: AlertSchema
    price: float
    direction: str


__all__ = ["AlertCreateRequest", "AlertFlagUpdate", "AlertSchema", "AlertBreachSchema"]
