"""Pydantic schemas for price snapshots."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class PriceCreateRequest(BaseModel):
    symbol: str = Field(..., min_length=1, max_length=20, examples=["OGDC"])
    price: float = Field(..., gt=0)
    change_value: float | None = None
    percentage: str | None = Field(default=None, examples=["+1.25%"])
    direction: str | None = Field(default=None, examples=["up"])

    @field_validator("symbol")
    @classmethod
    def _normalise_symbol(cls, value: str) -> str:
        return value.strip().upper()


class PriceSchema(BaseModel):
    id: int | None = None
    symbol: str
    price: float
    change_value: float | None = None
    percentage: str | None = None
    direction: str | None = None
    fetched_at: datetime


__all__ = ["PriceCreateRequest", "PriceSchema"]
