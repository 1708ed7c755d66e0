"""Pydantic schemas for stock metadata, scoring and performance."""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, Field


class StockCreateRequest(BaseModel):
    symbol: str = Field(..., min_length=1, max_length=20)


class StockSchema(BaseModel):
    symbol: str
    payouts: list[dict[str, Any]] = []
    financials: dict[str, Any] = {"annual": [], "quarterly": []}
    ratios: list[dict[str, Any]] = []


class ScoreReasonSchema(BaseModel):
    message: str
    favorable: bool


class StockScoreSchema(BaseModel):
    symbol: str
    score: int = Field(..., ge=0, le=10)
    reasons: list[ScoreReasonSchema]


class PerformanceRowSchema(BaseModel):
    symbol: str
    daily: dict[date, float | None]
    net_change: float | None = None
    days: int


__all__ = [
    "StockCreateRequest",
    "StockSchema",
    "ScoreReasonSchema",
    "StockScoreSchema",
    "PerformanceRowSchema",
]
