"""Stock metadata, fundamentals score and daily performance endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies.db import get_app_settings, get_db
from app.config import AppSettings
from app.models import Stock
from app.schemas import (
    PerformanceRowSchema,
    ScoreReasonSchema,
    StockCreateRequest,
    StockSchema,
    StockScoreSchema,
)
from app.services import stocks as stock_service

router = APIRouter()


def _serialize_stock(record: Stock) -> StockSchema:
    return StockSchema(
        symbol=record.symbol,
        payouts=record.payouts or [],
        financials=record.financials or {"annual": [], "quarterly": []},
        ratios=record.ratios or [],
    )


@router.get("", response_model=list[StockSchema], response_model_exclude_unset=True)
async def get_stocks(
    symbols_only: bool = Query(default=False),
    session: AsyncSession = Depends(get_db),
) -> list[StockSchema]:
    records = await stock_service.list_stocks(session)
    if symbols_only:
        return [StockSchema(symbol=record.symbol) for record in records]
    return [_serialize_stock(record) for record in records]


@router.post("", response_model=StockSchema, status_code=status.HTTP_201_CREATED)
async def post_stock(
    payload: StockCreateRequest,
    session: AsyncSession = Depends(get_db),
) -> StockSchema:
    try:
        record = await stock_service.add_stock(payload.symbol, session)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _serialize_stock(record)


@router.get("/performance", response_model=list[PerformanceRowSchema])
async def get_performance(
    symbols: str | None = Query(default=None, description="Comma separated symbols"),
    days: int | None = Query(default=None, ge=1, le=90),
    session: AsyncSession = Depends(get_db),
    settings: AppSettings = Depends(get_app_settings),
) -> list[PerformanceRowSchema]:
    wanted = [item.strip().upper() for item in (symbols or "").split(",") if item.strip()]
    if not wanted:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="symbols is required")
    window = days or settings.performance_default_days
    rows = await stock_service.stock_performance(
        wanted, window, session, history_limit=settings.price_history_limit
    )
    return [
        PerformanceRowSchema(symbol=row.symbol, daily=row.daily, net_change=row.net_change, days=window)
        for row in rows
    ]


@router.get("/{symbol}/score", response_model=StockScoreSchema)
async def get_score(symbol: str, session: AsyncSession = Depends(get_db)) -> StockScoreSchema:
    try:
        record = await stock_service.get_stock(symbol, session)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    result = stock_service.score_record(record)
    return StockScoreSchema(
        symbol=result.symbol,
        score=result.score,
        reasons=[ScoreReasonSchema(message=r.message, favorable=r.favorable) for r in result.reasons],
    )


@router.delete("/{symbol}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_stock(symbol: str, session: AsyncSession = Depends(get_db)) -> Response:
    try:
        await stock_service.delete_stock(symbol, session)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
