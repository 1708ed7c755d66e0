"""Trade ledger endpoints."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies.db import get_db
from app.models import Trade
from app.schemas import TradeCreateRequest, TradeSchema
from app.services import ledger

router = APIRouter()


def _serialize_trade(tx: Trade) -> TradeSchema:
    price = float(Decimal(str(tx.price)))
    return TradeSchema(
        id=tx.id,
        symbol=tx.symbol,
        trade_type=tx.trade_type,
        quantity=tx.quantity,
        price=price,
        trade_date=tx.trade_date,
        notes=tx.notes,
        notional_value=tx.quantity * price,
    )


@router.get("", response_model=list[TradeSchema])
async def get_trades(
    symbol: str | None = Query(default=None, description="Symbol filter; 'All' disables it"),
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    session: AsyncSession = Depends(get_db),
) -> list[TradeSchema]:
    if start_date and end_date and start_date > end_date:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="start_date cannot be after end_date")
    records = await ledger.list_trades(session, symbol=symbol, start_date=start_date, end_date=end_date)
    return [_serialize_trade(tx) for tx in records]


@router.post("", response_model=TradeSchema, status_code=status.HTTP_201_CREATED)
async def post_trade(
    payload: TradeCreateRequest,
    session: AsyncSession = Depends(get_db),
) -> TradeSchema:
    try:
        record = await ledger.create_trade(payload, session)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _serialize_trade(record)


@router.delete("/{trade_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_trade(
    trade_id: int,
    session: AsyncSession = Depends(get_db),
) -> Response:
    try:
        await ledger.delete_trade(trade_id, session)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
