"""Price snapshot endpoints."""

from __future__ import annotations

from decimal import Decimal

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies.db import get_app_settings, get_db
from app.config import AppSettings
from app.models import Price
from app.schemas import PriceCreateRequest, PriceSchema
from app.services import ledger

router = APIRouter()


def _to_float(value: Decimal | float | None) -> float | None:
    if value is None:
        return None
    return float(Decimal(str(value)))


def _serialize_price(row: Price) -> PriceSchema:
    return PriceSchema(
        id=row.id,
        symbol=row.symbol,
        price=_to_float(row.price),
        change_value=_to_float(row.change_value),
        percentage=row.percentage,
        direction=row.direction,
        fetched_at=row.fetched_at,
    )


def _parse_symbols(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [item.strip().upper() for item in raw.split(",") if item.strip()]


@router.get("", response_model=list[PriceSchema])
async def get_prices(
    symbols: str | None = Query(default=None, description="Comma separated symbols"),
    latest: bool = Query(default=False, description="Only the most recent snapshot per symbol"),
    session: AsyncSession = Depends(get_db),
    settings: AppSettings = Depends(get_app_settings),
) -> list[PriceSchema]:
    wanted = _parse_symbols(symbols)
    if latest:
        rows = await ledger.latest_price_rows(session, wanted or None)
    else:
        rows = await ledger.price_history(session, wanted, limit=settings.price_history_limit)
    return [_serialize_price(row) for row in rows]


@router.post("", response_model=PriceSchema, status_code=status.HTTP_201_CREATED)
async def post_price(
    payload: PriceCreateRequest,
    session: AsyncSession = Depends(get_db),
) -> PriceSchema:
    record = await ledger.record_price(payload, session)
    return _serialize_price(record)


__all__ = ["router"]
