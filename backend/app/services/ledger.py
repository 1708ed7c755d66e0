"""Trade and price persistence plus conversion into engine inputs."""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Iterable, Sequence

from sqlalchemy import Select, and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Price, Trade
from app.schemas import PriceCreateRequest, TradeCreateRequest
from portfolio_tracker.models import PriceSnapshot
from portfolio_tracker.models import Trade as LedgerTrade
from portfolio_tracker.prices import latest_prices

logger = logging.getLogger(__name__)

ALL_SYMBOLS = "All"


def to_ledger_trade(row: Trade) -> LedgerTrade:
    return LedgerTrade(
        id=row.id,
        symbol=row.symbol,
        trade_type=row.trade_type,
        quantity=int(row.quantity),
        price=Decimal(str(row.price)),
        trade_date=row.trade_date,
        notes=row.notes,
    )


def to_snapshot(row: Price) -> PriceSnapshot:
    return PriceSnapshot(
        symbol=row.symbol,
        price=Decimal(str(row.price)),
        fetched_at=row.fetched_at,
        change_value=Decimal(str(row.change_value)) if row.change_value is not None else None,
        percentage=row.percentage,
        direction=row.direction,
    )


async def list_trades(
    session: AsyncSession,
    *,
    symbol: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[Trade]:
    """Return trades for display, newest first.

    Filters only apply to this listing; valuations always read the full ledger.
    """

    stmt: Select = select(Trade)
    if symbol and symbol != ALL_SYMBOLS:
        stmt = stmt.where(Trade.symbol == symbol.strip().upper())
    if start_date and end_date:
        stmt = stmt.where(Trade.trade_date >= start_date, Trade.trade_date <= end_date)
    stmt = stmt.order_by(Trade.trade_date.desc(), Trade.id.desc())
    return list((await session.execute(stmt)).scalars().all())


async def load_ledger(session: AsyncSession) -> list[LedgerTrade]:
    """Read every trade in insertion order and convert it for the engine."""

    rows = (await session.execute(select(Trade).order_by(Trade.id))).scalars().all()
    return [to_ledger_trade(row) for row in rows]


async def create_trade(payload: TradeCreateRequest, session: AsyncSession) -> Trade:
    record = Trade(
        symbol=payload.symbol,
        trade_type=payload.trade_type,
        quantity=payload.quantity,
        price=Decimal(str(payload.price)),
        trade_date=payload.trade_date or date.today(),
        notes=payload.notes,
    )
    # Same preconditions the engine enforces, checked before the row is stored.
    to_ledger_trade(record)
    session.add(record)
    await session.commit()
    await session.refresh(record)
    logger.info("Recorded %s of %s %s @ %s", record.trade_type, record.quantity, record.symbol, record.price)
    return record


async def delete_trade(trade_id: int, session: AsyncSession) -> None:
    record = await session.get(Trade, trade_id)
    if record is None:
        raise ValueError("Trade not found")
    await session.delete(record)
    await session.commit()
    logger.info("Deleted trade %s (%s)", trade_id, record.symbol)


async def record_price(payload: PriceCreateRequest, session: AsyncSession) -> Price:
    record = Price(
        symbol=payload.symbol,
        price=Decimal(str(payload.price)),
        change_value=Decimal(str(payload.change_value)) if payload.change_value is not None else None,
        percentage=payload.percentage,
        direction=payload.direction,
        fetched_at=datetime.now(timezone.utc),
    )
    session.add(record)
    await session.commit()
    await session.refresh(record)
    return record


async def price_history(
    session: AsyncSession,
    symbols: Sequence[str] | None = None,
    *,
    limit: int = 1000,
) -> list[Price]:
    stmt: Select = select(Price)
    if symbols:
        stmt = stmt.where(Price.symbol.in_(list(symbols)))
    stmt = stmt.order_by(Price.fetched_at.desc(), Price.id.desc()).limit(limit)
    return list((await session.execute(stmt)).scalars().all())


async def latest_price_rows(session: AsyncSession, symbols: Iterable[str] | None = None) -> list[Price]:
    """One row per symbol carrying the greatest ``fetched_at``."""

    wanted = sorted(set(symbols)) if symbols is not None else None
    if wanted is not None and not wanted:
        return []
    latest_stmt = select(Price.symbol, func.max(Price.fetched_at).label("latest_at")).group_by(Price.symbol)
    if wanted is not None:
        latest_stmt = latest_stmt.where(Price.symbol.in_(wanted))
    latest = latest_stmt.subquery()
    stmt = (
        select(Price)
        .join(latest, and_(Price.symbol == latest.c.symbol, Price.fetched_at == latest.c.latest_at))
        .order_by(Price.symbol, Price.id)
    )
    rows = (await session.execute(stmt)).scalars().all()
    # Equal timestamps can join more than once; keep the first row per symbol.
    seen: dict[str, Price] = {}
    for row in rows:
        seen.setdefault(row.symbol, row)
    return list(seen.values())


async def load_latest_prices(
    session: AsyncSession, symbols: Iterable[str] | None = None
) -> dict[str, PriceSnapshot]:
    rows = await latest_price_rows(session, symbols)
    return latest_prices(to_snapshot(row) for row in rows)


__all__ = [
    "ALL_SYMBOLS",
    "to_ledger_trade",
    "to_snapshot",
    "list_trades",
    "load_ledger",
    "create_trade",
    "delete_trade",
    "record_price",
    "price_history",
    "latest_price_rows",
    "load_latest_prices",
]
