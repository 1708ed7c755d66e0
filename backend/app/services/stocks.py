"""Stock metadata records, fundamentals scoring and daily performance."""

from __future__ import annotations

from collections import defaultdict
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Stock
from portfolio_tracker.models import PriceSnapshot
from portfolio_tracker.performance import SymbolPerformance, performance_table
from portfolio_tracker.scoring import StockScore, score_stock

from .ledger import price_history, to_snapshot


async def list_stocks(session: AsyncSession) -> list[Stock]:
    result = await session.execute(select(Stock).order_by(Stock.symbol))
    return list(result.scalars().all())


async def get_stock(symbol: str, session: AsyncSession) -> Stock:
    normalized = symbol.strip().upper()
    result = await session.execute(select(Stock).where(Stock.symbol == normalized))
    record = result.scalar_one_or_none()
    if record is None:
        raise ValueError(f"Stock {normalized} not found")
    return record


async def add_stock(symbol: str, session: AsyncSession) -> Stock:
    """Insert an empty metadata record; an existing record is returned as is."""

    normalized = symbol.strip().upper()
    if not normalized:
        raise ValueError("Symbol must not be empty")
    result = await session.execute(select(Stock).where(Stock.symbol == normalized))
    existing = result.scalar_one_or_none()
    if existing is not None:
        return existing
    record = Stock(
        symbol=normalized,
        payouts=[],
        financials={"annual": [], "quarterly": []},
        ratios=[],
    )
    session.add(record)
    await session.commit()
    await session.refresh(record)
    return record


async def delete_stock(symbol: str, session: AsyncSession) -> None:
    record = await get_stock(symbol, session)
    await session.delete(record)
    await session.commit()


def score_record(record: Stock) -> StockScore:
    return score_stock(
        record.symbol,
        ratios=record.ratios or [],
        payouts=record.payouts or [],
        financials=record.financials or {},
    )


async def stock_performance(
    symbols: Sequence[str],
    days: int,
    session: AsyncSession,
    *,
    history_limit: int = 1000,
) -> list[SymbolPerformance]:
    history: dict[str, list[PriceSnapshot]] = defaultdict(list)
    # Each symbol gets its own window of the newest snapshots.
    for symbol in dict.fromkeys(symbols):
        rows = await price_history(session, [symbol], limit=history_limit)
        history[symbol].extend(to_snapshot(row) for row in rows)
    return performance_table(history, symbols, days)


__all__ = [
    "list_stocks",
    "get_stock",
    "add_stock",
    "delete_stock",
    "score_record",
    "stock_performance",
]
