"""Portfolio valuation over the persisted ledger."""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import AppSettings
from app.core.telemetry import record_valuation
from portfolio_tracker.holdings import PortfolioValuation, value_portfolio

from .ledger import load_latest_prices, load_ledger

logger = logging.getLogger(__name__)


async def compute_portfolio(session: AsyncSession, settings: AppSettings) -> PortfolioValuation:
    """Fetch the full ledger and latest prices, then recompute from scratch."""

    trades = await load_ledger(session)
    if not trades:
        record_valuation(0, 0, {})
        return PortfolioValuation()
    latest = await load_latest_prices(session, {trade.symbol for trade in trades})
    valuation = value_portfolio(trades, latest.values(), strict_oversell=settings.strict_oversell)
    unmatched = {
        symbol: result.unmatched_sell_quantity
        for symbol, result in valuation.fifo.by_symbol.items()
        if result.unmatched_sell_quantity
    }
    if unmatched:
        logger.warning("Sells exceed open lots; unmatched quantity ignored: %s", unmatched)
    record_valuation(len(trades), len(valuation.holdings), unmatched)
    logger.info(
        "Valued %s trades into %s holdings (%s priced)",
        len(trades),
        len(valuation.holdings),
        sum(1 for h in valuation.holdings if h.latest_price is not None),
    )
    return valuation


__all__ = ["compute_portfolio"]
