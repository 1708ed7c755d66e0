"""Portfolio valuation endpoint."""

from __future__ import annotations

from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies.db import get_app_settings, get_db
from app.config import AppSettings
from app.schemas import (
    HoldingSchema,
    OpenLotSchema,
    PortfolioResponse,
    PortfolioSummarySchema,
    SymbolRealizedSchema,
)
from app.services.valuation import compute_portfolio
from portfolio_tracker import Holding, LedgerError, PortfolioValuation

router = APIRouter()


def _to_float(value: Decimal | None) -> float | None:
    return float(value) if value is not None else None


def _serialize_holding(holding: Holding) -> HoldingSchema:
    return HoldingSchema(
        symbol=holding.symbol,
        shares_held=holding.shares_held,
        avg_buy_price=float(holding.avg_buy_price),
        latest_price=_to_float(holding.latest_price),
        change_percentage=holding.change_percentage,
        market_value=float(holding.market_value),
        investment=float(holding.investment),
        percent_updown=float(holding.percent_updown),
        unrealized_pl=float(holding.unrealized_pl),
        last_update=holding.last_update,
    )


def serialize_valuation(valuation: PortfolioValuation) -> PortfolioResponse:
    summary = valuation.summary
    return PortfolioResponse(
        portfolio=[_serialize_holding(h) for h in valuation.holdings],
        summary=PortfolioSummarySchema(
            total_investment=float(summary.total_investment),
            total_market_value=float(summary.total_market_value),
            total_unrealized_pl=float(summary.total_unrealized_pl),
            total_percent_updown=float(summary.total_percent_updown),
            realized_profit=float(summary.realized_profit),
        ),
        realized=[
            SymbolRealizedSchema(
                symbol=symbol,
                realized_profit=float(result.realized_profit),
                open_lots=[OpenLotSchema(quantity=lot.quantity, price=float(lot.price)) for lot in result.open_lots],
                unmatched_sell_quantity=result.unmatched_sell_quantity,
            )
            for symbol, result in sorted(valuation.fifo.by_symbol.items())
        ],
    )


@router.get("", response_model=PortfolioResponse)
async def get_portfolio(
    session: AsyncSession = Depends(get_db),
    settings: AppSettings = Depends(get_app_settings),
) -> PortfolioResponse:
    try:
        valuation = await compute_portfolio(session, settings)
    except LedgerError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    return serialize_valuation(valuation)


__all__ = ["router", "serialize_valuation"]
