"""Holdings aggregation and portfolio valuation."""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, getcontext
from typing import Iterable, List, Mapping, Sequence

from .grouping import group_by_symbol
from .models import Holding, PortfolioSummary, PriceSnapshot, Trade
from .prices import latest_prices
from .realized import FifoResult, match_fifo

getcontext().prec = 28

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


@dataclass(frozen=True)
class PositionTotals:
    """Running totals for one symbol. Sells only move ``net_quantity``."""

    net_quantity: int = 0
    total_buy_quantity: int = 0
    total_buy_cost: Decimal = _ZERO

    def apply(self, trade: Trade) -> "PositionTotals":
        if trade.is_buy:
            return PositionTotals(
                net_quantity=self.net_quantity + trade.quantity,
                total_buy_quantity=self.total_buy_quantity + trade.quantity,
                total_buy_cost=self.total_buy_cost + trade.price * trade.quantity,
            )
        return PositionTotals(
            net_quantity=self.net_quantity - trade.quantity,
            total_buy_quantity=self.total_buy_quantity,
            total_buy_cost=self.total_buy_cost,
        )

    @property
    def avg_buy_price(self) -> Decimal:
        if self.total_buy_quantity == 0:
            return _ZERO
        return self.total_buy_cost / self.total_buy_quantity


@dataclass(frozen=True)
class PortfolioValuation:
    holdings: List[Holding] = field(default_factory=list)
    summary: PortfolioSummary = field(default_factory=PortfolioSummary)
    fifo: FifoResult = field(default_factory=FifoResult)


def position_totals(trades: Iterable[Trade]) -> PositionTotals:
    totals = PositionTotals()
    for trade in trades:
        totals = totals.apply(trade)
    return totals


def _value_holding(symbol: str, totals: PositionTotals, price: PriceSnapshot | None) -> Holding:
    shares = totals.net_quantity
    avg_price = totals.avg_buy_price
    investment = avg_price * shares
    if price is None:
        return Holding(
            symbol=symbol,
            shares_held=shares,
            avg_buy_price=avg_price,
            latest_price=None,
            change_percentage=None,
            market_value=_ZERO,
            investment=investment,
            unrealized_pl=_ZERO,
            percent_updown=_ZERO,
            last_update=None,
        )
    percent = (price.price - avg_price) / avg_price * _HUNDRED if avg_price > 0 else _ZERO
    return Holding(
        symbol=symbol,
        shares_held=shares,
        avg_buy_price=avg_price,
        latest_price=price.price,
        change_percentage=price.percentage,
        market_value=price.price * shares,
        investment=investment,
        unrealized_pl=(price.price - avg_price) * shares,
        percent_updown=percent,
        last_update=price.fetched_at,
    )


def aggregate_holdings(
    trades: Iterable[Trade],
    latest: Mapping[str, PriceSnapshot],
) -> List[Holding]:
    """Return one holding per symbol with a strictly positive net position."""

    holdings: List[Holding] = []
    for symbol, symbol_trades in group_by_symbol(trades).items():
        totals = position_totals(symbol_trades)
        if totals.net_quantity <= 0:
            continue
        holdings.append(_value_holding(symbol, totals, latest.get(symbol)))
    return holdings


def summarize(holdings: Sequence[Holding], realized_profit: Decimal = _ZERO) -> PortfolioSummary:
    total_investment = sum((h.investment for h in holdings), _ZERO)
    total_market_value = sum((h.market_value for h in holdings), _ZERO)
    total_unrealized = sum((h.unrealized_pl for h in holdings), _ZERO)
    if total_investment > 0:
        total_percent = (total_market_value - total_investment) / total_investment * _HUNDRED
    else:
        total_percent = _ZERO
    return PortfolioSummary(
        total_investment=total_investment,
        total_market_value=total_market_value,
        total_unrealized_pl=total_unrealized,
        total_percent_updown=total_percent,
        realized_profit=Decimal(realized_profit),
    )


def value_portfolio(
    trades: Sequence[Trade],
    prices: Iterable[PriceSnapshot],
    *,
    strict_oversell: bool = False,
) -> PortfolioValuation:
    """Compute holdings, FIFO results and the summary from a ledger snapshot.

    ``prices`` may be a full history or an already reduced latest view.
    """

    ledger = list(trades)
    if not ledger:
        return PortfolioValuation()
    holdings = aggregate_holdings(ledger, latest_prices(prices))
    fifo = match_fifo(ledger, strict=strict_oversell)
    return PortfolioValuation(
        holdings=holdings,
        summary=summarize(holdings, fifo.realized_profit),
        fifo=fifo,
    )


__all__ = [
    "PositionTotals",
    "PortfolioValuation",
    "position_totals",
    "aggregate_holdings",
    "summarize",
    "value_portfolio",
]
