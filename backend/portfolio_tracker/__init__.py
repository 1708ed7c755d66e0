"""Core valuation engine for the portfolio tracker."""

from .exceptions import InvalidTradeError, LedgerError, OversellError
from .holdings import PortfolioValuation, aggregate_holdings, summarize, value_portfolio
from .models import Holding, OpenLot, PortfolioSummary, PriceSnapshot, Trade, TradeType
from .realized import calculate_realized_profit, match_fifo

__all__ = [
    "Trade",
    "TradeType",
    "PriceSnapshot",
    "Holding",
    "OpenLot",
    "PortfolioSummary",
    "PortfolioValuation",
    "aggregate_holdings",
    "summarize",
    "value_portfolio",
    "calculate_realized_profit",
    "match_fifo",
    "LedgerError",
    "InvalidTradeError",
    "OversellError",
]
