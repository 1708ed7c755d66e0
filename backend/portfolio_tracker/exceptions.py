"""Errors raised by the valuation engine."""

from __future__ import annotations

from datetime import date


class LedgerError(ValueError):
    """Base class for ledger problems detected by the engine."""


class InvalidTradeError(LedgerError):
    """A trade record failed its preconditions."""


class OversellError(LedgerError):
    """A sell could not be fully matched against open buy lots."""

    def __init__(self, symbol: str, trade_date: date, unmatched_quantity: int):
        self.symbol = symbol
        self.trade_date = trade_date
        self.unmatched_quantity = unmatched_quantity
        super().__init__(
            f"Sell of {symbol} on {trade_date.isoformat()} exceeds open lots by {unmatched_quantity} shares"
        )


__all__ = ["LedgerError", "InvalidTradeError", "OversellError"]
