"""FIFO realized-profit calculator.

Sells are settled against the oldest open buy lots of the same symbol. The
result is independent of current market prices.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Deque, Dict, Iterable, List

from .exceptions import OversellError
from .grouping import group_by_symbol
from .models import OpenLot, Trade


@dataclass
class _Lot:
    """Mutable queue entry; only lives inside a single matching run."""

    quantity: int
    price: Decimal


@dataclass(frozen=True)
class SymbolFifo:
    symbol: str
    realized_profit: Decimal
    open_lots: tuple[OpenLot, ...] = ()
    unmatched_sell_quantity: int = 0


@dataclass(frozen=True)
class FifoResult:
    realized_profit: Decimal = Decimal("0")
    by_symbol: Dict[str, SymbolFifo] = field(default_factory=dict)


def match_symbol(symbol: str, trades: Iterable[Trade], *, strict: bool = False) -> SymbolFifo:
    """Run FIFO matching over one symbol's chronologically ordered trades."""

    lots: Deque[_Lot] = deque()
    realized = Decimal("0")
    unmatched_total = 0

    for trade in trades:
        if trade.is_buy:
            lots.append(_Lot(quantity=trade.quantity, price=trade.price))
            continue
        remaining = trade.quantity
        while remaining > 0 and lots:
            lot = lots[0]
            matched = min(remaining, lot.quantity)
            realized += (trade.price - lot.price) * matched
            lot.quantity -= matched
            remaining -= matched
            if lot.quantity == 0:
                lots.popleft()
        if remaining > 0:
            if strict:
                raise OversellError(symbol, trade.trade_date, remaining)
            unmatched_total += remaining

    return SymbolFifo(
        symbol=symbol,
        realized_profit=realized,
        open_lots=tuple(OpenLot(quantity=lot.quantity, price=lot.price) for lot in lots),
        unmatched_sell_quantity=unmatched_total,
    )


def match_fifo(trades: Iterable[Trade], *, strict: bool = False) -> FifoResult:
    """Settle every symbol in the ledger independently and total the profit."""

    by_symbol: Dict[str, SymbolFifo] = {}
    total = Decimal("0")
    for symbol, symbol_trades in group_by_symbol(trades, ordered=True).items():
        result = match_symbol(symbol, symbol_trades, strict=strict)
        by_symbol[symbol] = result
        total += result.realized_profit
    return FifoResult(realized_profit=total, by_symbol=by_symbol)


def calculate_realized_profit(trades: Iterable[Trade], *, strict: bool = False) -> Decimal:
    return match_fifo(trades, strict=strict).realized_profit


def open_lots(trades: Iterable[Trade]) -> Dict[str, List[OpenLot]]:
    return {symbol: list(result.open_lots) for symbol, result in match_fifo(trades).by_symbol.items()}


__all__ = [
    "SymbolFifo",
    "FifoResult",
    "match_symbol",
    "match_fifo",
    "calculate_realized_profit",
    "open_lots",
]
