"""Partition a trade ledger by symbol."""
from __future__ import annotations

from typing import Dict, Iterable, List

from .models import Trade


def chronological(trades: Iterable[Trade]) -> List[Trade]:
    """Return trades sorted by trade date; ties keep ledger order."""

    return sorted(trades, key=lambda trade: trade.trade_date)


def group_by_symbol(trades: Iterable[Trade], *, ordered: bool = False) -> Dict[str, List[Trade]]:
    """Build a fresh symbol -> trades mapping.

    Each call folds into its own dict, so concurrent requests never share an
    accumulator. With ``ordered=True`` every bucket is sorted chronologically.
    """

    grouped: Dict[str, List[Trade]] = {}
    for trade in trades:
        grouped.setdefault(trade.symbol, []).append(trade)
    if ordered:
        return {symbol: chronological(bucket) for symbol, bucket in grouped.items()}
    return grouped


__all__ = ["chronological", "group_by_symbol"]
