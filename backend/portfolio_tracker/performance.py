"""Daily percentage-change table over the most recent trading days."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd

from .models import PriceSnapshot
from .scoring import LEADING_NUMBER

DEFAULT_DAYS = 7
_WEEKEND = (5, 6)


@dataclass(frozen=True)
class SymbolPerformance:
    symbol: str
    daily: Dict[date, Optional[float]] = field(default_factory=dict)
    net_change: Optional[float] = None


def parse_percentage(raw: object) -> Optional[float]:
    """Turn ``"+1.25%"`` style strings into floats; missing counts as 0."""

    if raw is None or raw == "" or (isinstance(raw, float) and pd.isna(raw)):
        return 0.0
    if isinstance(raw, (int, float)):
        return float(raw)
    # Reads the leading number and ignores trailing text such as "%" or notes.
    match = LEADING_NUMBER.match(str(raw).strip())
    return float(match.group()) if match else None


def _daily_frame(snapshots: Iterable[PriceSnapshot]) -> pd.DataFrame:
    frame = pd.DataFrame(
        [{"fetched_at": snap.fetched_at, "percentage": snap.percentage} for snap in snapshots],
        columns=["fetched_at", "percentage"],
    )
    if frame.empty:
        return frame
    frame["fetched_at"] = pd.to_datetime(frame["fetched_at"], utc=True)
    frame["day"] = frame["fetched_at"].dt.date
    frame = frame[~frame["fetched_at"].dt.dayofweek.isin(_WEEKEND)]
    # latest snapshot per calendar day
    frame = frame.sort_values("fetched_at").groupby("day", sort=True).tail(1)
    return frame.sort_values("day")


def symbol_performance(
    symbol: str,
    snapshots: Iterable[PriceSnapshot],
    days: int = DEFAULT_DAYS,
) -> SymbolPerformance:
    if days <= 0:
        raise ValueError("days must be positive")
    frame = _daily_frame(snapshots)
    if frame.empty:
        return SymbolPerformance(symbol=symbol)
    window = frame.tail(days)
    daily = {row.day: parse_percentage(row.percentage) for row in window.itertuples(index=False)}
    parsed = [value for value in daily.values() if value is not None]
    return SymbolPerformance(
        symbol=symbol,
        daily=daily,
        net_change=sum(parsed) if parsed else None,
    )


def performance_table(
    history: Dict[str, Sequence[PriceSnapshot]],
    symbols: Sequence[str],
    days: int = DEFAULT_DAYS,
) -> List[SymbolPerformance]:
    """Build one row per requested symbol, in request order."""

    return [symbol_performance(symbol, history.get(symbol, ()), days) for symbol in symbols]


__all__ = ["DEFAULT_DAYS", "SymbolPerformance", "parse_percentage", "symbol_performance", "performance_table"]
