"""Reduce a price history to the latest snapshot per symbol."""
from __future__ import annotations

from typing import Dict, Iterable

from .models import PriceSnapshot


def latest_prices(snapshots: Iterable[PriceSnapshot]) -> Dict[str, PriceSnapshot]:
    """Keep the snapshot with the greatest ``fetched_at`` for each symbol.

    When two snapshots share a timestamp the one seen first is kept.
    """

    latest: Dict[str, PriceSnapshot] = {}
    for snapshot in snapshots:
        current = latest.get(snapshot.symbol)
        if current is None or snapshot.fetched_at > current.fetched_at:
            latest[snapshot.symbol] = snapshot
    return latest


__all__ = ["latest_prices"]
