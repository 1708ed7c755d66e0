"""Latest-price reduction."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from portfolio_tracker import PriceSnapshot
from portfolio_tracker.prices import latest_prices


def _snap(symbol, price, hour, percentage=None):
    return PriceSnapshot(
        symbol=symbol,
        price=Decimal(str(price)),
        fetched_at=datetime(2024, 3, 4, hour, tzinfo=timezone.utc),
        percentage=percentage,
    )


def test_keeps_most_recent_snapshot_per_symbol():
    history = [_snap("OGDC", 100, 9), _snap("PPL", 80, 12), _snap("OGDC", 104, 14), _snap("OGDC", 101, 11)]

    latest = latest_prices(history)

    assert latest["OGDC"].price == Decimal("104")
    assert latest["PPL"].price == Decimal("80")


def test_equal_timestamps_keep_first_seen():
    first, second = _snap("OGDC", 100, 9, "+1%"), _snap("OGDC", 200, 9, "+2%")

    assert latest_prices([first, second])["OGDC"] is first


def test_empty_history():
    assert latest_prices([]) == {}
