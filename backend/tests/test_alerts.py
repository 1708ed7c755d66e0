"""Price band alert evaluation."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from portfolio_tracker import PriceSnapshot
from portfolio_tracker.alerts import PriceBand, check_band, evaluate_alerts


def _band(symbol="OGDC", low="90", high="110", enabled=True, id=1):
    return PriceBand(symbol=symbol, min_price=Decimal(low), max_price=Decimal(high), enabled=enabled, id=id)


def _latest(**prices):
    fetched = datetime(2024, 3, 4, 12, tzinfo=timezone.utc)
    return {
        symbol: PriceSnapshot(symbol=symbol, price=Decimal(str(price)), fetched_at=fetched)
        for symbol, price in prices.items()
    }


def test_check_band_edges_are_inside():
    band = _band()

    assert check_band(band, Decimal("90")) is None
    assert check_band(band, Decimal("110")) is None
    assert check_band(band, Decimal("89.99")) == "below"
    assert check_band(band, Decimal("110.01")) == "above"


def test_evaluate_reports_breaches_only():
    bands = [_band("OGDC", id=1), _band("PPL", "50", "60", id=2), _band("HBL", id=3)]

    breaches = evaluate_alerts(bands, _latest(OGDC=120, PPL=55, HBL=80))

    assert [(b.band.id, b.direction, b.price) for b in breaches] == [
        (1, "above", Decimal("120")),
        (3, "below", Decimal("80")),
    ]


def test_disabled_and_unpriced_alerts_are_skipped():
    bands = [_band("OGDC", enabled=False, id=1), _band("LUCK", id=2)]

    assert evaluate_alerts(bands, _latest(OGDC=500)) == []
