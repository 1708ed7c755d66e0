"""Daily performance table built with pandas."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from portfolio_tracker import PriceSnapshot
from portfolio_tracker.performance import parse_percentage, performance_table, symbol_performance


def _snap(day, hour, percentage, symbol="OGDC"):
    return PriceSnapshot(
        symbol=symbol,
        price=Decimal("100"),
        fetched_at=datetime(2024, 3, day, hour, tzinfo=timezone.utc),
        percentage=percentage,
    )


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("+1.25%", 1.25),
        ("-0.5%", -0.5),
        (" 0.75 % ", 0.75),
        ("1.5abc", 1.5),
        (None, 0.0),
        ("", 0.0),
        (2, 2.0),
        ("n/a", None),
    ],
)
def test_parse_percentage(raw, expected):
    assert parse_percentage(raw) == expected


def test_weekends_are_skipped_and_last_snapshot_per_day_wins():
    # 2024-03-01 is a Friday.
    history = [
        _snap(1, 9, "+0.50%"),
        _snap(1, 15, "+1.00%"),
        _snap(2, 12, "+9.00%"),
        _snap(3, 12, "+9.00%"),
        _snap(4, 10, "-0.25%"),
    ]

    result = symbol_performance("OGDC", history, days=7)

    assert result.daily == {date(2024, 3, 1): 1.0, date(2024, 3, 4): -0.25}
    assert result.net_change == pytest.approx(0.75)


def test_window_keeps_most_recent_days():
    history = [_snap(day, 12, f"+{day}%") for day in (4, 5, 6, 7, 8)]

    result = symbol_performance("OGDC", history, days=2)

    assert list(result.daily) == [date(2024, 3, 7), date(2024, 3, 8)]
    assert result.net_change == pytest.approx(15.0)


def test_unparseable_percentage_is_left_out_of_net_change():
    history = [_snap(4, 12, "bad"), _snap(5, 12, "+2%")]

    result = symbol_performance("OGDC", history)

    assert result.daily[date(2024, 3, 4)] is None
    assert result.net_change == pytest.approx(2.0)


def test_table_follows_requested_order_and_handles_missing_history():
    history = {"PPL": [_snap(4, 12, "+1%", symbol="PPL")]}

    rows = performance_table(history, ["OGDC", "PPL"], days=3)

    assert [row.symbol for row in rows] == ["OGDC", "PPL"]
    assert rows[0].daily == {}
    assert rows[0].net_change is None
    assert rows[1].net_change == pytest.approx(1.0)


def test_days_must_be_positive():
    with pytest.raises(ValueError):
        symbol_performance("OGDC", [], days=0)
