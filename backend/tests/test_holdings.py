"""Holdings aggregation and portfolio summary."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

from portfolio_tracker import PortfolioSummary, PriceSnapshot, Trade, aggregate_holdings, value_portfolio
from portfolio_tracker.holdings import position_totals, summarize


def _trade(symbol, kind, qty, price, day=1):
    return Trade(symbol=symbol, trade_type=kind, quantity=qty, price=Decimal(str(price)), trade_date=date(2024, 3, day))


def _price(symbol, price, hour=10, percentage="+1.00%"):
    return PriceSnapshot(
        symbol=symbol,
        price=Decimal(str(price)),
        fetched_at=datetime(2024, 3, 4, hour, tzinfo=timezone.utc),
        percentage=percentage,
    )


def test_buys_only_conserve_quantity_and_weighted_average():
    trades = [_trade("OGDC", "Buy", 100, 10), _trade("OGDC", "Buy", 50, 13, day=2)]

    holdings = aggregate_holdings(trades, {"OGDC": _price("OGDC", 12)})

    assert len(holdings) == 1
    holding = holdings[0]
    assert holding.shares_held == 150
    assert holding.avg_buy_price == Decimal("1650") / Decimal("150")
    assert holding.investment == Decimal("1650")
    assert holding.market_value == Decimal("1800")


def test_fully_exited_symbol_is_excluded():
    trades = [
        _trade("PSO", "Buy", 100, 200),
        _trade("PSO", "Sell", 60, 210, day=2),
        _trade("PSO", "Buy", 10, 190, day=3),
        _trade("PSO", "Sell", 50, 220, day=4),
        _trade("LUCK", "Buy", 5, 700),
    ]

    holdings = aggregate_holdings(trades, {})

    assert [h.symbol for h in holdings] == ["LUCK"]


def test_net_short_symbol_is_excluded():
    trades = [_trade("HBL", "Buy", 10, 5), _trade("HBL", "Sell", 20, 8, day=2)]

    assert aggregate_holdings(trades, {"HBL": _price("HBL", 9)}) == []


def test_average_cost_is_stable_under_partial_sell():
    trades = [_trade("ENGRO", "Buy", 100, 10), _trade("ENGRO", "Sell", 40, 20, day=2)]

    totals = position_totals(trades)
    holding = aggregate_holdings(trades, {"ENGRO": _price("ENGRO", 15)})[0]

    assert totals.total_buy_quantity == 100
    assert holding.avg_buy_price == Decimal("10")
    assert holding.shares_held == 60
    assert holding.investment == Decimal("600")
    assert holding.unrealized_pl == Decimal("300")
    assert holding.percent_updown == Decimal("50")


def test_missing_price_yields_sentinels():
    holding = aggregate_holdings([_trade("MARI", "Buy", 10, 100)], {})[0]

    assert holding.latest_price is None
    assert holding.change_percentage is None
    assert holding.last_update is None
    assert holding.market_value == Decimal("0")
    assert holding.unrealized_pl == Decimal("0")
    assert holding.percent_updown == Decimal("0")
    assert holding.investment == Decimal("1000")


def test_price_metadata_is_passed_through():
    snapshot = _price("OGDC", 110, percentage="-0.50%")

    holding = aggregate_holdings([_trade("OGDC", "Buy", 1, 100)], {"OGDC": snapshot})[0]

    assert holding.change_percentage == "-0.50%"
    assert holding.last_update == snapshot.fetched_at


def test_empty_ledger_gives_zero_summary():
    valuation = value_portfolio([], [_price("OGDC", 10)])

    assert valuation.holdings == []
    assert valuation.summary == PortfolioSummary()
    assert valuation.summary.total_percent_updown == Decimal("0")


def test_summary_guards_zero_investment():
    summary = summarize([], Decimal("25"))

    assert summary.total_investment == Decimal("0")
    assert summary.total_percent_updown == Decimal("0")
    assert summary.realized_profit == Decimal("25")


def test_value_portfolio_uses_latest_snapshot_and_realized_profit():
    trades = [
        _trade("OGDC", "Buy", 100, 10),
        _trade("OGDC", "Buy", 50, 12, day=2),
        _trade("OGDC", "Sell", 120, 15, day=3),
        _trade("PPL", "Buy", 10, 50),
    ]
    prices = [_price("OGDC", 11, hour=9), _price("OGDC", 14, hour=15), _price("PPL", 40)]

    valuation = value_portfolio(trades, prices)

    by_symbol = {h.symbol: h for h in valuation.holdings}
    assert by_symbol["OGDC"].shares_held == 30
    assert by_symbol["OGDC"].latest_price == Decimal("14")
    summary = valuation.summary
    assert summary.realized_profit == Decimal("560")
    assert summary.total_investment == sum((h.investment for h in valuation.holdings), Decimal("0"))
    assert summary.total_market_value == Decimal("30") * 14 + Decimal("400")
    expected_percent = (
        (summary.total_market_value - summary.total_investment) / summary.total_investment * 100
    )
    assert summary.total_percent_updown == expected_percent


def test_valuation_is_idempotent():
    trades = [_trade("OGDC", "Buy", 100, 10), _trade("OGDC", "Sell", 30, 11, day=2), _trade("PPL", "Buy", 7, 3)]
    prices = [_price("OGDC", 12), _price("PPL", 4)]

    assert value_portfolio(trades, prices) == value_portfolio(trades, prices)


def test_symbols_are_independent():
    base = [_trade("OGDC", "Buy", 100, 10), _trade("OGDC", "Sell", 20, 15, day=2)]
    noise = [_trade("PPL", "Buy", 40, 99, day=1), _trade("PPL", "Sell", 40, 1, day=2)]
    prices = [_price("OGDC", 12)]

    alone = value_portfolio(base, prices)
    mixed = value_portfolio(noise[:1] + base + noise[1:], prices)

    assert alone.holdings == mixed.holdings
    assert alone.fifo.by_symbol["OGDC"] == mixed.fifo.by_symbol["OGDC"]
