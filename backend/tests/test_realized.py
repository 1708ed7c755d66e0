"""FIFO realized-profit matching."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from portfolio_tracker import OpenLot, OversellError, Trade, calculate_realized_profit, match_fifo
from portfolio_tracker.realized import match_symbol, open_lots


def _trade(symbol, kind, qty, price, day):
    return Trade(symbol=symbol, trade_type=kind, quantity=qty, price=Decimal(str(price)), trade_date=date(2024, 1, day))


def test_sell_spanning_two_lots():
    trades = [
        _trade("OGDC", "Buy", 100, 10, 1),
        _trade("OGDC", "Buy", 50, 12, 2),
        _trade("OGDC", "Sell", 120, 15, 3),
    ]

    result = match_fifo(trades)

    assert result.realized_profit == Decimal("560")
    assert result.by_symbol["OGDC"].open_lots == (OpenLot(quantity=30, price=Decimal("12")),)
    assert open_lots(trades) == {"OGDC": [OpenLot(quantity=30, price=Decimal("12"))]}


def test_matching_follows_trade_date_not_ledger_order():
    trades = [
        _trade("OGDC", "Sell", 120, 15, 3),
        _trade("OGDC", "Buy", 50, 12, 2),
        _trade("OGDC", "Buy", 100, 10, 1),
    ]

    assert calculate_realized_profit(trades) == Decimal("560")


def test_same_day_trades_keep_ledger_order():
    trades = [
        _trade("PSO", "Buy", 10, 100, 5),
        _trade("PSO", "Buy", 10, 200, 5),
        _trade("PSO", "Sell", 10, 150, 5),
    ]

    result = match_fifo(trades).by_symbol["PSO"]

    assert result.realized_profit == Decimal("500")
    assert result.open_lots == (OpenLot(quantity=10, price=Decimal("200")),)


def test_oversell_counts_only_matched_shares():
    trades = [_trade("HBL", "Buy", 10, 5, 1), _trade("HBL", "Sell", 20, 8, 2)]

    result = match_fifo(trades)

    assert result.realized_profit == Decimal("30")
    assert result.by_symbol["HBL"].unmatched_sell_quantity == 10
    assert result.by_symbol["HBL"].open_lots == ()


def test_strict_mode_rejects_oversell():
    trades = [_trade("HBL", "Buy", 10, 5, 1), _trade("HBL", "Sell", 20, 8, 2)]

    with pytest.raises(OversellError) as excinfo:
        match_fifo(trades, strict=True)

    assert excinfo.value.symbol == "HBL"
    assert excinfo.value.unmatched_quantity == 10
    assert isinstance(excinfo.value, ValueError)


def test_sell_without_any_buy_realizes_nothing():
    result = match_symbol("UBL", [_trade("UBL", "Sell", 5, 100, 1)])

    assert result.realized_profit == Decimal("0")
    assert result.unmatched_sell_quantity == 5


def test_losses_are_negative():
    trades = [_trade("LUCK", "Buy", 10, 700, 1), _trade("LUCK", "Sell", 10, 650, 2)]

    assert calculate_realized_profit(trades) == Decimal("-500")


def test_symbols_are_matched_independently():
    ogdc = [_trade("OGDC", "Buy", 100, 10, 1), _trade("OGDC", "Sell", 50, 12, 4)]
    ppl = [_trade("PPL", "Buy", 5, 80, 2), _trade("PPL", "Sell", 5, 70, 3)]

    combined = match_fifo(ogdc + ppl)

    assert combined.by_symbol["OGDC"] == match_fifo(ogdc).by_symbol["OGDC"]
    assert combined.by_symbol["PPL"] == match_fifo(ppl).by_symbol["PPL"]
    assert combined.realized_profit == Decimal("100") + Decimal("-50")


def test_empty_ledger():
    result = match_fifo([])

    assert result.realized_profit == Decimal("0")
    assert result.by_symbol == {}
