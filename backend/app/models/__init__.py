"""Database model exports."""

from .alerts import Alert
from .ledger import TRADE_TYPES, Price, Trade
from .stocks import Stock

__all__ = [
    "Trade",
    "Price",
    "Alert",
    "Stock",
    "TRADE_TYPES",
]
