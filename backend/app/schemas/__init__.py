"""Pydantic schema exports."""

from .alerts import AlertBreachSchema, AlertCreateRequest, AlertFlagUpdate, AlertSchema
from .auth import AuthResponse, LoginRequest, UserOut
from .portfolio import (
    HoldingSchema,
    OpenLotSchema,
    PortfolioResponse,
    PortfolioSummarySchema,
    SymbolRealizedSchema,
)
from .prices import PriceCreateRequest, PriceSchema
from .stocks import (
    PerformanceRowSchema,
    ScoreReasonSchema,
    StockCreateRequest,
    StockSchema,
    StockScoreSchema,
)
from .trades import TradeCreateRequest, TradeSchema

__all__ = [
    "AlertBreachSchema",
    "AlertCreateRequest",
    "AlertFlagUpdate",
    "AlertSchema",
    "AuthResponse",
    "LoginRequest",
    "UserOut",
    "HoldingSchema",
    "OpenLotSchema",
    "PortfolioResponse",
    "PortfolioSummarySchema",
    "SymbolRealizedSchema",
    "PriceCreateRequest",
    "PriceSchema",
    "PerformanceRowSchema",
    "ScoreReasonSchema",
    "StockCreateRequest",
    "StockSchema",
    "StockScoreSchema",
    "TradeCreateRequest",
    "TradeSchema",
]
