"""Route registration helpers."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.dependencies.auth import get_current_user

from .alerts import router as alerts_router
from .auth import router as auth_router
from .portfolio import router as portfolio_router
from .prices import router as prices_router
from .stocks import router as stocks_router
from .trades import router as trades_router

_protected = [Depends(get_current_user)]

api_router = APIRouter()
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(trades_router, prefix="/trades", tags=["trades"], dependencies=_protected)
api_router.include_router(prices_router, prefix="/prices", tags=["prices"], dependencies=_protected)
api_router.include_router(portfolio_router, prefix="/portfolio", tags=["portfolio"], dependencies=_protected)
api_router.include_router(alerts_router, prefix="/alerts", tags=["alerts"], dependencies=_protected)
api_router.include_router(stocks_router, prefix="/stocks", tags=["stocks"], dependencies=_protected)

__all__ = ["api_router"]
