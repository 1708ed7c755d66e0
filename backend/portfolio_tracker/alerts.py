"""Price band alert evaluation."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Mapping, Optional

from .models import PriceSnapshot


@dataclass(frozen=True)
class PriceBand:
    """The fields of an alert the evaluator needs."""

    symbol: str
    min_price: Decimal
    max_price: Decimal
    enabled: bool = True
    id: Optional[int] = None


@dataclass(frozen=True)
class AlertBreach:
    band: PriceBand
    price: Decimal
    direction: str


def check_band(band: PriceBand, price: Decimal) -> Optional[str]:
    """Return ``"below"``/``"above"`` when ``price`` leaves the band."""

    if price < band.min_price:
        return "below"
    if price > band.max_price:
        return "above"
    return None


def evaluate_alerts(
    bands: Iterable[PriceBand],
    latest: Mapping[str, PriceSnapshot],
) -> List[AlertBreach]:
    """Return breaches for enabled alerts whose symbol has a latest price."""

    breaches: List[AlertBreach] = []
    for band in bands:
        if not band.enabled:
            continue
        snapshot = latest.get(band.symbol)
        if snapshot is None:
            continue
        direction = check_band(band, snapshot.price)
        if direction is not None:
            breaches.append(AlertBreach(band=band, price=snapshot.price, direction=direction))
    return breaches


__all__ = ["PriceBand", "AlertBreach", "check_band", "evaluate_alerts"]
