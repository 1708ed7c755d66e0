"""Alert persistence and evaluation against the latest prices."""

from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Alert
from app.schemas import AlertCreateRequest
from portfolio_tracker.alerts import AlertBreach, PriceBand, evaluate_alerts

from .ledger import load_latest_prices

logger = logging.getLogger(__name__)


def to_band(alert: Alert) -> PriceBand:
    return PriceBand(
        id=alert.id,
        symbol=alert.symbol,
        min_price=Decimal(str(alert.min_price)),
        max_price=Decimal(str(alert.max_price)),
        enabled=bool(alert.enabled),
    )


async def list_alerts(session: AsyncSession) -> list[Alert]:
    result = await session.execute(select(Alert).order_by(Alert.symbol, Alert.id))
    return list(result.scalars().all())


async def create_alert(payload: AlertCreateRequest, session: AsyncSession) -> Alert:
    record = Alert(
        symbol=payload.symbol,
        min_price=Decimal(str(payload.min_price)),
        max_price=Decimal(str(payload.max_price)),
        enabled=payload.enabled,
        trigger=False,
        trade_type=payload.trade_type,
        quantity=payload.quantity,
        notes=payload.notes,
    )
    session.add(record)
    await session.commit()
    await session.refresh(record)
    return record


async def _get_alert(alert_id: int, session: AsyncSession) -> Alert:
    record = await session.get(Alert, alert_id)
    if record is None:
        raise ValueError("Alert not found")
    return record


async def set_enabled(alert_id: int, enabled: bool, session: AsyncSession) -> Alert:
    record = await _get_alert(alert_id, session)
    record.enabled = enabled
    await session.commit()
    await session.refresh(record)
    return record


async def set_trigger(alert_id: int, trigger: bool, session: AsyncSession) -> Alert:
    record = await _get_alert(alert_id, session)
    record.trigger = trigger
    await session.commit()
    await session.refresh(record)
    return record


async def delete_alert(alert_id: int, session: AsyncSession) -> None:
    record = await _get_alert(alert_id, session)
    await session.delete(record)
    await session.commit()


async def run_alert_check(session: AsyncSession) -> list[tuple[Alert, AlertBreach]]:
    """Mark every breached alert as triggered and return the breaches."""

    alerts = await list_alerts(session)
    if not alerts:
        return []
    latest = await load_latest_prices(session, {alert.symbol for alert in alerts})
    by_id = {alert.id: alert for alert in alerts}
    breaches = evaluate_alerts((to_band(alert) for alert in alerts), latest)
    results: list[tuple[Alert, AlertBreach]] = []
    for breach in breaches:
        record = by_id[breach.band.id]
        if not record.trigger:
            logger.info(
                "Alert %s for %s triggered: %s is %s band %s-%s",
                record.id,
                record.symbol,
                breach.price,
                breach.direction,
                record.min_price,
                record.max_price,
            )
        record.trigger = True
        results.append((record, breach))
    await session.commit()
    return results


__all__ = [
    "to_band",
    "list_alerts",
    "create_alert",
    "set_enabled",
    "set_trigger",
    "delete_alert",
    "run_alert_check",
]
