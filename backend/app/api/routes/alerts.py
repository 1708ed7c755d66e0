"""Price alert endpoints."""

from __future__ import annotations

from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies.db import get_db
from app.models import Alert
from app.schemas import AlertBreachSchema, AlertCreateRequest, AlertFlagUpdate, AlertSchema
from app.services import alerts as alert_service

router = APIRouter()


def _serialize_alert(alert: Alert) -> AlertSchema:
    return AlertSchema(
        id=alert.id,
        symbol=alert.symbol,
        min_price=float(Decimal(str(alert.min_price))),
        max_price=float(Decimal(str(alert.max_price))),
        enabled=alert.enabled,
        trigger=alert.trigger,
        trade_type=alert.trade_type,
        quantity=alert.quantity,
        notes=alert.notes,
    )


@router.get("", response_model=list[AlertSchema])
async def get_alerts(session: AsyncSession = Depends(get_db)) -> list[AlertSchema]:
    return [_serialize_alert(alert) for alert in await alert_service.list_alerts(session)]


@router.post("", response_model=AlertSchema, status_code=status.HTTP_201_CREATED)
async def post_alert(
    payload: AlertCreateRequest,
    session: AsyncSession = Depends(get_db),
) -> AlertSchema:
    record = await alert_service.create_alert(payload, session)
    return _serialize_alert(record)


@router.patch("/{alert_id}/enabled", response_model=AlertSchema)
async def patch_enabled(
    alert_id: int,
    payload: AlertFlagUpdate,
    session: AsyncSession = Depends(get_db),
) -> AlertSchema:
    try:
        record = await alert_service.set_enabled(alert_id, payload.value, session)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return _serialize_alert(record)


@router.patch("/{alert_id}/trigger", response_model=AlertSchema)
async def patch_trigger(
    alert_id: int,
    payload: AlertFlagUpdate,
    session: AsyncSession = Depends(get_db),
) -> AlertSchema:
    try:
        record = await alert_service.set_trigger(alert_id, payload.value, session)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return _serialize_alert(record)


@router.delete("/{alert_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_alert(alert_id: int, session: AsyncSession = Depends(get_db)) -> Response:
    try:
        await alert_service.delete_alert(alert_id, session)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/evaluate", response_model=list[AlertBreachSchema])
async def evaluate(session: AsyncSession = Depends(get_db)) -> list[AlertBreachSchema]:
    breaches = await alert_service.run_alert_check(session)
    return [
        AlertBreachSchema(alert=_serialize_alert(record), price=float(breach.price), direction=breach.direction)
        for record, breach in breaches
    ]


__all__ = ["router"]
