"""Authentication helpers for API routes."""

from __future__ import annotations

import logging

from fastapi import Depends, Header, HTTPException, Request, status

from app.config import AppSettings
from app.core.security import TokenClaims, TokenError, decode_access_token

from .db import get_app_settings

logger = logging.getLogger(__name__)


def extract_token(request: Request, authorization: str | None, settings: AppSettings) -> str | None:
    """Prefer the HTTP-only cookie, fall back to a bearer header."""

    cookie_token = request.cookies.get(settings.auth_cookie_name)
    if cookie_token:
        return cookie_token
    if authorization and authorization.lower().startswith("bearer "):
        return authorization.split(" ", 1)[1].strip() or None
    return None


async def get_current_user(
    request: Request,
    authorization: str | None = Header(default=None),
    settings: AppSettings = Depends(get_app_settings),
) -> TokenClaims:
    token = extract_token(request, authorization, settings)
    if token is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="No token provided")
    try:
        return decode_access_token(token, settings)
    except TokenError as exc:
        logger.info("Rejected token: %s", exc)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc


__all__ = ["extract_token", "get_current_user"]
