"""Login, token verification and logout for the single admin account."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.api.dependencies.auth import get_current_user
from app.api.dependencies.db import get_app_settings
from app.config import AppSettings
from app.core.security import (
    ADMIN_USER_ID,
    TokenClaims,
    authenticate_admin,
    create_access_token,
    token_lifetime,
)
from app.schemas import AuthResponse, LoginRequest, UserOut

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginRequest,
    response: Response,
    settings: AppSettings = Depends(get_app_settings),
) -> AuthResponse:
    email = str(payload.email).strip().lower()
    if not authenticate_admin(email, payload.password, settings):
        logger.info("Failed login attempt for %s", email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    token = create_access_token(email, settings)
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        httponly=True,
        secure=settings.auth_cookie_secure,
        samesite="lax",
        max_age=int(token_lifetime(settings).total_seconds()),
    )
    logger.info("Admin login for %s", email)
    return AuthResponse(access_token=token, user=UserOut(user_id=ADMIN_USER_ID, email=email))


@router.get("/verify", response_model=UserOut)
async def verify(current_user: TokenClaims = Depends(get_current_user)) -> UserOut:
    return UserOut(user_id=current_user.user_id, email=current_user.email)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(settings: AppSettings = Depends(get_app_settings)) -> Response:
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(settings.auth_cookie_name)
    return response


__all__ = ["router"]
