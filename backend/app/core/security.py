"""Security helpers for hashing passwords and issuing signed tokens."""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
from passlib.context import CryptContext

from app.config import AppSettings

# pbkdf2 for new hashes; bcrypt hashes produced elsewhere still verify.
_pwd_context = CryptContext(schemes=["pbkdf2_sha256", "bcrypt"], deprecated="auto")

ADMIN_USER_ID = "admin"


class TokenError(Exception):
    """Raised when a token is missing, malformed, expired, or forged."""


@dataclass(frozen=True)
class TokenClaims:
    user_id: str
    email: str
    expires_at: datetime


def hash_password(plain_password: str) -> str:
    return _pwd_context.hash(plain_password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    try:
        return _pwd_context.verify(plain_password, password_hash)
    except ValueError:
        return False


def token_lifetime(settings: AppSettings) -> timedelta:
    return timedelta(days=settings.token_lifetime_days)


def authenticate_admin(email: str, password: str, settings: AppSettings) -> bool:
    """Check credentials against the single configured admin account."""

    if not settings.admin_email or not settings.admin_password_hash:
        return False
    if not secrets.compare_digest(email.strip().lower(), settings.admin_email.strip().lower()):
        return False
    return verify_password(password, settings.admin_password_hash)


def create_access_token(email: str, settings: AppSettings, *, user_id: str = ADMIN_USER_ID) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "email": email,
        "iat": now,
        "exp": now + token_lifetime(settings),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: AppSettings) -> TokenClaims:
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise TokenError("Token has expired") from exc
    except jwt.InvalidTokenError as exc:
        raise TokenError("Invalid token") from exc
    return TokenClaims(
        user_id=str(payload["sub"]),
        email=str(payload.get("email", "")),
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )


__all__ = [
    "ADMIN_USER_ID",
    "TokenClaims",
    "TokenError",
    "hash_password",
    "verify_password",
    "token_lifetime",
    "authenticate_admin",
    "create_access_token",
    "decode_access_token",
]
