"""Pydantic schemas for authentication payloads."""

from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class UserOut(BaseModel):
    user_id: str
    email: str


class AuthResponse(BaseModel):
    access_token: str = Field(..., description="Signed token, also set as an HTTP-only cookie")
    token_type: str = Field(default="bearer")
    user: UserOut


__all__ = ["LoginRequest", "UserOut", "AuthResponse"]
