"""Database and settings dependencies bound to the running application."""

from __future__ import annotations

from typing import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import AppSettings
from app.db.session import Database


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Yield a session from the database attached to ``app.state``."""

    database: Database = request.app.state.database
    async with database.session() as session:
        yield session


def get_app_settings(request: Request) -> AppSettings:
    return request.app.state.settings


__all__ = ["get_db", "get_app_settings"]
