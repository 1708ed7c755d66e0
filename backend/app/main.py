"""FastAPI application entrypoint."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator
from zoneinfo import ZoneInfo

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import api_router
from app.config import AppSettings, get_settings
from app.core.logging import setup_logging
from app.core.telemetry import setup_telemetry
from app.db.init import init_database
from app.db.session import Database

logger = logging.getLogger(__name__)


def create_app(database: Database | None = None, settings: AppSettings | None = None) -> FastAPI:
    """Build the application around one database handle and settings object."""

    settings = settings or get_settings()
    database = database or Database(settings.database_url)
    setup_logging()

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        logger.info("Starting %s with %s", settings.app_name, settings.dict_for_logging())
        await init_database(database)
        yield
        await database.dispose()

    app = FastAPI(title=settings.app_name, version="0.1.0", lifespan=lifespan)
    app.state.database = database
    app.state.settings = settings
    setup_telemetry(app, settings, engine=database.engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        """Return service readiness metadata."""

        return {
            "status": "ok",
            "timestamp": datetime.now(ZoneInfo(settings.timezone)).isoformat(),
            "timezone": settings.timezone,
        }

    app.include_router(api_router)
    return app


app = create_app()

__all__ = ["app", "create_app"]
