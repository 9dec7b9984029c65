"""FastAPI entrypoint for the diary feed service."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from .api import middleware
from .api.routers import users
from .config import Settings, load_settings
from .infra.diary_api import build_http_client
from .infra.logging import configure_logging, get_logger

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Instantiate the FastAPI app around an explicit settings object."""

    settings = settings or load_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(application: FastAPI) -> AsyncIterator[None]:
        application.state.http_client = build_http_client(settings.upstream)
        logger.info(
            "app_started",
            extra={
                "environment": settings.environment,
                "upstream_endpoint": settings.upstream.endpoint,
            },
        )
        try:
            yield
        finally:
            await application.state.http_client.aclose()

    application = FastAPI(title="diaryfeed", version="0.1.0", lifespan=lifespan)
    application.state.settings = settings
    middleware.install(application)
    application.include_router(users.router)
    return application


app = create_app()
