from __future__ import annotations
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.api import router
from app.errors import register_error_handlers
from logging_config import configure_logging
from services.readings import build_default_pipeline
from services.upstream import build_default_client


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    client = build_default_client()
    try:
        yield
    finally:
        await client.aclose()
        build_default_pipeline.cache_clear()
        build_default_client.cache_clear()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="Rainfall Gateway",
        description="Rainfall readings for flood-monitoring stations, proxied from the upstream API.",
        version="0.1.0",
        lifespan=lifespan,
    )
    register_error_handlers(app)
    app.include_router(router)
    return app

app = create_app()
