# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text

from fedisearch.api.router import v2_router
from fedisearch.api.search import limiter
from fedisearch.config import SearchPolicy, get_settings
from fedisearch.db.session import get_engine, get_session_factory
from fedisearch.log_config import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: startup and shutdown hooks."""
    settings = get_settings()
    setup_logging(settings)

    http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.elasticsearch_timeout),
        headers={"Content-Type": "application/json", "Accept": "application/json"},
        limits=httpx.Limits(max_connections=50, max_keepalive_connections=20),
    )

    # Store on app state for access in endpoints
    app.state.http_client = http_client
    app.state.session_factory = get_session_factory()
    app.state.search_policy = SearchPolicy.from_settings(settings)

    yield

    # Shutdown: cleanup
    await http_client.aclose()
    await get_engine().dispose()


app = FastAPI(
    title="Fedisearch",
    version="0.1.0",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(v2_router, prefix="/v2")


@app.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe. Returns 200 if the process is running."""
    return {"status": "healthy"}


@app.get("/ready")
async def ready() -> dict[str, str]:
    """Readiness probe. Checks database connectivity."""
    engine = get_engine()
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    return {"status": "ready"}
