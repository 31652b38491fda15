"""Job board REST API - FastAPI application factory.

Run with (``pip install jobboard[serve]``)::

    uvicorn jobboard.api:create_app --factory
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jobboard.api.errors import register_error_handlers
from jobboard.api.middleware.request_id import RequestIDMiddleware
from jobboard.api.routers import jobs
from jobboard.core.database import (
    DEFAULT_DATABASE_URL,
    build_engine,
    build_session_factory,
    create_tables,
)
from jobboard.core.logging import setup_logging

log = structlog.get_logger(__name__)


def _lifespan_for(database_url: str | None):
    @asynccontextmanager
    async def _lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Startup: open the engine. Shutdown: dispose it."""
        url = database_url or os.environ.get("JOBBOARD_DATABASE_URL", DEFAULT_DATABASE_URL)
        engine = build_engine(url)
        if os.environ.get("JOBBOARD_CREATE_TABLES", "1") == "1":
            await create_tables(engine)
        app.state.engine = engine
        app.state.session_factory = build_session_factory(engine)
        log.info("app.started", database=engine.url.render_as_string(hide_password=True))
        try:
            yield
        finally:
            await engine.dispose()
            app.state.session_factory = None
            log.info("app.stopped")

    return _lifespan


def create_app(database_url: str | None = None) -> FastAPI:
    """Build and return the FastAPI application."""
    setup_logging()

    app = FastAPI(
        title="Job Board",
        docs_url="/api/v1/docs",
        openapi_url="/api/v1/openapi.json",
        lifespan=_lifespan_for(database_url),
    )

    register_error_handlers(app)

    # Last added is outermost: CORS wraps the request-id middleware, which
    # renders unexpected 500s itself.
    app.add_middleware(RequestIDMiddleware)
    cors_origins = os.environ.get("JOBBOARD_CORS_ORIGINS", "http://localhost:3000")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in cors_origins.split(",")],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", tags=["ops"])
    async def health() -> JSONResponse:
        return JSONResponse({"status": "ok"})

    app.include_router(jobs.router, prefix="/api/v1/jobs", tags=["jobs"])

    return app
