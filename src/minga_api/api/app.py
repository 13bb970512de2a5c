"""
minga_api.api.app

FastAPI app factory.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Create the datastore registry at startup and close it at shutdown.
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError

from minga_api import __version__
from minga_api.api.routers.health import router as health_router
from minga_api.api.routers.users import router as users_router
from minga_api.datastores import Datastores
from minga_api.db.init_db import init_db
from minga_api.observability.logging import configure_logging, get_logger
from minga_api.observability.middleware import RequestContextMiddleware
from minga_api.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        # One registry per process; clients open their pools lazily on first use.
        datastores = Datastores.from_settings(settings)
        app.state.datastores = datastores
        try:
            if settings.env in ("dev", "test"):
                try:
                    await init_db(datastores.relational.engine)
                except (SQLAlchemyError, OSError):
                    # Keep serving so /api/health can report the relational store as down.
                    log.exception("schema_bootstrap_failed")
            yield
        finally:
            await datastores.close()
            log.info("shutdown")

    app = FastAPI(
        title="minga.red API",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(users_router)

    return app


# --- Module Notes -----------------------------------------------------------
# Routers never touch datastore clients directly; they go through use-cases in `deps`.
