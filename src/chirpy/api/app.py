"""
chirpy.api.app

FastAPI app factory for the Chirpy service.

Responsibilities:
- Build the FastAPI application and register routers, middleware and error handlers.
- Derive immutable runtime config (JwtConfig, ContentPolicy) from settings once.
- Initialize and dispose shared infrastructure (DB engine/session factory).
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from chirpy import __version__
from chirpy.api.errors import register_error_handlers
from chirpy.api.routers.admin import router as admin_router
from chirpy.api.routers.chirps import router as chirps_router
from chirpy.api.routers.health import router as health_router
from chirpy.api.routers.users import router as users_router
from chirpy.auth.jwt import JwtConfig
from chirpy.db.init_db import init_db
from chirpy.db.session import create_engine, create_sessionmaker
from chirpy.observability.logging import configure_logging, get_logger
from chirpy.observability.middleware import (
    FileServerMetricsMiddleware,
    HitCounter,
    RequestContextMiddleware,
)
from chirpy.services.moderation import ContentPolicy
from chirpy.settings import Settings

log = get_logger(__name__)


def jwt_config_from_settings(settings: Settings) -> JwtConfig:
    return JwtConfig(
        secret=settings.jwt_secret.encode("utf-8"),
        issuer=settings.jwt_issuer,
        algorithm=settings.jwt_alg,
    )


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Dev/test convenience: create tables automatically. Prod should use Alembic migrations.
            await init_db(engine)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Chirpy",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Read-only for the process lifetime; handlers reach them through dependencies.
    app.state.settings = settings
    app.state.jwt_config = jwt_config_from_settings(settings)
    app.state.content_policy = ContentPolicy()
    app.state.hit_counter = HitCounter()

    register_error_handlers(app)

    app.add_middleware(FileServerMetricsMiddleware, counter=app.state.hit_counter, prefix="/app")
    app.add_middleware(RequestContextMiddleware)

    app.include_router(health_router, tags=["health"])
    app.include_router(users_router)
    app.include_router(chirps_router)
    app.include_router(admin_router)
    app.mount(
        "/app",
        StaticFiles(directory=settings.static_dir, html=True, check_dir=False),
        name="app",
    )

    return app


# --- Module Notes -----------------------------------------------------------
# App composition stays here; business logic stays in routers/services.
