"""
freshcart.api.app

FastAPI app factory for the Fresh Cart service.

Responsibilities:
- Build the auth gate once (the auth posture is decided here, at startup).
- Build the FastAPI application and register routers/middleware/exception handlers.
- Initialize and dispose shared infrastructure (DB engine/session factory).
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from freshcart import __version__
from freshcart.api.errors import register_exception_handlers
from freshcart.api.routers.auth_status import router as auth_status_router
from freshcart.api.routers.dev_auth import DEV_TOKEN_PATH
from freshcart.api.routers.dev_auth import router as dev_auth_router
from freshcart.api.routers.health import router as health_router
from freshcart.api.routers.orders import router as orders_router
from freshcart.auth.bootstrap import build_auth_gate
from freshcart.auth.middleware import AuthGateMiddleware
from freshcart.auth.verifiers import TokenVerifier
from freshcart.db.init_db import init_db
from freshcart.db.session import create_engine, create_sessionmaker
from freshcart.observability.logging import configure_logging, get_logger
from freshcart.observability.middleware import RequestContextMiddleware
from freshcart.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings, verifier: TokenVerifier | None = None) -> FastAPI:
    """
    `verifier` replaces the settings-built token verifier (tests, other providers).
    Raises `ServiceInitializationError` under the strict init policy when no verifier
    can be built.
    """

    configure_logging(service_name=settings.service_name, level=settings.log_level)

    dev_tokens_enabled = settings.auth_verifier == "local" and settings.env != "prod"
    gate = build_auth_gate(
        settings,
        verifier=verifier,
        extra_public_paths=[DEV_TOKEN_PATH] if dev_tokens_enabled else [],
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env, auth_mode=gate.mode.value)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Dev/test convenience: create tables automatically.
            await init_db(engine)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title=settings.service_display_name,
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.auth_gate = gate

    # Last added runs first: CORS, then request context, then the auth gate.
    app.add_middleware(AuthGateMiddleware, gate=gate)
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_methods=settings.cors_allowed_methods,
        allow_headers=settings.cors_allowed_headers,
        allow_credentials=settings.cors_allow_credentials,
        max_age=settings.cors_max_age,
    )
    register_exception_handlers(app)

    app.include_router(health_router, tags=["health"])
    app.include_router(auth_status_router)
    app.include_router(orders_router)
    if dev_tokens_enabled:
        app.include_router(dev_auth_router)

    return app


# --- Module Notes -----------------------------------------------------------
# CORS sits outside the gate so 401 responses still carry CORS headers and the
# browser can surface them to the frontend.
