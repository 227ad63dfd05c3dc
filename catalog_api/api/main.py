"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Build the FastAPI application (title, version, lifespan)
  - Configure middleware (CORS, request context, security headers, body
    limit, request timeout)
  - Mount the catalog router under the /api prefix
  - Expose /healthz, /readyz and /metrics

Collaborators:
  - interfaces.api.http.router: auth, movies, categories, users, admin
  - crosscutting.middleware / crosscutting.security
  - infrastructure.db.pool: pool lifecycle + readiness ping
  - application.dev_seed_admin: local admin bootstrap

Notes:
  - Middleware order (outermost first): CORS -> RequestContext ->
    SecurityHeaders -> BodyLimit -> RequestTimeout -> routes
  - In test environments the pool is never opened (in-memory repositories)
  - Settings are validated when the app is built, not per request
"""

from __future__ import annotations

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from ..application.dev_seed_admin import ensure_dev_admin
from ..container import get_password_hasher, get_user_repository
from ..crosscutting.config import Settings, get_settings
from ..crosscutting.logger import configure_logging, logger
from ..crosscutting.metrics import get_metrics_response
from ..crosscutting.middleware import (
    BodyLimitMiddleware,
    RequestContextMiddleware,
    RequestTimeoutMiddleware,
)
from ..crosscutting.security import SecurityHeadersMiddleware
from ..infrastructure.db.pool import close_pool, init_pool, ping_database
from ..interfaces.api.http.router import router
from .exception_handlers import register_exception_handlers

API_PREFIX = "/api"


def _build_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown: logging, DB pool, dev seed."""
        configure_logging(settings)

        if not settings.is_test_env():
            init_pool(
                settings.database_url,
                settings.db_pool_min_size,
                settings.db_pool_max_size,
                statement_timeout_ms=settings.db_statement_timeout_ms,
                slow_query_seconds=settings.db_slow_query_seconds,
            )

        try:
            ensure_dev_admin(
                settings,
                user_repo=get_user_repository(),
                password_hasher=get_password_hasher(),
                env=os.environ,
            )

            logger.info(
                "catalog API starting up",
                extra={
                    "app_env": settings.app_env,
                    "db_pool_min": settings.db_pool_min_size,
                    "db_pool_max": settings.db_pool_max_size,
                    "default_page_size": settings.default_page_size,
                },
            )
            yield
        finally:
            close_pool()
            logger.info("catalog API shutting down")

    return lifespan


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="Catalog API",
        version="0.1.0",
        lifespan=_build_lifespan(settings),
        openapi_tags=[
            {"name": "auth", "description": "Registro, login y refresh (JWT)"},
            {"name": "movies", "description": "Catálogo público"},
            {"name": "categories", "description": "Categorías públicas"},
            {"name": "users", "description": "Perfil propio (bearer)"},
            {"name": "admin", "description": "Operaciones admin (bearer + is_admin)"},
        ],
    )

    # R: add_middleware apila: el último agregado es el más externo.
    app.add_middleware(
        RequestTimeoutMiddleware,
        timeout_seconds=settings.server_request_timeout_seconds,
    )
    app.add_middleware(BodyLimitMiddleware, max_bytes=settings.max_body_bytes)
    app.add_middleware(
        SecurityHeadersMiddleware, is_production=settings.is_production()
    )
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins_list(),
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-Id"],
    )

    app.include_router(router, prefix=API_PREFIX)
    register_exception_handlers(app)

    @app.get("/healthz", tags=["ops"])
    def healthz(request: Request):
        """Liveness: el proceso responde (no toca la DB)."""
        return {"ok": True, "request_id": getattr(request.state, "request_id", None)}

    @app.get("/readyz", tags=["ops"])
    def readyz(request: Request, response: Response):
        """Readiness: la DB responde a SELECT 1 (in-memory en test)."""
        if settings.is_test_env():
            db_status = "in_memory"
        else:
            db_status = "connected" if ping_database() else "disconnected"

        ok = db_status != "disconnected"
        if not ok:
            response.status_code = 503
        return {
            "ok": ok,
            "db": db_status,
            "request_id": getattr(request.state, "request_id", None),
        }

    @app.get("/metrics", tags=["ops"])
    def metrics():
        """Prometheus text format."""
        body, content_type = get_metrics_response()
        return Response(content=body, media_type=content_type)

    return app


app = create_app()
