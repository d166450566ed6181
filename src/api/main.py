from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from src.api.routes import register_routes
from src.core.config import get_settings
from src.core.logging import setup_logging
from src.infrastructure.database import Database
from starlette.responses import Response
from structlog.contextvars import bind_contextvars, clear_contextvars

logger = structlog.get_logger()


def create_app(database: Database | None = None) -> FastAPI:
    """Application factory for the public API.

    When ``database`` is given it is used as-is and left open on shutdown;
    otherwise one is built from settings, initialized and closed with the app.
    """
    setup_logging(json_output=get_settings().environment not in ("local", "test"))
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "service_startup",
            service=settings.app_name,
            environment=settings.environment,
            version=settings.version,
            storage_backend=settings.storage_backend,
        )
        owned = database is None
        app.state.database = Database.from_settings(settings) if owned else database
        if owned:
            await app.state.database.initialize()
        try:
            yield
        finally:
            if owned:
                await app.state.database.close()
            logger.info("service_shutdown", service=settings.app_name)

    app = FastAPI(title=settings.app_name, version=settings.version, lifespan=lifespan)
    if database is not None:
        app.state.database = database

    cors_origins = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
    ]

    # Allow all origins in local/development environment
    if settings.environment in ["local", "development"]:
        cors_origins = ["*"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials="*" not in cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)

    @app.middleware("http")
    async def correlation_id_middleware(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get("x-request-id", str(uuid4()))
        bind_contextvars(
            request_id=request_id,
            path=str(request.url.path),
            method=request.method,
        )
        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            clear_contextvars()

    return app


app = create_app()
