"""Landing API — FastAPI application factory.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Every request passes the RequestPipeline stages before routing
    - One ErrorResponder renders every failure; traces only outside production
    - The Database handle is created/verified in the lifespan and disposed on shutdown;
      startup fails when the store cannot be reached

Design Decisions:
    - create_app() over a module-level app: settings and the Database are injected,
      tests build isolated apps (ADR: no global import side effects)
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.error_handlers import ErrorResponder, register_error_handlers
from app.api.pipeline import RequestPipeline, build_stages
from app.api.routes import contact, health, waitlist
from app.config import Settings, get_settings
from app.core.rate_limiter import FixedWindowRateLimiter
from app.infrastructure.connection_string import resolve_database_url
from app.infrastructure.database import Database
from app.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    if app.state.database is None:
        database_url = await resolve_database_url(settings)
        app.state.database = Database.from_url(
            database_url,
            pool_size=settings.pool_size,
            pool_timeout=settings.database_pool_timeout,
            statement_timeout_ms=settings.database_statement_timeout_ms,
        )
    await app.state.database.connect(
        retries=settings.database_connect_retries,
        delay=settings.database_connect_retry_delay,
        backoff=settings.database_connect_retry_backoff,
    )
    logger.info(f"Landing API started ({settings.environment})")
    yield
    logger.info("Landing API shutting down")
    await app.state.database.dispose()


def create_app(
    settings: Settings | None = None, database: Database | None = None,
) -> FastAPI:
    """Build the application; database=None defers pool creation to startup."""
    settings = settings or get_settings()
    app = FastAPI(
        title="Landing API",
        version="1.0.0",
        lifespan=lifespan,
        docs_url=None if settings.is_production else "/docs",
        openapi_url=None if settings.is_production else "/openapi.json",
        redoc_url=None,
    )
    app.state.settings = settings
    app.state.database = database

    responder = ErrorResponder(include_trace=not settings.is_production)
    stages = build_stages(
        allowed_origin=settings.cors_origin,
        max_body_bytes=settings.max_body_bytes,
        global_limiter=FixedWindowRateLimiter(
            settings.rate_limit_max_requests, settings.rate_limit_window_seconds,
        ),
        submit_limiter=FixedWindowRateLimiter(
            settings.rate_limit_submit_max_requests,
            settings.rate_limit_window_seconds,
        ),
    )
    app.add_middleware(RequestPipeline, stages=stages, responder=responder)
    register_error_handlers(app, responder)

    # Routes — explicit registration
    app.include_router(health.router)
    app.include_router(waitlist.router)
    app.include_router(contact.router)
    return app
