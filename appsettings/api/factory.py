"""
API Factory

Builds the FastAPI application: database wiring on ``app.state``,
middleware, exception handlers, optional Logfire, and the routes.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from sqlalchemy import Engine

from appsettings.api.errors import register_exception_handlers
from appsettings.api.middleware import RequestIDMiddleware, RequestLoggingMiddleware
from appsettings.api.router import router
from appsettings.core.config import settings
from appsettings.core.logger import get_logger
from appsettings.stores.database import (
    create_database_engine,
    create_session_factory,
    dispose_engine,
)

logger = get_logger(__name__)


def setup_database(app: FastAPI, engine: Optional[Engine] = None) -> None:
    """Store the engine and its session factory on ``app.state``."""
    engine = engine or create_database_engine()
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    logger.info(
        "Serving table '%s' from %s",
        settings.database__table,
        engine.url.render_as_string(hide_password=True),
    )


def setup_cors(app: FastAPI) -> None:
    origins = [o for o in settings.cors_allow_origins_list if o]
    if not origins:
        logger.info("CORS disabled: no allowed origins")
        return
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=settings.cors__allow_credentials,
        allow_methods=settings.cors_allow_methods_list,
        allow_headers=settings.cors_allow_headers_list,
    )
    logger.info("CORS enabled for %s", origins)


def setup_request_middleware(app: FastAPI) -> None:
    # Starlette runs the last-added middleware first, so the ID is set
    # before the access log line is written
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)


def setup_logfire_instrumentation(app: FastAPI) -> None:
    if not settings.logfire__enabled:
        return

    from appsettings.core.logfire_config import initialize_logfire

    results = initialize_logfire(app, app.state.engine)
    if results["configured"]:
        instrumented = [k for k, on in results["instrumentation"].items() if on]
        logger.info("Logfire instrumentation: %s", ", ".join(instrumented) or "none")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    dispose_engine(app.state.engine)


def create_api(
    title: str = "Application Settings API",
    description: str = "Key-value application settings store",
    version: str = "1.0.0",
    docs_url: Optional[str] = "/docs",
    redoc_url: Optional[str] = "/redoc",
    engine: Optional[Engine] = None,
    enable_cors: bool = True,
    enable_compression: bool = True,
    mount_prefix: str = "",
) -> FastAPI:
    """
    Create the settings API.

    Args:
        engine: Engine to serve from; built from settings when omitted.
            Tests pass an in-memory SQLite engine here.
        mount_prefix: Path prefix for every route, empty behind a gateway

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=title,
        description=description,
        version=version,
        docs_url=docs_url,
        redoc_url=redoc_url,
        debug=settings.debug,
        lifespan=lifespan,
    )

    setup_database(app, engine)

    if enable_compression:
        app.add_middleware(GZipMiddleware, minimum_size=1000)
    if enable_cors:
        setup_cors(app)
    setup_request_middleware(app)

    register_exception_handlers(app)
    setup_logfire_instrumentation(app)

    app.include_router(router, prefix=mount_prefix)

    logger.info("%s v%s ready", title, version)
    return app
