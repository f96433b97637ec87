"""
DietTrack FastAPI Application
Entry point: application factory, lifespan database initialization and middleware.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import uvicorn
from contextlib import asynccontextmanager
import anyio
from typing import Optional

from api.routes import auth, meals, health
from app.config import Settings, settings as default_settings
from app.exceptions import AppError
from app.security import CredentialStore, TokenAuthority
from domain.models import build_engine, build_session_factory, init_database
from api.middleware import (
    RequestLoggingMiddleware,
    validation_exception_handler,
    http_exception_handler,
    app_error_handler,
    general_exception_handler,
)

_logger = logging.getLogger("diettrack.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for application startup and shutdown.
    Creates the schema, retrying while the database comes up.
    """
    settings: Settings = app.state.settings
    engine = app.state.engine

    _logger.info(f"Starting {settings.app_name} in {settings.environment.value} mode")

    for attempt in range(1, settings.db_init_attempts + 1):
        try:
            # Run blocking init in a thread to avoid blocking the event loop
            await anyio.to_thread.run_sync(init_database, engine)
            _logger.info("Database initialization succeeded")
            break
        except Exception as exc:
            _logger.warning(
                "Database init attempt %d/%d failed: %s",
                attempt,
                settings.db_init_attempts,
                exc,
            )
            if attempt < settings.db_init_attempts:
                await anyio.sleep(settings.db_init_delay_sec)
            else:
                _logger.error(
                    "Database initialization failed after %d attempts", attempt
                )
                raise

    try:
        yield
    finally:
        _logger.info(f"Shutting down {settings.app_name}")
        engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build a fully wired application for ``settings``."""
    settings = settings or default_settings

    app = FastAPI(
        title=settings.api_title,
        version=settings.app_version,
        description=settings.api_description,
        lifespan=lifespan,
        debug=settings.debug,
        openapi_url=(
            f"{settings.api_prefix}/openapi.json"
            if not settings.is_production()
            else None
        ),
        docs_url=f"{settings.api_prefix}/docs" if not settings.is_production() else None,
        redoc_url=(
            f"{settings.api_prefix}/redoc" if not settings.is_production() else None
        ),
    )

    # Per-process collaborators, injected into requests via api.dependencies
    app.state.settings = settings
    app.state.engine = build_engine(settings.database_url, echo=settings.db_echo)
    app.state.session_factory = build_session_factory(app.state.engine)
    app.state.credentials = CredentialStore.from_settings(settings)
    app.state.tokens = TokenAuthority.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(auth.router, prefix=settings.api_prefix)
    app.include_router(meals.router, prefix=settings.api_prefix)
    app.include_router(health.router, prefix=settings.api_prefix)

    return app


# Setup logging with configured level and format
logging.basicConfig(
    level=getattr(logging, default_settings.log_level.upper()),
    format=default_settings.log_format,
)

app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=default_settings.host,
        port=default_settings.port,
        reload=default_settings.is_development(),
        log_level=default_settings.log_level.lower(),
    )
