"""
FitGuide application factory.

create_app() wires Sentry, CORS, the domain error handlers and the routers
around a Settings instance. Tests build their own app with test settings;
uvicorn serves the module-level `app`:

    uvicorn backend.main:app --port 8001

    app = create_app(Settings(environment="test", _env_file=None))
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from application.exceptions import CatalogError, LocalPersistenceError
from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI):
    yield
    # Let queued background syncs finish before the process exits
    from api.deps import shutdown_workout_log_store

    shutdown_workout_log_store()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FitGuide API.

    Args:
        settings: Explicit settings; read from the environment when omitted
    """
    if settings is None:
        settings = get_settings()

    _init_sentry(settings)

    app = FastAPI(
        title="FitGuide API",
        description="Personalized exercise plans and offline-first workout logging",
        version="1.0.0",
        lifespan=_lifespan,
    )

    _configure_cors(app)
    _register_exception_handlers(app)
    _include_routers(app)
    _log_configuration(settings)

    return app


def _init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,
        )
        logger.info("Sentry initialized for fitguide")


def _configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware for the application."""
    trusted_origins = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]
    production_origins = os.environ.get("CORS_ALLOWED_ORIGINS", "").split(",")
    trusted_origins.extend([origin.strip() for origin in production_origins if origin.strip()])

    app.add_middleware(
        CORSMiddleware,
        allow_origins=trusted_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(LocalPersistenceError)
    async def local_persistence_handler(request: Request, exc: LocalPersistenceError):
        return JSONResponse(
            status_code=507,
            content={"detail": "Could not save on this device", "error": str(exc)},
        )

    @app.exception_handler(CatalogError)
    async def catalog_handler(request: Request, exc: CatalogError):
        logger.error(f"Exercise catalog error: {exc}")
        return JSONResponse(
            status_code=500,
            content={"detail": "Exercise catalog is misconfigured"},
        )


def _include_routers(app: FastAPI) -> None:
    """Include all API routers in the application."""
    from api.routers import (
        coach_router,
        exercises_router,
        health_router,
        identity_router,
        nutrition_router,
        profile_router,
        workout_logs_router,
    )

    app.include_router(health_router)

    app.include_router(profile_router)
    app.include_router(exercises_router)
    app.include_router(workout_logs_router)
    app.include_router(identity_router)
    app.include_router(nutrition_router)
    app.include_router(coach_router)


def _log_configuration(settings: Settings) -> None:
    """Log which optional integrations are active at startup."""
    if settings.supabase_configured:
        logger.info("Supabase configured, workout logs will sync remotely")
    else:
        logger.warning("Supabase not configured, workout logs stay on this device")

    if settings.openai_api_key:
        logger.info(f"AI coaching enabled ({settings.ai_model})")
    else:
        logger.info("AI coaching disabled, using static fallback copy")


# Served by uvicorn (see backend/__main__.py)
app = create_app()
