"""Abeba cycle prediction API: FastAPI application entry point.

Run locally:
    uvicorn src.main:app --reload --port 8000
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.config import get_settings
from src.cycle.config_loader import get_predictor_config, reload_predictor_config
from src.middleware.rate_limit import RateLimitMiddleware
from src.middleware.security import SecurityHeadersMiddleware
from src.routers import health, predictions

# ---------- Logging ----------

logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s %(levelname)-8s %(name)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger("abeba")


# ---------- Lifespan ----------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup / shutdown hooks."""
    settings = get_settings()
    logger.info(
        "Starting Abeba API v%s [%s]",
        settings.app_version,
        settings.environment,
    )
    # Fail at startup rather than on the first request if the YAML is broken
    if settings.predictor_config_path is not None:
        reload_predictor_config(settings.predictor_config_path)
    else:
        get_predictor_config()
    yield
    logger.info("Abeba API shut down")


# ---------- App factory ----------

def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="Abeba API",
        description=(
            "Menstrual cycle prediction: period, ovulation and fertile-window "
            "projection with a month-by-month calendar view."
        ),
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ---------- Middleware (the last one added runs first) ----------

    app.add_middleware(SecurityHeadersMiddleware)

    app.add_middleware(RateLimitMiddleware, settings=settings)

    # CORS is added last so it answers preflight before rate limiting
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-RateLimit-Limit", "X-RateLimit-Remaining", "Retry-After"],
    )

    # ---------- Health check (outside the v1 prefix, always at /health) ----------
    app.include_router(health.router)

    # ---------- API v1 routes ----------
    app.include_router(predictions.router, prefix="/api/v1")

    return app


app = create_app()
