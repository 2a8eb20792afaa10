"""Health check endpoint, public."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter

from src.config import get_settings
from src.cycle.config_loader import ConfigValidationError, get_predictor_config

router = APIRouter(tags=["system"])
logger = logging.getLogger("abeba.health")


@router.get("/health")
async def health_check() -> dict:
    """Liveness probe. Returns 200 if the API process is up.

    Also confirms the predictor config can be loaded.
    """
    settings = get_settings()
    config_version = None
    try:
        config_version = get_predictor_config().version
    except (ConfigValidationError, FileNotFoundError) as exc:
        logger.warning("Health check config probe failed: %s", exc)

    return {
        "status": "healthy" if config_version else "degraded",
        "version": settings.app_version,
        "environment": settings.environment,
        "config_version": config_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
