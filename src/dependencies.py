"""Shared FastAPI dependencies injected into route handlers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from src.config import Settings, get_settings
from src.cycle.config_loader import get_predictor_config
from src.cycle.predictor import CyclePredictor


def get_predictor() -> CyclePredictor:
    """Return a predictor bound to the currently loaded predictor config.

    Built per request so a config reload takes effect immediately.
    """
    return CyclePredictor(get_predictor_config())


# Annotated shortcuts for route signatures
AppSettings = Annotated[Settings, Depends(get_settings)]
Predictor = Annotated[CyclePredictor, Depends(get_predictor)]
