"""Shared fixtures for cycle predictor tests."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date

import pytest

from src.cycle.config_loader import PredictorConfig, load_predictor_config, reload_predictor_config
from src.cycle.projection import CycleParameters

# Reference "today" used wherever the horizon matters
TEST_TODAY = date(2024, 1, 1)


@pytest.fixture
def predictor_config() -> PredictorConfig:
    """Load the real bundled predictor config for tests."""
    return load_predictor_config()


@pytest.fixture
def one_month_params() -> CycleParameters:
    """28-day cycle, 14-day luteal phase, starting 2024-01-01, one month ahead."""
    return CycleParameters(
        start_date=date(2024, 1, 1),
        cycle_length_days=28,
        luteal_phase_days=14,
        horizon_months=1,
    )


@pytest.fixture
def restore_predictor_config() -> Iterator[None]:
    """Put the bundled config back in the global singleton after a reload test."""
    yield
    reload_predictor_config()
