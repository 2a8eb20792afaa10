"""Shared fixtures for API route tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from src.main import create_app


@pytest.fixture
def client() -> Iterator[TestClient]:
    """A client for a fresh app, so rate limit counters start at zero."""
    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def prediction_body() -> dict:
    return {
        "start_date": "2024-01-01",
        "cycle_length_days": 28,
        "luteal_phase_days": 14,
        "horizon_months": 1,
        "today": "2024-01-01",
    }
