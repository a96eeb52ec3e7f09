"""Shared test fixtures."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from aupay.api.app import create_app, init_state
from aupay.calculators.fte import FteConstants
from aupay.calculators.tax_data import (
    HELP_BRACKETS,
    NON_RESIDENT_BRACKETS,
    RESIDENT_BRACKETS,
    BracketStore,
)
from aupay.holidays import HolidayService


@pytest.fixture
def constants() -> FteConstants:
    """Fresh default FTE constants (safe to mutate)."""
    return FteConstants()


@pytest.fixture
def store_to_2024() -> BracketStore:
    """Store holding resident/non-resident years up to 2024-25 only."""
    return BracketStore(
        resident={fy: b for fy, b in RESIDENT_BRACKETS.items() if fy <= "2024-25"},
        non_resident={fy: b for fy, b in NON_RESIDENT_BRACKETS.items() if fy <= "2024-25"},
        help_tiers=dict(HELP_BRACKETS),
    )


@pytest.fixture
def offline_holidays() -> HolidayService:
    """Holiday source that only reads the bundled fallback table."""
    return HolidayService(enabled=False)


@pytest.fixture
def app(offline_holidays: HolidayService) -> FastAPI:
    """App with default state and no lifespan (no network)."""
    test_app = create_app()
    init_state(test_app)
    test_app.state.holidays = offline_holidays
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
