"""
Pytest fixtures for the weightlog backend tests.
"""
import os
from unittest.mock import AsyncMock, MagicMock

import pytest

# Set test environment variables before importing modules
os.environ["GAS_URL"] = "https://script.example.com/macros/s/test/exec"
os.environ["APP_TIMEZONE"] = "Asia/Tokyo"
os.environ["GROQ_API_KEY"] = "test-key"
os.environ["MONGO_URI"] = "mongodb://localhost:27017"

from fastapi.testclient import TestClient

from weightlog.clients.gas import GasClient, get_gas_client
from weightlog.clients.sheets import SheetStore, get_sheet_store
from weightlog.db.mongo import get_goals_collection
from weightlog.main import app
from weightlog.models.goal import GoalInput
from weightlog.services.calorie_search import CalorieSearchService, get_calorie_search


@pytest.fixture
def client():
    """TestClient with dependency overrides cleared after each test."""
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def fake_gas():
    gas = MagicMock(spec=GasClient)
    app.dependency_overrides[get_gas_client] = lambda: gas
    return gas


@pytest.fixture
def fake_sheet():
    store = MagicMock(spec=SheetStore)
    app.dependency_overrides[get_sheet_store] = lambda: store
    return store


@pytest.fixture
def fake_calorie_search():
    service = MagicMock(spec=CalorieSearchService)
    app.dependency_overrides[get_calorie_search] = lambda: service
    return service


@pytest.fixture
def goals_collection():
    """Stand-in for the motor collection."""
    collection = MagicMock()
    collection.update_one = AsyncMock()
    collection.find_one = AsyncMock(return_value=None)

    async def _override():
        return collection

    app.dependency_overrides[get_goals_collection] = _override
    return collection


@pytest.fixture
def female_goal():
    """70 kg -> 65 kg over two months, 160 cm, 30 years, activity x1.4."""
    return GoalInput(
        current_weight_kg=70,
        target_weight_kg=65,
        period_months=2,
        gender="female",
        height_cm=160,
        age_years=30,
        activity_factor=1.4,
    )


@pytest.fixture
def female_goal_body():
    # As posted by the goal form: every value is a string
    return {
        "currentWeightKg": "70",
        "targetWeightKg": "65",
        "periodMonths": "2",
        "gender": "female",
        "heightCm": "160",
        "ageYears": "30",
        "activityFactor": "1.4",
    }
