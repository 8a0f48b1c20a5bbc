"""Shared fixtures for the agent sizer tests."""

import pytest

from agent_sizer.config import CONFIG_ENV_VAR, reset_config
from agent_sizer.dimensions import DIMENSIONS


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Every test starts from the built-in rules configuration."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def all_twos():
    """Every dimension scored 2 (total 16)."""
    return {d.id.value: 2 for d in DIMENSIONS}


@pytest.fixture
def baseline_scores():
    """All dimensions at 1 except complexity and sensitivity (total 12)."""
    return {
        "workflowComplexity": 3,
        "dataSensitivity": 3,
        "systemsToIntegrate": 1,
        "userReach": 1,
        "businessScope": 1,
        "agentCountAndTypes": 1,
        "platformMix": 1,
        "changeAndAdoption": 1,
    }
