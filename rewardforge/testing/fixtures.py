"""Pytest fixtures for RewardForge."""

from __future__ import annotations

import pytest

from ..app import RewardApp
from ..config import RewardForgeConfig


@pytest.fixture()
def memory_app() -> RewardApp:
    return RewardApp(RewardForgeConfig(rng_seed=7))

