from datetime import datetime, timedelta, timezone
from random import Random

from rewardforge.diagnostics import EconomySimulator
from rewardforge.testing import RewardStateFactory


def test_simulation_is_reproducible(memory_app):
    start = datetime(2026, 1, 5, 8, 0, tzinfo=timezone.utc)
    first = EconomySimulator(memory_app, rng=Random(5)).simulate(actions=200, start=start)
    second = EconomySimulator(memory_app, rng=Random(5)).simulate(actions=200, start=start)
    assert first == second
    assert first.gold >= 200
    assert first.best_combo == 200
    assert first.dailies >= 1


def test_simulation_with_long_gaps_never_builds_combo(memory_app):
    result = EconomySimulator(memory_app, rng=Random(1)).simulate(
        actions=20, gap=timedelta(hours=1), start=datetime(2026, 1, 5, tzinfo=timezone.utc)
    )
    assert result.best_combo == 1
    assert result.crits == 0


def test_maxed_state_crit_rate_is_capped(memory_app):
    result = EconomySimulator(memory_app, rng=Random(9)).simulate(
        actions=1000, gap=timedelta(minutes=40), state=RewardStateFactory().maxed()
    )
    assert 0 < result.crit_rate < 0.6
