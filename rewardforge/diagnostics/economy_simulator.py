"""Economy simulation helpers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from random import Random

from ..app import RewardApp
from ..domain.rewards import RewardResult, StudyAction, reward_bus
from ..domain.state import RewardState, initial_state


@dataclass(slots=True)
class SimulationResult:
    actions: int
    experience: int = 0
    gold: int = 0
    shards: int = 0
    crits: int = 0
    dailies: int = 0
    best_combo: int = 0

    def merge(self, reward: RewardResult, state: RewardState) -> None:
        self.experience += reward.xp_award
        self.gold += reward.gold_gain
        self.shards += reward.shard_gain
        self.crits += int(reward.crit)
        self.dailies += int(reward.daily_completed_now)
        self.best_combo = max(self.best_combo, state.combo)

    @property
    def crit_rate(self) -> float:
        return self.crits / self.actions if self.actions else 0.0


class EconomySimulator:
    """Monte-Carlo run of consecutive study actions through the reward bus."""

    def __init__(self, app: RewardApp, *, rng: Random | None = None) -> None:
        self._app = app
        self._rng = rng or Random()

    def simulate(
        self,
        *,
        actions: int = 1000,
        base_xp: int = 50,
        gap: timedelta = timedelta(minutes=5),
        state: RewardState | None = None,
        start: datetime | None = None,
    ) -> SimulationResult:
        state = state or initial_state(self._app.catalog)
        moment = start or datetime.now(timezone.utc)
        result = SimulationResult(actions=actions)
        for _ in range(actions):
            outcome = reward_bus(
                state,
                StudyAction(base_xp=base_xp),
                catalog=self._app.catalog,
                balance=self._app.config.balance,
                rng=self._rng,
                now=moment,
            )
            state = outcome.next_state
            result.merge(outcome.reward, state)
            moment += gap
        return result
