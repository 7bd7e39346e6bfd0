"""Factories for tests and prototyping."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from faker import Faker

from ..domain.catalog import EconomyCatalog, default_catalog
from ..domain.state import RewardState, initial_state


class ScriptedRandom:
    """Stand-in for ``random.Random`` whose ``random()`` replays a fixed sequence (cycled)."""

    def __init__(self, values: Sequence[float] = (0.0,)) -> None:
        if not values:
            raise ValueError("ScriptedRandom needs at least one value")
        self._values = list(values)
        self._index = 0

    def random(self) -> float:
        value = self._values[self._index % len(self._values)]
        self._index += 1
        return value


@dataclass(slots=True)
class RewardStateFactory:
    faker: Faker = field(default_factory=Faker)
    catalog: EconomyCatalog = field(default_factory=default_catalog)

    def user_key(self) -> str:
        return self.faker.unique.user_name()

    def build(self, **overrides) -> RewardState:
        return initial_state(self.catalog).evolve(**overrides)

    def maxed(self) -> RewardState:
        """State with every perk at its catalog maximum."""
        return self.build(
            perks={perk.perk_id: perk.max_level for perk in self.catalog.iter_perks()}
        )

