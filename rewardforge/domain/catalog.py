"""Perk and consumable definitions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class PerkEffect(str, Enum):
    XP_BONUS = "xp_bonus"
    COMBO_GROWTH = "combo_growth"
    CRIT_CHANCE = "crit_chance"
    SHARD_SIPHON = "shard_siphon"


class BuffEffect(str, Enum):
    XP_MULTIPLIER = "xp_multiplier"
    CRIT_CHANCE = "crit_chance"


@dataclass(frozen=True, slots=True)
class Cost:
    """Price in both currencies."""

    gold: int = 0
    shards: int = 0

    def is_covered_by(self, gold: int, shards: int) -> bool:
        return gold >= self.gold and shards >= self.shards


@dataclass(frozen=True, slots=True)
class PerkDefinition:
    """Permanently leveled upgrade bought with gold and shards."""

    perk_id: str
    name: str
    description: str
    max_level: int
    gold_cost: int
    shard_cost: int
    effect: PerkEffect
    effect_weight: float
    gold_growth: float = 1.0

    def cost_at_level(self, level: int) -> Cost:
        """Price of moving from ``level`` to ``level + 1``."""
        gold = self.gold_cost if self.gold_growth == 1.0 else math.ceil(self.gold_cost * self.gold_growth**level)
        return Cost(gold=gold, shards=self.shard_cost)


@dataclass(frozen=True, slots=True)
class ConsumableDefinition:
    """Stock item whose buff lasts a fixed number of qualifying actions."""

    item_id: str
    name: str
    description: str
    duration_actions: int
    gold_cost: int
    shard_cost: int
    effect: BuffEffect
    effect_weight: float

    @property
    def cost(self) -> Cost:
        return Cost(gold=self.gold_cost, shards=self.shard_cost)


class EconomyCatalog:
    """Registry of perks and consumables."""

    def __init__(self) -> None:
        self._perks: dict[str, PerkDefinition] = {}
        self._consumables: dict[str, ConsumableDefinition] = {}

    def register_perk(self, perk: PerkDefinition) -> None:
        if perk.perk_id in self._perks:
            raise ValueError(f"Perk {perk.perk_id} already registered")
        self._perks[perk.perk_id] = perk

    def register_perks(self, perks: Iterable[PerkDefinition]) -> None:
        for perk in perks:
            self.register_perk(perk)

    def get_perk(self, perk_id: str) -> PerkDefinition:
        try:
            return self._perks[perk_id]
        except KeyError as exc:
            raise KeyError(f"Perk {perk_id} not found") from exc

    def find_perk(self, perk_id: str) -> PerkDefinition | None:
        return self._perks.get(perk_id)

    def max_level(self, perk_id: str) -> int:
        return self.get_perk(perk_id).max_level

    def register_consumable(self, item: ConsumableDefinition) -> None:
        if item.item_id in self._consumables:
            raise ValueError(f"Consumable {item.item_id} already registered")
        self._consumables[item.item_id] = item

    def register_consumables(self, items: Iterable[ConsumableDefinition]) -> None:
        for item in items:
            self.register_consumable(item)

    def get_consumable(self, item_id: str) -> ConsumableDefinition:
        try:
            return self._consumables[item_id]
        except KeyError as exc:
            raise KeyError(f"Consumable {item_id} not found") from exc

    def find_consumable(self, item_id: str) -> ConsumableDefinition | None:
        return self._consumables.get(item_id)

    def iter_perks(self) -> Iterable[PerkDefinition]:
        return self._perks.values()

    def iter_consumables(self) -> Iterable[ConsumableDefinition]:
        return self._consumables.values()

    def perks_with_effect(self, effect: PerkEffect) -> list[PerkDefinition]:
        return [perk for perk in self._perks.values() if perk.effect is effect]

    def consumables_with_effect(self, effect: BuffEffect) -> list[ConsumableDefinition]:
        return [item for item in self._consumables.values() if item.effect is effect]


DEFAULT_PERKS: tuple[PerkDefinition, ...] = (
    PerkDefinition(
        perk_id="scholarLedger",
        name="Scholar Ledger",
        description="+10% XP gain per level.",
        max_level=3,
        gold_cost=180,
        shard_cost=1,
        effect=PerkEffect.XP_BONUS,
        effect_weight=0.10,
    ),
    PerkDefinition(
        perk_id="comboMastery",
        name="Combo Mastery",
        description="Combo multiplier grows faster.",
        max_level=3,
        gold_cost=220,
        shard_cost=1,
        effect=PerkEffect.COMBO_GROWTH,
        effect_weight=0.03,
    ),
    PerkDefinition(
        perk_id="luckyStrike",
        name="Lucky Strike",
        description="+6% crit chance per level.",
        max_level=2,
        gold_cost=260,
        shard_cost=2,
        effect=PerkEffect.CRIT_CHANCE,
        effect_weight=0.06,
    ),
    PerkDefinition(
        perk_id="shardSiphon",
        name="Shard Siphon",
        description="Extra shard every 6 actions per level.",
        max_level=2,
        gold_cost=320,
        shard_cost=2,
        effect=PerkEffect.SHARD_SIPHON,
        effect_weight=1.0,
    ),
)

DEFAULT_CONSUMABLES: tuple[ConsumableDefinition, ...] = (
    ConsumableDefinition(
        item_id="focusElixir",
        name="Focus Elixir",
        description="+25% XP gain for next 5 study actions.",
        duration_actions=5,
        gold_cost=90,
        shard_cost=1,
        effect=BuffEffect.XP_MULTIPLIER,
        effect_weight=0.25,
    ),
    ConsumableDefinition(
        item_id="luckyCharm",
        name="Lucky Charm",
        description="+15% crit chance for next 4 study actions.",
        duration_actions=4,
        gold_cost=110,
        shard_cost=1,
        effect=BuffEffect.CRIT_CHANCE,
        effect_weight=0.15,
    ),
)


def default_catalog() -> EconomyCatalog:
    """Build a fresh catalog holding the shipped perks and consumables."""
    catalog = EconomyCatalog()
    catalog.register_perks(DEFAULT_PERKS)
    catalog.register_consumables(DEFAULT_CONSUMABLES)
    return catalog
