"""Reward state snapshot."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any, Mapping

from .catalog import EconomyCatalog, default_catalog


RANKS: tuple[tuple[int, str], ...] = (
    (20000, "Archmage"),
    (12000, "Grand Scholar"),
    (7000, "Lore Master"),
    (3500, "Battle Sage"),
    (1200, "Adept"),
    (0, "Apprentice"),
)


@dataclass(frozen=True, slots=True)
class RewardState:
    """Complete progression economy of one player.

    Instances are never mutated; transitions build a new snapshot with
    :func:`dataclasses.replace` and fresh mappings.
    """

    combo: int = 0
    last_action_at: int | None = None
    gold: int = 0
    shards: int = 0
    daily_day: str | None = None
    daily_action_count: int = 0
    daily_completed: bool = False
    weekly_key: str | None = None
    weekly_action_count: int = 0
    weekly_completed: bool = False
    total_actions: int = 0
    total_xp: int = 0
    perks: Mapping[str, int] = field(default_factory=dict)
    inventory: Mapping[str, int] = field(default_factory=dict)
    active_buffs: Mapping[str, int] = field(default_factory=dict)

    def perk_level(self, perk_id: str) -> int:
        return self.perks.get(perk_id, 0)

    def stock(self, item_id: str) -> int:
        return self.inventory.get(item_id, 0)

    def buff_remaining(self, item_id: str) -> int:
        return self.active_buffs.get(item_id, 0)

    def is_buff_active(self, item_id: str) -> bool:
        return self.buff_remaining(item_id) > 0

    def evolve(self, **changes: Any) -> "RewardState":
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping with the persisted field names."""
        return {
            "combo": self.combo,
            "lastActionAt": self.last_action_at,
            "gold": self.gold,
            "shards": self.shards,
            "dailyDay": self.daily_day,
            "dailyActionCount": self.daily_action_count,
            "dailyCompleted": self.daily_completed,
            "weeklyKey": self.weekly_key,
            "weeklyActionCount": self.weekly_action_count,
            "weeklyCompleted": self.weekly_completed,
            "totalActions": self.total_actions,
            "totalXp": self.total_xp,
            "perks": dict(self.perks),
            "inventory": dict(self.inventory),
            "activeBuffs": dict(self.active_buffs),
        }

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any], *, catalog: EconomyCatalog | None = None
    ) -> "RewardState":
        """Rebuild a snapshot, filling fields that older records lack.

        Counters are clamped at zero and perk levels at the catalog maximum.
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"Expected mapping, got {type(data).__name__}")
        catalog = catalog or default_catalog()
        defaults = initial_state(catalog)
        last_action_at = data.get("lastActionAt")
        perks = {**defaults.perks, **_counters(data.get("perks"))}
        for perk in catalog.iter_perks():
            perks[perk.perk_id] = min(perks.get(perk.perk_id, 0), perk.max_level)
        return cls(
            combo=_count(data.get("combo")),
            last_action_at=whole_number(last_action_at) if last_action_at else None,
            gold=_count(data.get("gold")),
            shards=_count(data.get("shards")),
            daily_day=data.get("dailyDay") or None,
            daily_action_count=_count(data.get("dailyActionCount")),
            daily_completed=bool(data.get("dailyCompleted", False)),
            weekly_key=data.get("weeklyKey") or None,
            weekly_action_count=_count(data.get("weeklyActionCount")),
            weekly_completed=bool(data.get("weeklyCompleted", False)),
            total_actions=_count(data.get("totalActions")),
            total_xp=_count(data.get("totalXp")),
            perks=perks,
            inventory={**defaults.inventory, **_counters(data.get("inventory"))},
            active_buffs={**defaults.active_buffs, **_counters(data.get("activeBuffs"))},
        )


def initial_state(catalog: EconomyCatalog | None = None) -> RewardState:
    """Fresh state: zero counters, no perks, empty inventory."""
    catalog = catalog or default_catalog()
    perk_ids = [perk.perk_id for perk in catalog.iter_perks()]
    item_ids = [item.item_id for item in catalog.iter_consumables()]
    return RewardState(
        perks=dict.fromkeys(perk_ids, 0),
        inventory=dict.fromkeys(item_ids, 0),
        active_buffs=dict.fromkeys(item_ids, 0),
    )


def rank_for_experience(total_xp: int) -> str:
    for threshold, title in RANKS:
        if total_xp >= threshold:
            return title
    return RANKS[-1][1]


def whole_number(value: Any) -> int:
    """``int(value)`` that refuses NaN and infinities with ``ValueError``."""
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"Expected a finite number, got {value!r}")
    return int(value)


def _count(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    return max(0, whole_number(value))


def _counters(raw: Any) -> dict[str, int]:
    if not isinstance(raw, Mapping):
        return {}
    return {str(key): _count(value) for key, value in raw.items()}
