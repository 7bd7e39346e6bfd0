"""Reward bus: the single entry point for XP, gold and shard awards."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from random import Random
from typing import Sequence

from .catalog import BuffEffect, EconomyCatalog, PerkEffect, default_catalog
from .state import RewardState
from ..config import BalanceConfig, DayBoundary

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StudyAction:
    """A qualifying player action worth ``base_xp`` before multipliers."""

    base_xp: float


@dataclass(frozen=True, slots=True)
class RewardResult:
    xp_award: int
    gold_gain: int
    shard_gain: int
    crit: bool
    combo_multiplier: float
    crit_chance: float
    daily_completed_now: bool
    weekly_completed_now: bool
    buffs_applied: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class RewardBusResult:
    reward: RewardResult
    next_state: RewardState


def reward_bus(
    state: RewardState,
    action: StudyAction,
    *,
    catalog: EconomyCatalog | None = None,
    balance: BalanceConfig | None = None,
    rng: Random | None = None,
    now: datetime | None = None,
) -> RewardBusResult:
    """Compute the reward for ``action`` and the state that follows it.

    ``state`` is left untouched. Pass a seeded ``rng`` (or one whose
    ``random()`` is stubbed) to make crit rolls reproducible, and ``now`` to
    pin the clock.
    """
    catalog = catalog or default_catalog()
    balance = balance or BalanceConfig()
    rng = rng or Random()
    now = _as_utc(now or datetime.now(timezone.utc))
    now_ms = int(now.timestamp() * 1000)
    base_xp = _clamp_base_xp(action.base_xp)

    today = day_key(now, balance.day_boundary)
    this_week = week_key(now, balance.day_boundary)
    new_day = state.daily_day != today
    new_week = state.weekly_key != this_week
    daily_actions = 0 if new_day else state.daily_action_count
    daily_completed = False if new_day else state.daily_completed
    weekly_actions = 0 if new_week else state.weekly_action_count
    weekly_completed = False if new_week else state.weekly_completed

    within_window = (
        state.last_action_at is not None
        and now_ms - state.last_action_at <= balance.combo_window_ms
    )
    combo = state.combo + 1 if within_window else 1

    live_buffs = tuple(
        item.item_id
        for item in catalog.iter_consumables()
        if state.is_buff_active(item.item_id)
    )
    multiplier = combo_multiplier(combo, state, catalog, balance)
    chance = crit_chance(combo, state, catalog, balance, live_buffs)
    crit = rng.random() < chance

    xp_award = math.floor(
        base_xp
        * multiplier
        * _xp_perk_multiplier(state, catalog)
        * _xp_buff_multiplier(catalog, live_buffs)
        * (balance.crit_multiplier if crit else 1)
    )

    total_actions = state.total_actions + 1
    shard_gain = _shard_drop(combo, crit, total_actions, state, catalog, balance)
    gold_gain = max(1, xp_award // balance.xp_per_gold)

    daily_actions += 1
    daily_completed_now = not daily_completed and daily_actions >= balance.daily_target
    if daily_completed_now:
        gold_gain += balance.daily_bonus_gold
        shard_gain += balance.daily_bonus_shards

    weekly_actions += 1
    weekly_completed_now = not weekly_completed and weekly_actions >= balance.weekly_target
    if weekly_completed_now:
        gold_gain += balance.weekly_bonus_gold
        shard_gain += balance.weekly_bonus_shards

    next_state = state.evolve(
        combo=combo,
        last_action_at=now_ms,
        gold=state.gold + gold_gain,
        shards=state.shards + shard_gain,
        daily_day=today,
        daily_action_count=daily_actions,
        daily_completed=daily_completed or daily_completed_now,
        weekly_key=this_week,
        weekly_action_count=weekly_actions,
        weekly_completed=weekly_completed or weekly_completed_now,
        total_actions=total_actions,
        total_xp=state.total_xp + xp_award,
        active_buffs={
            item_id: max(0, remaining - 1)
            for item_id, remaining in state.active_buffs.items()
        },
    )
    reward = RewardResult(
        xp_award=xp_award,
        gold_gain=gold_gain,
        shard_gain=shard_gain,
        crit=crit,
        combo_multiplier=multiplier,
        crit_chance=chance,
        daily_completed_now=daily_completed_now,
        weekly_completed_now=weekly_completed_now,
        buffs_applied=live_buffs,
    )
    logger.debug(
        "Reward computed: xp=%s gold=%s shards=%s combo=%s crit=%s",
        xp_award,
        gold_gain,
        shard_gain,
        combo,
        crit,
    )
    return RewardBusResult(reward=reward, next_state=next_state)


def combo_multiplier(
    combo: int, state: RewardState, catalog: EconomyCatalog, balance: BalanceConfig
) -> float:
    """Bounded, non-decreasing multiplier for the given streak length."""
    if combo <= 1:
        return 1.0
    growth = balance.combo_growth
    cap = balance.combo_cap
    for perk in catalog.perks_with_effect(PerkEffect.COMBO_GROWTH):
        level = state.perk_level(perk.perk_id)
        growth += level * perk.effect_weight
        cap += level * balance.combo_cap_per_mastery
    return 1 + min(cap, (combo - 1) * growth)


def crit_chance(
    combo: int,
    state: RewardState,
    catalog: EconomyCatalog,
    balance: BalanceConfig,
    live_buffs: Sequence[str] = (),
) -> float:
    # combo - 1 keeps the first action of a streak crit-free without perks.
    chance = (combo - 1) * balance.crit_chance_per_combo
    for perk in catalog.perks_with_effect(PerkEffect.CRIT_CHANCE):
        chance += state.perk_level(perk.perk_id) * perk.effect_weight
    for item in catalog.consumables_with_effect(BuffEffect.CRIT_CHANCE):
        if item.item_id in live_buffs:
            chance += item.effect_weight
    return min(balance.crit_chance_cap, max(0.0, chance))


def day_key(moment: datetime, boundary: DayBoundary = "utc") -> str:
    return _localize(moment, boundary).date().isoformat()


def week_key(moment: datetime, boundary: DayBoundary = "utc") -> str:
    year, week, _ = _localize(moment, boundary).isocalendar()
    return f"{year}-W{week:02d}"


def _xp_perk_multiplier(state: RewardState, catalog: EconomyCatalog) -> float:
    bonus = sum(
        state.perk_level(perk.perk_id) * perk.effect_weight
        for perk in catalog.perks_with_effect(PerkEffect.XP_BONUS)
    )
    return 1 + bonus


def _xp_buff_multiplier(catalog: EconomyCatalog, live_buffs: Sequence[str]) -> float:
    multiplier = 1.0
    for item in catalog.consumables_with_effect(BuffEffect.XP_MULTIPLIER):
        if item.item_id in live_buffs:
            multiplier *= 1 + item.effect_weight
    return multiplier


def _shard_drop(
    combo: int,
    crit: bool,
    total_actions: int,
    state: RewardState,
    catalog: EconomyCatalog,
    balance: BalanceConfig,
) -> int:
    shards = 1 if crit else 0
    if balance.shard_combo_interval > 0 and combo % balance.shard_combo_interval == 0:
        shards += 1
    intervals = balance.shard_siphon_intervals
    for perk in catalog.perks_with_effect(PerkEffect.SHARD_SIPHON):
        level = min(state.perk_level(perk.perk_id), len(intervals))
        if level and total_actions % intervals[level - 1] == 0:
            shards += int(perk.effect_weight)
    return shards


def _clamp_base_xp(value: float) -> float:
    if value is None or not math.isfinite(value):
        return 0.0
    return max(0.0, float(value))


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None or moment.tzinfo.utcoffset(moment) is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _localize(moment: datetime, boundary: DayBoundary) -> datetime:
    moment = _as_utc(moment)
    if boundary == "local":
        return moment.astimezone()
    return moment
