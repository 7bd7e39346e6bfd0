"""Saving, loading and the one-shot legacy migration of reward snapshots."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping

from .catalog import EconomyCatalog
from .exceptions import CorruptStateError
from .state import RewardState, initial_state, whole_number
from ..storage.base import KeyValueStore

logger = logging.getLogger(__name__)

STATE_KEY_PREFIX = "rewardBus_"
LEGACY_KEY_PREFIX = "skillhero_study_loop_"


def state_key(user_key: str) -> str:
    return f"{STATE_KEY_PREFIX}{user_key}"


def legacy_key(user_key: str) -> str:
    return f"{LEGACY_KEY_PREFIX}{user_key.lower()}"


@dataclass(frozen=True, slots=True)
class LegacyRecord:
    """Economy snapshot written by the retired study loop."""

    version: int = 1
    gold: int = 0
    shards: int = 0
    combo: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LegacyRecord":
        if not isinstance(data, Mapping):
            raise TypeError(f"Expected mapping, got {type(data).__name__}")
        return cls(
            version=whole_number(data.get("version") or 1),
            gold=max(0, whole_number(data.get("gold") or 0)),
            shards=max(0, whole_number(data.get("shards") or 0)),
            combo=max(0, whole_number(data.get("combo") or 0)),
        )


def encode_state(state: RewardState) -> str:
    return json.dumps(state.to_dict(), separators=(",", ":"), sort_keys=True)


def decode_state(
    raw: str, *, key: str = "<memory>", catalog: EconomyCatalog | None = None
) -> RewardState:
    try:
        return RewardState.from_dict(json.loads(raw), catalog=catalog)
    except (json.JSONDecodeError, TypeError, ValueError, OverflowError) as exc:
        raise CorruptStateError(key, str(exc)) from exc


async def save_reward_state(store: KeyValueStore, state: RewardState, user_key: str) -> None:
    await store.set(state_key(user_key), encode_state(state))


async def load_reward_state(
    store: KeyValueStore, user_key: str, *, catalog: EconomyCatalog | None = None
) -> RewardState | None:
    """Return the stored snapshot, or ``None`` when there is none.

    An undecodable record is logged and reported as missing.
    """
    key = state_key(user_key)
    raw = await store.get(key)
    if raw is None:
        return None
    try:
        return decode_state(raw, key=key, catalog=catalog)
    except CorruptStateError as exc:
        logger.warning("Ignoring reward state for '%s': %s", user_key, exc)
        return None


def merge_legacy(state: RewardState, legacy: LegacyRecord) -> RewardState:
    return state.evolve(
        gold=state.gold + legacy.gold,
        shards=state.shards + legacy.shards,
        combo=max(state.combo, legacy.combo),
    )


async def migrate_study_game_loop(
    store: KeyValueStore, user_key: str, *, catalog: EconomyCatalog | None = None
) -> bool:
    """Fold the legacy study-loop record into the current state exactly once.

    The legacy key is deleted after the merge, so repeated calls are no-ops.
    Returns ``True`` when a record was merged.
    """
    old_key = legacy_key(user_key)
    raw = await store.get(old_key)
    if raw is None:
        return False

    try:
        legacy = LegacyRecord.from_dict(json.loads(raw))
    except (json.JSONDecodeError, TypeError, ValueError, OverflowError) as exc:
        logger.warning("Discarding corrupt legacy record '%s': %s", old_key, exc)
        await store.delete(old_key)
        return False

    current = await load_reward_state(store, user_key, catalog=catalog) or initial_state(catalog)
    await save_reward_state(store, merge_legacy(current, legacy), user_key)
    await store.delete(old_key)
    logger.info(
        "Migrated legacy study loop for '%s' (v%s): +%s gold, +%s shards, combo %s",
        user_key,
        legacy.version,
        legacy.gold,
        legacy.shards,
        legacy.combo,
    )
    return True
