"""Read-compute-write orchestration around the pure reward functions."""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from random import Random
from typing import Callable

from . import events
from .catalog import EconomyCatalog
from .events import EventBus
from .persistence import load_reward_state, migrate_study_game_loop, save_reward_state
from .rewards import RewardBusResult, StudyAction, reward_bus
from .shop import OperationResult, activate_consumable, purchase_consumable, purchase_perk
from .state import RewardState, initial_state
from ..config import BalanceConfig
from ..storage.base import KeyValueStore

ShopOperation = Callable[..., OperationResult]


class RewardService:
    """Apply reward and shop transitions to stored player state.

    Every call fetches the snapshot, computes the next one and writes it back.
    One active session per user key is assumed.
    """

    def __init__(
        self,
        store: KeyValueStore,
        catalog: EconomyCatalog,
        balance: BalanceConfig,
        event_bus: EventBus,
        *,
        rng: Random | None = None,
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._balance = balance
        self._event_bus = event_bus
        self._rng = rng or Random()

    async def fetch(self, user_key: str) -> RewardState:
        state = await load_reward_state(self._store, user_key, catalog=self._catalog)
        return state or initial_state(self._catalog)

    async def award(
        self, user_key: str, base_xp: float, *, now: datetime | None = None
    ) -> RewardBusResult:
        state = await self.fetch(user_key)
        result = reward_bus(
            state,
            StudyAction(base_xp=base_xp),
            catalog=self._catalog,
            balance=self._balance,
            rng=self._rng,
            now=now,
        )
        await save_reward_state(self._store, result.next_state, user_key)
        await self._event_bus.publish(
            events.REWARD_AWARDED, {"user_key": user_key, **asdict(result.reward)}
        )
        return result

    async def buy_perk(self, user_key: str, perk_id: str) -> OperationResult:
        return await self._apply(
            user_key, purchase_perk, perk_id, events.PERK_PURCHASED, {"perk_id": perk_id}
        )

    async def buy_consumable(self, user_key: str, item_id: str) -> OperationResult:
        return await self._apply(
            user_key,
            purchase_consumable,
            item_id,
            events.CONSUMABLE_PURCHASED,
            {"item_id": item_id},
        )

    async def activate(self, user_key: str, item_id: str) -> OperationResult:
        return await self._apply(
            user_key,
            activate_consumable,
            item_id,
            events.CONSUMABLE_ACTIVATED,
            {"item_id": item_id},
        )

    async def migrate(self, user_key: str) -> bool:
        migrated = await migrate_study_game_loop(self._store, user_key, catalog=self._catalog)
        if migrated:
            await self._event_bus.publish(events.MIGRATION_COMPLETED, {"user_key": user_key})
        return migrated

    async def _apply(
        self,
        user_key: str,
        operation: ShopOperation,
        target_id: str,
        event_name: str,
        payload: dict,
    ) -> OperationResult:
        state = await self.fetch(user_key)
        result = operation(state, target_id, catalog=self._catalog)
        if result.ok:
            await save_reward_state(self._store, result.next_state, user_key)
            await self._event_bus.publish(event_name, {"user_key": user_key, **payload})
        return result
