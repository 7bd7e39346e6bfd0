"""Perk and consumable purchases.

Business-rule failures come back as :class:`OperationResult` values carrying a
:class:`FailureReason`; the returned ``next_state`` is then the very object
that was passed in.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from .catalog import Cost, EconomyCatalog, default_catalog
from .state import RewardState

logger = logging.getLogger(__name__)


class FailureReason(str, Enum):
    MAXED = "maxed"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    NO_STOCK = "no_stock"
    ALREADY_ACTIVE = "already_active"


@dataclass(frozen=True, slots=True)
class OperationResult:
    ok: bool
    next_state: RewardState
    reason: FailureReason | None = None

    @classmethod
    def failed(cls, state: RewardState, reason: FailureReason) -> "OperationResult":
        return cls(ok=False, next_state=state, reason=reason)


def purchase_perk(
    state: RewardState, perk_id: str, *, catalog: EconomyCatalog | None = None
) -> OperationResult:
    catalog = catalog or default_catalog()
    perk = catalog.find_perk(perk_id)
    if perk is None:
        logger.warning("Purchase of unknown perk '%s' rejected", perk_id)
        return OperationResult.failed(state, FailureReason.INSUFFICIENT_FUNDS)

    level = state.perk_level(perk_id)
    if level >= perk.max_level:
        return OperationResult.failed(state, FailureReason.MAXED)

    cost = perk.cost_at_level(level)
    if not cost.is_covered_by(state.gold, state.shards):
        return OperationResult.failed(state, FailureReason.INSUFFICIENT_FUNDS)

    return OperationResult(
        ok=True,
        next_state=_charge(state, cost).evolve(perks={**state.perks, perk_id: level + 1}),
    )


def purchase_consumable(
    state: RewardState, item_id: str, *, catalog: EconomyCatalog | None = None
) -> OperationResult:
    catalog = catalog or default_catalog()
    item = catalog.find_consumable(item_id)
    if item is None:
        logger.warning("Purchase of unknown consumable '%s' rejected", item_id)
        return OperationResult.failed(state, FailureReason.INSUFFICIENT_FUNDS)

    if not item.cost.is_covered_by(state.gold, state.shards):
        return OperationResult.failed(state, FailureReason.INSUFFICIENT_FUNDS)

    return OperationResult(
        ok=True,
        next_state=_charge(state, item.cost).evolve(
            inventory={**state.inventory, item_id: state.stock(item_id) + 1}
        ),
    )


def activate_consumable(
    state: RewardState, item_id: str, *, catalog: EconomyCatalog | None = None
) -> OperationResult:
    """Move one item from inventory into ``active_buffs``.

    The buff lasts ``duration_actions`` qualifying actions and only the reward
    bus counts it down.
    """
    catalog = catalog or default_catalog()
    item = catalog.find_consumable(item_id)
    if item is None:
        logger.warning("Activation of unknown consumable '%s' rejected", item_id)
        return OperationResult.failed(state, FailureReason.NO_STOCK)

    stock = state.stock(item_id)
    if stock <= 0:
        return OperationResult.failed(state, FailureReason.NO_STOCK)
    if state.is_buff_active(item_id):
        return OperationResult.failed(state, FailureReason.ALREADY_ACTIVE)

    return OperationResult(
        ok=True,
        next_state=state.evolve(
            inventory={**state.inventory, item_id: stock - 1},
            active_buffs={**state.active_buffs, item_id: item.duration_actions},
        ),
    )


def _charge(state: RewardState, cost: Cost) -> RewardState:
    return state.evolve(gold=state.gold - cost.gold, shards=state.shards - cost.shards)
