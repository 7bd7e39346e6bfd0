"""Domain models and services."""

from .catalog import (
    BuffEffect,
    ConsumableDefinition,
    Cost,
    EconomyCatalog,
    PerkDefinition,
    PerkEffect,
    default_catalog,
)
from .exceptions import CorruptStateError, RewardForgeError
from .persistence import (
    LegacyRecord,
    load_reward_state,
    merge_legacy,
    migrate_study_game_loop,
    save_reward_state,
)
from .rewards import RewardBusResult, RewardResult, StudyAction, reward_bus
from .service import RewardService
from .shop import (
    FailureReason,
    OperationResult,
    activate_consumable,
    purchase_consumable,
    purchase_perk,
)
from .state import RewardState, initial_state, rank_for_experience

__all__ = [
    "BuffEffect",
    "ConsumableDefinition",
    "Cost",
    "EconomyCatalog",
    "PerkDefinition",
    "PerkEffect",
    "default_catalog",
    "CorruptStateError",
    "RewardForgeError",
    "LegacyRecord",
    "load_reward_state",
    "merge_legacy",
    "migrate_study_game_loop",
    "save_reward_state",
    "RewardBusResult",
    "RewardResult",
    "StudyAction",
    "reward_bus",
    "RewardService",
    "FailureReason",
    "OperationResult",
    "activate_consumable",
    "purchase_consumable",
    "purchase_perk",
    "RewardState",
    "initial_state",
    "rank_for_experience",
]
