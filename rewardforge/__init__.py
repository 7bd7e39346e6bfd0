"""RewardForge public API."""

from .app import RewardApp
from .config import BalanceConfig, RewardForgeConfig, StorageConfig
from .domain import (
    FailureReason,
    OperationResult,
    RewardState,
    StudyAction,
    activate_consumable,
    default_catalog,
    initial_state,
    load_reward_state,
    migrate_study_game_loop,
    purchase_consumable,
    purchase_perk,
    reward_bus,
    save_reward_state,
)

__all__ = [
    "RewardApp",
    "BalanceConfig",
    "RewardForgeConfig",
    "StorageConfig",
    "FailureReason",
    "OperationResult",
    "RewardState",
    "StudyAction",
    "activate_consumable",
    "default_catalog",
    "initial_state",
    "load_reward_state",
    "migrate_study_game_loop",
    "purchase_consumable",
    "purchase_perk",
    "reward_bus",
    "save_reward_state",
]
