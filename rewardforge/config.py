"""Configuration models for RewardForge."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Literal


StorageBackend = Literal["memory", "sqlalchemy"]
DayBoundary = Literal["utc", "local"]

_TRUTHY = {"1", "true", "yes"}


@dataclass(slots=True)
class StorageConfig:
    """Configure where reward snapshots are persisted."""

    backend: StorageBackend = "memory"
    dsn: str | None = None
    echo_sql: bool = False

    def resolve_dsn(self) -> str | None:
        if self.dsn:
            return self.dsn
        if self.backend == "sqlalchemy":
            return "sqlite+aiosqlite:///./rewardforge.db"
        return None


@dataclass(slots=True)
class BalanceConfig:
    """Balance-table constants consumed by the reward bus."""

    combo_window_seconds: int = 30 * 60
    combo_growth: float = 0.08
    combo_cap: float = 1.4
    combo_cap_per_mastery: float = 0.4
    crit_chance_per_combo: float = 0.01
    crit_chance_cap: float = 0.6
    crit_multiplier: float = 1.5
    xp_per_gold: int = 12
    shard_combo_interval: int = 5
    shard_siphon_intervals: tuple[int, ...] = (6, 4)
    daily_target: int = 3
    daily_bonus_gold: int = 25
    daily_bonus_shards: int = 1
    weekly_target: int = 14
    weekly_bonus_gold: int = 120
    weekly_bonus_shards: int = 3
    day_boundary: DayBoundary = "utc"

    @property
    def combo_window_ms(self) -> int:
        return self.combo_window_seconds * 1000


@dataclass(slots=True)
class RewardForgeConfig:
    """Top-level configuration container."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    balance: BalanceConfig = field(default_factory=BalanceConfig)
    catalog_path: str | None = None
    rng_seed: int | None = None

    @classmethod
    def from_env(cls) -> "RewardForgeConfig":
        """Create config from environment variables prefixed with REWARDFORGE_."""
        prefix = "REWARDFORGE_"
        storage_backend = os.getenv(f"{prefix}STORAGE_BACKEND", "memory")
        dsn = os.getenv(f"{prefix}STORAGE_DSN")
        echo_sql = os.getenv(f"{prefix}STORAGE_ECHO_SQL", "false").lower() in _TRUTHY

        day_boundary = os.getenv(f"{prefix}DAY_BOUNDARY", "utc").lower()
        if day_boundary not in {"utc", "local"}:
            raise ValueError(f"{prefix}DAY_BOUNDARY must be 'utc' or 'local', got '{day_boundary}'")

        balance = BalanceConfig(
            combo_window_seconds=int(os.getenv(f"{prefix}COMBO_WINDOW_MINUTES", "30")) * 60,
            crit_chance_cap=float(os.getenv(f"{prefix}CRIT_CHANCE_CAP", "0.6")),
            daily_target=int(os.getenv(f"{prefix}DAILY_TARGET", "3")),
            weekly_target=int(os.getenv(f"{prefix}WEEKLY_TARGET", "14")),
            day_boundary=day_boundary,  # type: ignore[arg-type]
        )

        return cls(
            storage=StorageConfig(backend=storage_backend, dsn=dsn, echo_sql=echo_sql),  # type: ignore[arg-type]
            balance=balance,
            catalog_path=os.getenv(f"{prefix}CATALOG_PATH") or None,
            rng_seed=(
                int(os.getenv(f"{prefix}RNG_SEED")) if os.getenv(f"{prefix}RNG_SEED") else None
            ),
        )
