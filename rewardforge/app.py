"""Top level application object for RewardForge."""

from __future__ import annotations

from random import Random
from typing import Any

from .config import RewardForgeConfig
from .domain.catalog import EconomyCatalog, default_catalog
from .domain.events import EventBus
from .domain.service import RewardService
from .loaders import load_catalog_from_json
from .storage.base import KeyValueStore
from .storage.memory import InMemoryKeyValueStore
from .storage.sqlalchemy import AsyncSQLAlchemyStorage


class RewardApp:
    """Central dependency container wiring storage, catalog and services."""

    def __init__(
        self,
        config: RewardForgeConfig,
        *,
        store: KeyValueStore | None = None,
        catalog: EconomyCatalog | None = None,
        event_bus: EventBus | None = None,
        rng: Random | None = None,
    ) -> None:
        self.config = config
        self.event_bus = event_bus or EventBus()
        self.catalog = catalog or self._load_catalog()
        self._rng = rng or (Random(config.rng_seed) if config.rng_seed is not None else Random())

        self._sqlalchemy_storage: AsyncSQLAlchemyStorage | None = None
        self.store = store or self._wire_storage()

        self.reward_service = RewardService(
            store=self.store,
            catalog=self.catalog,
            balance=self.config.balance,
            event_bus=self.event_bus,
            rng=self._rng,
        )

    def _load_catalog(self) -> EconomyCatalog:
        if not self.config.catalog_path:
            return default_catalog()
        return load_catalog_from_json(self.config.catalog_path)

    def _wire_storage(self) -> KeyValueStore:
        backend = self.config.storage.backend
        if backend == "memory":
            return InMemoryKeyValueStore()
        if backend == "sqlalchemy":
            dsn = self.config.storage.resolve_dsn()
            if not dsn:
                raise ValueError("SQLAlchemy backend requires a DSN")
            storage = AsyncSQLAlchemyStorage(dsn, echo=self.config.storage.echo_sql)
            self._sqlalchemy_storage = storage
            return storage.key_value_store()
        raise ValueError(f"Unsupported storage backend {backend}")

    def snapshot(self) -> dict[str, Any]:
        """Export current configuration for debugging."""
        return {
            "storage": self.config.storage.backend,
            "perks": [perk.perk_id for perk in self.catalog.iter_perks()],
            "consumables": [item.item_id for item in self.catalog.iter_consumables()],
            "day_boundary": self.config.balance.day_boundary,
        }

    async def init_backend(self) -> None:
        """Initialize storage backend resources (e.g., database tables)."""
        if self._sqlalchemy_storage:
            await self._sqlalchemy_storage.init_models()

    async def close(self) -> None:
        if self._sqlalchemy_storage:
            await self._sqlalchemy_storage.dispose()
