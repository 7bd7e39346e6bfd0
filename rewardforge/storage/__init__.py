"""Storage backends for RewardForge."""

from .base import KeyValueStore
from .memory import InMemoryKeyValueStore
from .sqlalchemy import AsyncSQLAlchemyKeyValueStore, AsyncSQLAlchemyStorage

__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "AsyncSQLAlchemyKeyValueStore",
    "AsyncSQLAlchemyStorage",
]
