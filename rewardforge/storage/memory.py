"""In-memory storage backend for RewardForge."""

from __future__ import annotations

from typing import Mapping

from .base import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._values.get(key)

    async def set(self, key: str, value: str) -> None:
        self._values[key] = value

    async def delete(self, key: str) -> None:
        self._values.pop(key, None)

