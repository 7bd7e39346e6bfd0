"""Storage abstractions used by the RewardForge services."""

from __future__ import annotations

from typing import Protocol


class KeyValueStore(Protocol):
    """String key-value capability that reward snapshots are persisted through."""

    async def get(self, key: str) -> str | None:
        ...

    async def set(self, key: str, value: str) -> None:
        ...

    async def delete(self, key: str) -> None:
        ...
