"""Domain event dispatch."""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Awaitable, Callable, DefaultDict, Mapping

EventPayload = Mapping[str, Any]
EventListener = Callable[[EventPayload], Awaitable[None]]

REWARD_AWARDED = "reward.awarded"
PERK_PURCHASED = "shop.perk.purchased"
CONSUMABLE_PURCHASED = "shop.consumable.purchased"
CONSUMABLE_ACTIVATED = "shop.consumable.activated"
MIGRATION_COMPLETED = "migration.completed"


class EventBus:
    """Simple async pub-sub for reward notifications."""

    def __init__(self) -> None:
        self._listeners: DefaultDict[str, list[EventListener]] = defaultdict(list)

    def subscribe(self, event_name: str, listener: EventListener) -> None:
        self._listeners[event_name].append(listener)

    async def publish(self, event_name: str, payload: EventPayload) -> None:
        for listener in list(self._listeners.get(event_name, ())):
            await listener(payload)

