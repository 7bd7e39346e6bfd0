import json

import pytest

from rewardforge.app import RewardApp
from rewardforge.config import RewardForgeConfig
from rewardforge.domain import events
from rewardforge.domain.persistence import state_key
from rewardforge.domain.shop import FailureReason
from rewardforge.storage.memory import InMemoryKeyValueStore
from rewardforge.testing import RewardStateFactory


@pytest.fixture()
def app():
    return RewardApp(RewardForgeConfig(rng_seed=3), store=InMemoryKeyValueStore())


@pytest.mark.asyncio()
async def test_award_persists_next_state(app):
    published = []

    async def listener(payload):
        published.append(payload)

    app.event_bus.subscribe(events.REWARD_AWARDED, listener)
    result = await app.reward_service.award("alice", 100)
    state = await app.reward_service.fetch("alice")
    assert state.combo == 1
    assert state.gold == result.reward.gold_gain
    assert state.total_xp == result.reward.xp_award
    assert published[0]["user_key"] == "alice"
    assert published[0]["xp_award"] == result.reward.xp_award


@pytest.mark.asyncio()
async def test_consecutive_awards_build_combo(app):
    await app.reward_service.award("alice", 100)
    second = await app.reward_service.award("alice", 100)
    assert second.next_state.combo == 2
    assert (await app.reward_service.fetch("alice")).combo == 2


@pytest.mark.asyncio()
async def test_failed_purchase_does_not_write(app):
    result = await app.reward_service.buy_perk("bob", "scholarLedger")
    assert result.reason is FailureReason.INSUFFICIENT_FUNDS
    assert await app.store.get(state_key("bob")) is None


@pytest.mark.asyncio()
async def test_buy_and_activate_consumable(app):
    seeded = (await app.reward_service.fetch("carol")).evolve(gold=200, shards=2)
    await app.store.set(state_key("carol"), json.dumps(seeded.to_dict()))

    bought = await app.reward_service.buy_consumable("carol", "focusElixir")
    assert bought.ok is True
    activated = await app.reward_service.activate("carol", "focusElixir")
    assert activated.ok is True
    again = await app.reward_service.activate("carol", "focusElixir")
    assert again.reason is FailureReason.NO_STOCK

    state = await app.reward_service.fetch("carol")
    assert state.gold == 110
    assert state.buff_remaining("focusElixir") == 5


@pytest.mark.asyncio()
async def test_migrate_publishes_event(app):
    seen = []

    async def listener(payload):
        seen.append(payload["user_key"])

    app.event_bus.subscribe(events.MIGRATION_COMPLETED, listener)
    await app.store.set("skillhero_study_loop_dave", json.dumps({"version": 1, "gold": 9}))
    assert await app.reward_service.migrate("dave") is True
    assert await app.reward_service.migrate("dave") is False
    assert seen == ["dave"]
    assert (await app.reward_service.fetch("dave")).gold == 9


def test_snapshot_lists_catalog(app):
    snapshot = app.snapshot()
    assert snapshot["storage"] == "memory"
    assert "luckyCharm" in snapshot["consumables"]


def test_unsupported_backend_raises():
    config = RewardForgeConfig()
    config.storage.backend = "redis"  # type: ignore[assignment]
    with pytest.raises(ValueError):
        RewardApp(config)


@pytest.mark.asyncio()
async def test_users_are_stored_independently(app):
    factory = RewardStateFactory()
    first, second = factory.user_key(), factory.user_key()
    await app.reward_service.award(first, 100)
    assert (await app.reward_service.fetch(first)).total_actions == 1
    assert (await app.reward_service.fetch(second)).total_actions == 0
    assert await app.store.get(state_key(second)) is None
