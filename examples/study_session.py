"""Example study session: migrate a legacy record, earn rewards, shop."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from rewardforge import RewardApp, RewardForgeConfig
from rewardforge.domain.state import rank_for_experience


async def main() -> None:
    logging.basicConfig(level=logging.INFO)
    config = RewardForgeConfig(
        catalog_path=str(Path(__file__).with_name("catalog") / "economy.json"),
        rng_seed=42,
    )
    app = RewardApp(config)
    await app.init_backend()
    service = app.reward_service

    await app.store.set(
        "skillhero_study_loop_ada",
        json.dumps({"version": 1, "gold": 400, "shards": 4, "combo": 2}),
    )
    await service.migrate("ada")

    for base_xp in (40, 60, 80):
        result = await service.award("ada", base_xp)
        reward = result.reward
        print(
            f"+{reward.xp_award} XP, +{reward.gold_gain} gold, +{reward.shard_gain} shards"
            f" (x{reward.combo_multiplier:.2f}{', CRIT' if reward.crit else ''})"
        )
        if reward.daily_completed_now:
            print("Daily goal complete!")

    purchase = await service.buy_perk("ada", "scholarLedger")
    print(f"Scholar Ledger: {'bought' if purchase.ok else purchase.reason.value}")

    state = await service.fetch("ada")
    print(f"Gold {state.gold}, shards {state.shards}, rank {rank_for_experience(state.total_xp)}")
    await app.close()


if __name__ == "__main__":
    asyncio.run(main())
