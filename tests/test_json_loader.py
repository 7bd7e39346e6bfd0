import json
from pathlib import Path

import pytest

from rewardforge.app import RewardApp
from rewardforge.config import RewardForgeConfig
from rewardforge.domain.catalog import BuffEffect, PerkEffect
from rewardforge.loaders import (
    load_catalog_from_json,
    parse_catalog_dict,
    validate_catalog_dict,
)

CATALOG = {
    "perks": [
        {
            "id": "sage",
            "name": "Sage",
            "description": "More XP",
            "maxLevel": 2,
            "cost": {"gold": 50, "shards": 1},
            "goldGrowth": 2.0,
            "effect": "xp_bonus",
            "weight": 0.2,
        }
    ],
    "consumables": [
        {
            "id": "tea",
            "name": "Tea",
            "durationActions": 3,
            "cost": {"gold": 10},
            "effect": "xp_multiplier",
            "weight": 0.5,
        }
    ],
}


def test_parse_catalog_dict():
    catalog = parse_catalog_dict(CATALOG)
    perk = catalog.get_perk("sage")
    assert perk.effect is PerkEffect.XP_BONUS
    assert perk.cost_at_level(1).gold == 100
    tea = catalog.get_consumable("tea")
    assert tea.effect is BuffEffect.XP_MULTIPLIER
    assert tea.cost.shards == 0


def test_parse_catalog_dict_invalid_raises():
    data = {"perks": [{"id": "broken", "maxLevel": 0, "cost": {}, "effect": "xp_bonus", "weight": 1}]}
    with pytest.raises(ValueError):
        parse_catalog_dict(data)


def test_validate_catalog_dict_reports_problems():
    data = {
        "perks": [
            {"id": "a", "maxLevel": 1, "cost": {"gold": -1}, "effect": "teleport", "weight": 1},
            {"id": "a", "maxLevel": 1, "cost": {}, "effect": "xp_bonus", "weight": 1},
        ],
        "consumables": [{"id": "b", "durationActions": 0, "cost": {}, "effect": "crit_chance", "weight": 0.1}],
    }
    errors = validate_catalog_dict(data)
    assert any("invalid effect" in err for err in errors)
    assert any("defined multiple times" in err for err in errors)
    assert any("durationActions" in err for err in errors)
    assert any("cost 'gold'" in err for err in errors)


def test_app_loads_catalog_from_path(tmp_path: Path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(CATALOG), encoding="utf-8")
    assert load_catalog_from_json(path).find_consumable("tea") is not None

    app = RewardApp(RewardForgeConfig(catalog_path=str(path)))
    assert [perk.perk_id for perk in app.catalog.iter_perks()] == ["sage"]
