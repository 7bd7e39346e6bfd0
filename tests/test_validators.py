from rewardforge import RewardApp, RewardForgeConfig
from rewardforge.domain.catalog import EconomyCatalog
from rewardforge.validators import validate_app


def test_validate_app_success():
    assert validate_app(RewardApp(RewardForgeConfig())) == []


def test_validate_app_detects_empty_catalog_and_bad_balance():
    config = RewardForgeConfig()
    config.balance.crit_chance_cap = 1.5
    config.balance.xp_per_gold = 0
    issues = validate_app(RewardApp(config, catalog=EconomyCatalog()))
    assert "No perks registered in catalog." in issues
    assert any("crit_chance_cap" in issue for issue in issues)
    assert any("xp_per_gold" in issue for issue in issues)
