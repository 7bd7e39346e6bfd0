import pytest

from rewardforge.config import RewardForgeConfig, StorageConfig


def test_from_env_reads_prefixed_variables(monkeypatch):
    monkeypatch.setenv("REWARDFORGE_STORAGE_BACKEND", "sqlalchemy")
    monkeypatch.setenv("REWARDFORGE_RNG_SEED", "11")
    monkeypatch.setenv("REWARDFORGE_COMBO_WINDOW_MINUTES", "10")
    monkeypatch.setenv("REWARDFORGE_DAY_BOUNDARY", "local")
    config = RewardForgeConfig.from_env()
    assert config.storage.backend == "sqlalchemy"
    assert config.storage.resolve_dsn() == "sqlite+aiosqlite:///./rewardforge.db"
    assert config.rng_seed == 11
    assert config.balance.combo_window_ms == 600_000
    assert config.balance.day_boundary == "local"


def test_from_env_defaults(monkeypatch):
    for name in ("STORAGE_BACKEND", "RNG_SEED", "COMBO_WINDOW_MINUTES", "DAY_BOUNDARY", "CATALOG_PATH"):
        monkeypatch.delenv(f"REWARDFORGE_{name}", raising=False)
    config = RewardForgeConfig.from_env()
    assert config.storage.backend == "memory"
    assert config.rng_seed is None
    assert config.balance.combo_window_seconds == 1800
    assert config.catalog_path is None


def test_from_env_rejects_unknown_day_boundary(monkeypatch):
    monkeypatch.setenv("REWARDFORGE_DAY_BOUNDARY", "mars")
    with pytest.raises(ValueError):
        RewardForgeConfig.from_env()


def test_memory_backend_has_no_dsn():
    assert StorageConfig().resolve_dsn() is None
