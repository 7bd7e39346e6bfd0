from rewardforge.testing.fixtures import memory_app  # noqa: F401
