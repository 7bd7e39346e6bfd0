"""Testing utilities for RewardForge."""

from .factory import RewardStateFactory, ScriptedRandom
from .fixtures import memory_app

__all__ = [
    "RewardStateFactory",
    "ScriptedRandom",
    "memory_app",
]
