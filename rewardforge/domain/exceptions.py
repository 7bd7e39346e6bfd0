"""Exceptions raised by RewardForge."""


class RewardForgeError(RuntimeError):
    """Base class for RewardForge exceptions."""


class CorruptStateError(RewardForgeError):
    """Raised when a persisted snapshot cannot be decoded."""

    def __init__(self, key: str, detail: str) -> None:
        super().__init__(f"Stored value under '{key}' is corrupt: {detail}")
        self.key = key
