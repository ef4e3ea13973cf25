"""
Device-risk signal providers.

The scoring math only needs a value in [0, 1]. Today the value is
synthesized locally; a provider backed by a real device-intelligence source
can replace RandomDeviceRiskProvider without touching ScoreEngine.
"""

from __future__ import annotations

from typing import Protocol

from backend_smpcguard.scoring.random_source import RandomSource, default_random_source

DEVICE_SCORE_MIN = 0.05
DEVICE_SCORE_SPAN = 0.9  # upper bound = 0.95
DEVICE_SCORE_DECIMALS = 2


class DeviceRiskProvider(Protocol):
    def device_score(self, identity: str, amount: float) -> float:
        """Return a device-risk signal in [0, 1] (0 is clean, 1 is high risk)."""
        ...


class RandomDeviceRiskProvider:
    """Uniform draw from [0.05, 0.95], rounded to 2 decimals."""

    def __init__(self, rng: RandomSource | None = None) -> None:
        self._rng = rng if rng is not None else default_random_source()

    def device_score(self, identity: str, amount: float) -> float:
        raw = self._rng.random() * DEVICE_SCORE_SPAN + DEVICE_SCORE_MIN
        return round(raw, DEVICE_SCORE_DECIMALS)


class FixedDeviceRiskProvider:
    """Always returns the same signal. Useful for replaying a known device assessment."""

    def __init__(self, score: float) -> None:
        if not (0.0 <= score <= 1.0):
            raise ValueError(f"score must be within [0, 1], got {score!r}")
        self._score = score

    def device_score(self, identity: str, amount: float) -> float:
        return self._score
