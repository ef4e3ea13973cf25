"""
Additive secret sharing of a score into three parties.

Simulation only: shares are drawn sequentially (A from [0, value), B from
[0, value - A), C is the remainder), so earlier shares are larger on
average and the split leaks magnitude. This distribution is part of the
observable behavior and must stay as is.
"""

from __future__ import annotations

import math

from backend_smpcguard.core.exceptions import InvalidShareInput
from backend_smpcguard.scoring.models import SMPCShares
from backend_smpcguard.scoring.random_source import RandomSource, default_random_source


class ShareGenerator:
    """Splits non-negative values into SMPCShares using an injected RandomSource."""

    def __init__(self, rng: RandomSource | None = None) -> None:
        self._rng = rng if rng is not None else default_random_source()

    def split(self, value: float) -> SMPCShares:
        """
        Split value into three non-negative shares summing to value.

        split(0) is exactly (0, 0, 0). Negative or non-finite values raise
        InvalidShareInput.
        """
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidShareInput(f"value must be a real number, got {value!r}")
        value = float(value)
        if not math.isfinite(value) or value < 0:
            raise InvalidShareInput(f"value must be finite and >= 0, got {value!r}")
        if value == 0.0:
            return SMPCShares(0.0, 0.0, 0.0)

        share_a = self._rng.random() * value
        share_b = self._rng.random() * (value - share_a)
        share_c = value - share_a - share_b
        return SMPCShares(share_a, share_b, share_c)


def generate_shares(value: float, rng: RandomSource | None = None) -> SMPCShares:
    """Functional shortcut for ShareGenerator(rng).split(value)."""
    return ShareGenerator(rng).split(value)


def reconstruct(shares: SMPCShares) -> float:
    """Recombine shares into the split value (up to float rounding)."""
    return shares.party_a + shares.party_b + shares.party_c
