"""
Injectable randomness.

Every random draw in the core (transaction tokens, device-risk signal,
share splitting, cipher salt) goes through a RandomSource so tests can
replay fixed values. random.Random satisfies the protocol.
"""

from __future__ import annotations

import itertools
import random
import string
from typing import Iterable, Protocol

BASE36_ALPHABET = string.digits + string.ascii_lowercase


class RandomSource(Protocol):
    def random(self) -> float:
        """Return a float uniformly drawn from [0, 1)."""
        ...


class SequenceRandom:
    """
    RandomSource that replays a fixed list of values, cycling when exhausted.

    Values must lie in [0, 1).
    """

    def __init__(self, values: Iterable[float]) -> None:
        values = list(values)
        if not values:
            raise ValueError("values must be non-empty")
        for v in values:
            if not (0.0 <= v < 1.0):
                raise ValueError(f"values must be within [0, 1), got {v!r}")
        self._cycle = itertools.cycle(values)

    def random(self) -> float:
        return next(self._cycle)


def default_random_source() -> RandomSource:
    return random.Random()


def random_token(rng: RandomSource, length: int) -> str:
    """Return `length` lowercase base36 characters drawn from rng."""
    chars = []
    for _ in range(length):
        idx = min(int(rng.random() * len(BASE36_ALPHABET)), len(BASE36_ALPHABET) - 1)
        chars.append(BASE36_ALPHABET[idx])
    return "".join(chars)
