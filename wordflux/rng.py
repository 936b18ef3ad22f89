#!/usr/bin/env python3
"""
Seeded Random Number Generator
==============================
32-bit xorshift generator used for every random decision the sampler
makes. The same seed and the same call sequence always give the same
numbers, which keeps sampling reproducible in tests.
"""

import time
from typing import Any, List, Optional, Sequence

MASK_32 = 0xFFFFFFFF
ZERO_SEED_REPLACEMENT = 0x9E3779B9   # the all-zero state never leaves zero
TWO_POW_32 = 4294967296.0


def default_seed() -> int:
    """Seed derived from the wall clock, in milliseconds."""
    return int(time.time() * 1000) % MASK_32


class Xorshift32:
    """
    Deterministic xorshift32 generator.

    Usage:
        rng = Xorshift32(12345)
        rng.random()          # float in [0, 1)
        rng.shuffle(items)    # in-place Fisher-Yates
    """

    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = default_seed()
        state = int(seed) & MASK_32
        self._state = state or ZERO_SEED_REPLACEMENT

    def random(self) -> float:
        """Return the next float in [0.0, 1.0)."""
        x = self._state
        x ^= (x << 13) & MASK_32
        x ^= x >> 17
        x ^= (x << 5) & MASK_32
        self._state = x
        return x / TWO_POW_32

    __call__ = random

    def randbelow(self, n: int) -> int:
        """Return an integer in [0, n)."""
        if n <= 0:
            raise ValueError("n must be positive")
        return int(self.random() * n)

    def choice(self, seq: Sequence[Any]) -> Any:
        """Return a random element from non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from empty sequence")
        return seq[self.randbelow(len(seq))]

    def shuffle(self, seq: List[Any]) -> None:
        """Shuffle list in place (Fisher-Yates, last index first)."""
        for i in range(len(seq) - 1, 0, -1):
            j = int(self.random() * (i + 1))
            seq[i], seq[j] = seq[j], seq[i]


__all__ = ['Xorshift32', 'default_seed']
