"""
Dice-style random number generation.
"""

from typing import Optional
import numpy as np


class RandomNumberGenerator:
    """Tabletop dice roller backed by a numpy Generator."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def roll_dice(self, n: int, die_type: int) -> int:
        """Roll `n` dice with `die_type` sides and return the sum (e.g. 3d6)."""
        if n < 1 or die_type < 1:
            raise ValueError(f"Invalid dice roll {n}d{die_type}")
        return int(self._rng.integers(1, die_type + 1, size=n).sum())

    def roll_die(self, sides: int) -> int:
        """Roll a single die, returning a value in [1, sides]."""
        return self.roll_dice(1, sides)

