"""
Sampler: Draws from a Word Distribution.

Inverse-CDF sampling over the cumulative probabilities, plus a fair
coin for the query direction. All draws take an optional random.Random
so callers can use independent, seedable streams.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from itertools import accumulate

from .errors import DistributionError
from .lexicon import Direction


def sample_index(distribution: Sequence[float], rng: random.Random | None = None) -> int:
    """
    Draw an index with probability distribution[index].

    Args:
        distribution: Probabilities summing to (approximately) 1
        rng: Random stream (module-level generator if None)

    Returns:
        The smallest index whose cumulative probability exceeds a
        uniform draw from [0, 1); the last index if rounding leaves
        the total just below the draw.

    Raises:
        DistributionError: If the distribution is empty
    """
    if not distribution:
        raise DistributionError("Cannot sample from an empty distribution")

    t = (rng or random).random()
    for i, cum in enumerate(accumulate(distribution)):
        if cum > t:
            return i

    return len(distribution) - 1


def sample_direction(rng: random.Random | None = None) -> Direction:
    """Pick the prompt language uniformly at random."""
    return Direction.A if (rng or random).random() < 0.5 else Direction.B


class Sampler:
    """Both draws around a single random stream."""

    def __init__(self, rng: random.Random | None = None, seed: int | None = None):
        self.rng = rng or random.Random(seed)

    def index(self, distribution: Sequence[float]) -> int:
        return sample_index(distribution, self.rng)

    def direction(self) -> Direction:
        return sample_direction(self.rng)
