"""
Unit tests for the sampler.

Uses seeded random.Random streams so draws are reproducible.
"""

import random
from collections import Counter

import pytest

from wordgame.errors import DistributionError
from wordgame.lexicon import Direction
from wordgame.sampler import Sampler, sample_direction, sample_index


class FixedRandom(random.Random):
    """Random stream that always returns the same uniform draw."""

    def __init__(self, value: float):
        super().__init__()
        self.value = value

    def random(self) -> float:
        return self.value


class TestSampleIndex:
    @pytest.mark.parametrize("k", [0, 1, 2, 3])
    def test_one_hot_always_returns_k(self, k):
        distribution = [0.0] * 4
        distribution[k] = 1.0
        rng = random.Random(1234)

        assert all(sample_index(distribution, rng) == k for _ in range(500))

    def test_smallest_index_above_draw(self):
        distribution = [0.2, 0.3, 0.5]
        assert sample_index(distribution, FixedRandom(0.0)) == 0
        assert sample_index(distribution, FixedRandom(0.19)) == 0
        assert sample_index(distribution, FixedRandom(0.2)) == 1
        assert sample_index(distribution, FixedRandom(0.6)) == 2

    def test_rounding_gap_falls_back_to_last_index(self):
        distribution = [0.3, 0.3, 0.3999999]
        assert sample_index(distribution, FixedRandom(0.99999999)) == 2

    def test_empty_distribution(self):
        with pytest.raises(DistributionError):
            sample_index([])

    def test_frequencies_follow_distribution(self):
        rng = random.Random(42)
        counts = Counter(sample_index([0.1, 0.6, 0.3], rng) for _ in range(20000))

        assert counts[0] / 20000 == pytest.approx(0.1, abs=0.02)
        assert counts[1] / 20000 == pytest.approx(0.6, abs=0.02)
        assert counts[2] / 20000 == pytest.approx(0.3, abs=0.02)


class TestSampleDirection:
    def test_both_directions_drawn(self):
        rng = random.Random(7)
        counts = Counter(sample_direction(rng) for _ in range(2000))

        assert set(counts) == {Direction.A, Direction.B}
        assert counts[Direction.A] / 2000 == pytest.approx(0.5, abs=0.05)

    def test_threshold(self):
        assert sample_direction(FixedRandom(0.1)) is Direction.A
        assert sample_direction(FixedRandom(0.9)) is Direction.B


class TestSampler:
    def test_same_seed_same_draws(self):
        distribution = [0.25, 0.25, 0.5]
        first = Sampler(seed=99)
        second = Sampler(seed=99)

        draws_a = [(first.index(distribution), first.direction()) for _ in range(50)]
        draws_b = [(second.index(distribution), second.direction()) for _ in range(50)]
        assert draws_a == draws_b

    def test_independent_streams(self):
        first = Sampler(random.Random(1))
        second = Sampler(random.Random(2))
        distribution = [0.5, 0.5]

        draws_a = [first.index(distribution) for _ in range(64)]
        draws_b = [second.index(distribution) for _ in range(64)]
        assert draws_a != draws_b
