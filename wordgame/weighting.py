"""
Weight Engine: Answer History to Word Distribution.

Each word starts at its base frequency. Replaying the history multiplies
a word's weight by (1 - decay) for every correct answer and by
(1 + decay) for every incorrect one; the weights are then normalized.

Repeated correct answers drive a weight towards zero but never to it,
since decay is restricted to the open interval (0, 1).
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from .errors import ConfigurationError, DistributionError, HistoryMismatchError
from .history import AnswerEvent
from .lexicon import Lexicon

Distribution = tuple[float, ...]


def validate_decay(decay: float) -> float:
    """
    Check that decay lies strictly between 0 and 1.

    Raises:
        ConfigurationError: If it does not
    """
    if isinstance(decay, bool) or not isinstance(decay, (int, float)):
        raise ConfigurationError(f"Decay must be a number, got {decay!r}")
    if not 0.0 < decay < 1.0:
        raise ConfigurationError(f"Decay must be in the open interval (0, 1), got {decay}")
    return float(decay)


def compute_weights(
    lexicon: Lexicon,
    history: Iterable[AnswerEvent],
    decay: float,
) -> list[float]:
    """
    Un-normalized weights after replaying the history.

    Args:
        lexicon: Words with base frequencies
        history: Answers in the order they were given
        decay: Multiplicative step in (0, 1)

    Returns:
        One weight per word, in lexicon order

    Raises:
        ConfigurationError: If decay is out of range
        HistoryMismatchError: If an answer refers to an unknown word
    """
    decay = validate_decay(decay)
    weights = lexicon.base_frequencies()
    correct_factor = 1.0 - decay
    incorrect_factor = 1.0 + decay

    for event in history:
        i = event.word_index
        if not lexicon.contains_index(i):
            raise HistoryMismatchError(
                f"Answer refers to word {i}, but the lexicon has only {len(lexicon)} words"
            )
        weights[i] *= correct_factor if event.is_correct else incorrect_factor

    return weights


def normalize(weights: list[float]) -> Distribution:
    """
    Scale weights so they sum to 1.

    Raises:
        DistributionError: If the total mass is zero or not finite
    """
    if not weights:
        raise DistributionError("Cannot normalize an empty weight vector")

    mass = math.fsum(weights)
    if mass <= 0.0 or not math.isfinite(mass):
        raise DistributionError(
            f"Total weight is {mass}; the decay setting has driven every word out of the draw"
        )

    return tuple(w / mass for w in weights)


def compute_distribution(
    lexicon: Lexicon,
    history: Iterable[AnswerEvent],
    decay: float,
) -> Distribution:
    """
    Probability of drawing each word next.

    Pure function: the same (lexicon, history, decay) always gives the
    same distribution.
    """
    return normalize(compute_weights(lexicon, history, decay))


class WeightEngine:
    """Weight engine bound to a lexicon and decay setting."""

    def __init__(self, lexicon: Lexicon, decay: float):
        self.lexicon = lexicon
        self.decay = validate_decay(decay)

    def weights(self, history: Iterable[AnswerEvent]) -> list[float]:
        return compute_weights(self.lexicon, history, self.decay)

    def distribution(self, history: Iterable[AnswerEvent]) -> Distribution:
        return compute_distribution(self.lexicon, history, self.decay)
