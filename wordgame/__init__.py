"""
wordgame: Adaptive Bilingual Flashcards.

Words are drawn in proportion to their base frequency, adjusted by the
learner's answer history: each correct answer shrinks a word's weight
by (1 - decay), each incorrect one grows it by (1 + decay).

Components:
- Lexicon: Word list loading
- HistoryLog: Append-only answer persistence
- WeightEngine: History to probability distribution
- Sampler: Word and direction draws
- Session: Draw/reveal/judge state machine
"""

from .errors import (
    ConfigurationError,
    DistributionError,
    HistoryMismatchError,
    InvalidTransitionError,
    LoadError,
    ParseError,
    PersistenceError,
    WordgameError,
)
from .history import AnswerEvent, HistoryLog, HistoryStats
from .lexicon import Direction, Lexicon, WordEntry
from .sampler import Sampler, sample_direction, sample_index
from .session import PresentationLayer, Prompt, Session, SessionState
from .weighting import WeightEngine, compute_distribution, compute_weights

__version__ = "1.0.0"

__all__ = [
    # Data
    "Lexicon",
    "WordEntry",
    "Direction",
    "AnswerEvent",
    "HistoryLog",
    "HistoryStats",
    # Weighting and sampling
    "WeightEngine",
    "compute_distribution",
    "compute_weights",
    "Sampler",
    "sample_index",
    "sample_direction",
    # Session
    "Session",
    "SessionState",
    "Prompt",
    "PresentationLayer",
    # Errors
    "WordgameError",
    "LoadError",
    "ParseError",
    "HistoryMismatchError",
    "ConfigurationError",
    "PersistenceError",
    "DistributionError",
    "InvalidTransitionError",
]
