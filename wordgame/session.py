"""
Session Loop: Draw, Reveal, Judge.

A session walks through a small state machine:

    IDLE --draw--> PRESENTING --reveal--> REVEALED --judge--> PRESENTING
    (any) --stop--> STOPPED

judge() records the answer durably and immediately draws the next
question. A drawn question is only ever left by judging it or stopping.

Front ends (terminal, GUI) talk to the session through the
PresentationLayer protocol and own all rendering and input.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Protocol

from loguru import logger

from .config import Settings
from .errors import InvalidTransitionError, PersistenceError, WordgameError
from .history import AnswerEvent, HistoryLog
from .lexicon import Direction, Lexicon, WordEntry
from .sampler import Sampler
from .weighting import Distribution, WeightEngine


class SessionState(Enum):
    """Where the session is in the question cycle."""

    IDLE = "idle"
    PRESENTING = "presenting"  # Prompt shown, answer withheld
    REVEALED = "revealed"  # Answer shown, awaiting judgment
    STOPPED = "stopped"


class Prompt(NamedTuple):
    """A drawn question as shown to the learner."""

    text: str
    language: Direction


class PresentationLayer(Protocol):
    """Operations a front end drives."""

    def draw(self) -> Prompt: ...

    def reveal(self) -> str: ...

    def judge(self, correct: bool) -> int: ...

    def stop(self) -> None: ...


class Session:
    """
    One run of the trainer over a lexicon and its history.

    Attributes:
        lexicon: Words being trained
        history: Durable answer log (owned exclusively by this session)
        engine: Weight engine bound to the lexicon and decay
        sampler: Random draws for word and direction
    """

    def __init__(
        self,
        lexicon: Lexicon,
        history: HistoryLog,
        engine: WeightEngine,
        sampler: Sampler | None = None,
    ):
        self.lexicon = lexicon
        self.history = history
        self.engine = engine
        self.sampler = sampler or Sampler()

        history.validate_against(lexicon)

        self._state = SessionState.IDLE
        self._current_index: int | None = None
        self._current_direction: Direction | None = None
        self._run_count = 0

    @classmethod
    def open(cls, settings: Settings) -> Session:
        """
        Load both files named in the settings and start an idle session.

        Raises:
            ConfigurationError: If a path is missing
            LoadError: If a file is missing, malformed, or the history
                does not match the lexicon
        """
        lexicon_path, history_path = settings.require_paths()
        lexicon = Lexicon.load(lexicon_path)
        history = HistoryLog.load(history_path)
        engine = WeightEngine(lexicon, settings.decay)
        return cls(lexicon, history, engine, Sampler(seed=settings.seed))

    # =========================================================================
    # State
    # =========================================================================

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def run_count(self) -> int:
        """Answers judged since this session started."""
        return self._run_count

    @property
    def current_index(self) -> int | None:
        return self._current_index

    @property
    def current_direction(self) -> Direction | None:
        return self._current_direction

    @property
    def current_word(self) -> WordEntry | None:
        if self._current_index is None:
            return None
        return self.lexicon[self._current_index]

    @property
    def current_prompt(self) -> Prompt | None:
        word = self.current_word
        if word is None or self._current_direction is None:
            return None
        return Prompt(word.text(self._current_direction), self._current_direction)

    def distribution(self) -> Distribution:
        """Current probability of drawing each word."""
        return self.engine.distribution(self.history)

    def _require(self, *allowed: SessionState, action: str) -> None:
        if self._state not in allowed:
            expected = " or ".join(s.value for s in allowed)
            raise InvalidTransitionError(
                f"Cannot {action} while {self._state.value}; session must be {expected}"
            )

    # =========================================================================
    # Transitions
    # =========================================================================

    def draw(self) -> Prompt:
        """
        Pick the next word and direction.

        Returns:
            Prompt with the text to show and its language

        Raises:
            InvalidTransitionError: Unless the session is idle
        """
        self._require(SessionState.IDLE, action="draw")
        return self._draw_next()

    def _draw_next(self) -> Prompt:
        distribution = self.engine.distribution(self.history)
        index = self.sampler.index(distribution)
        direction = self.sampler.direction()

        self._current_index = index
        self._current_direction = direction
        self._state = SessionState.PRESENTING

        logger.debug(
            f"Drew word {index} (p={distribution[index]:.4f}) prompting in {direction.value}"
        )
        return Prompt(self.lexicon[index].text(direction), direction)

    def reveal(self) -> str:
        """
        Show the withheld translation of the current word.

        Raises:
            InvalidTransitionError: Unless a question is being presented
        """
        self._require(SessionState.PRESENTING, action="reveal")
        assert self._current_index is not None and self._current_direction is not None

        self._state = SessionState.REVEALED
        return self.lexicon[self._current_index].text(self._current_direction.other)

    def judge(self, correct: bool) -> int:
        """
        Record the learner's verdict and draw the next question.

        The answer is durable before the next word is drawn. If it cannot
        be written the session stops and the error propagates.

        Args:
            correct: Whether the learner knew the answer

        Returns:
            Updated run count

        Raises:
            InvalidTransitionError: Unless the answer has been revealed
            PersistenceError: If the history file cannot be written
            DistributionError: If the next word cannot be drawn; the
                answer is already recorded and the session stops
        """
        self._require(SessionState.REVEALED, action="judge")
        assert self._current_index is not None

        event = AnswerEvent(word_index=self._current_index, is_correct=bool(correct))
        try:
            self.history.append(event, self.lexicon)
        except PersistenceError:
            logger.error("History could not be persisted; stopping session")
            self.stop()
            raise

        self._run_count += 1
        try:
            self._draw_next()
        except WordgameError:
            logger.error("Next word could not be drawn; stopping session")
            self.stop()
            raise
        return self._run_count

    def stop(self) -> None:
        """End the session from any state. Only the persisted history survives."""
        if self._state is SessionState.STOPPED:
            return

        self._state = SessionState.STOPPED
        self._current_index = None
        self._current_direction = None
        logger.info(f"Session stopped after {self._run_count} answers")
