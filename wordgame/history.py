"""
History Log: Append-Only Answer Persistence.

Every judged question becomes one JSON Lines record:

    {"id": 3, "is_correct": true}

The file is the authoritative source for the weighting engine. It is
loaded whole at startup and only ever extended: each append is written,
flushed and fsynced before it returns, so at most one answer can be in
flight at a time.
"""

from __future__ import annotations

import json
import os
from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from .errors import HistoryMismatchError, LoadError, ParseError, PersistenceError
from .lexicon import Lexicon
from .records import read_json_lines, require_field

# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class AnswerEvent:
    """One judged question."""

    word_index: int
    is_correct: bool

    def __post_init__(self) -> None:
        if isinstance(self.word_index, bool) or not isinstance(self.word_index, int):
            raise TypeError(f"word_index must be an integer, got {self.word_index!r}")
        if self.word_index < 0:
            raise ValueError(f"word_index must not be negative, got {self.word_index}")
        if not isinstance(self.is_correct, bool):
            raise TypeError(f"is_correct must be a boolean, got {self.is_correct!r}")

    def to_dict(self) -> dict:
        """Record form written to the history file."""
        return {"id": self.word_index, "is_correct": self.is_correct}

    @classmethod
    def from_dict(cls, data: dict) -> AnswerEvent:
        """
        Create an AnswerEvent from a decoded record.

        Raises:
            KeyError: If a field is missing
            TypeError: If a field has the wrong type
            ValueError: If id is negative
        """
        return cls(
            word_index=require_field(data, "id", int),
            is_correct=require_field(data, "is_correct", bool),
        )


def dump_event(event: AnswerEvent) -> str:
    """Encode an event as a single history line (without newline)."""
    return json.dumps(event.to_dict())


@dataclass
class HistoryStats:
    """Answer totals for reporting."""

    total: int = 0
    correct: int = 0
    answers_by_word: Counter = field(default_factory=Counter)
    correct_by_word: Counter = field(default_factory=Counter)

    @property
    def incorrect(self) -> int:
        return self.total - self.correct

    @property
    def accuracy(self) -> float:
        """Fraction of correct answers (0.0 for an empty log)."""
        if self.total == 0:
            return 0.0
        return self.correct / self.total


# =============================================================================
# History Log
# =============================================================================


class HistoryLog:
    """
    Ordered, append-only record of answers bound to a file.

    Attributes:
        path: Backing JSON Lines file
        num_in_current_run: Appends made since this log was loaded
    """

    def __init__(self, path: Path, events: list[AnswerEvent] | None = None):
        self.path = Path(path)
        self._events: list[AnswerEvent] = list(events or [])
        self.num_in_current_run = 0

    @classmethod
    def load(cls, path: Path) -> HistoryLog:
        """
        Load every record of a history file.

        Partial logs are never returned: the first malformed record
        aborts the whole load.

        Args:
            path: History file (must exist; may be empty)

        Raises:
            LoadError: If the file cannot be opened
            ParseError: If any record is malformed
        """
        path = Path(path)
        events: list[AnswerEvent] = []

        for line_number, record in read_json_lines(path):
            try:
                events.append(AnswerEvent.from_dict(record))
            except KeyError as e:
                raise ParseError(path, line_number, f"missing field {e}") from e
            except (TypeError, ValueError) as e:
                raise ParseError(path, line_number, str(e)) from e

        logger.info(f"History loaded: {len(events)} answers from {path}")
        return cls(path, events)

    @classmethod
    def create(cls, path: Path) -> HistoryLog:
        """
        Create a new, empty history file.

        Raises:
            LoadError: If the file already exists or cannot be created
        """
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "x", encoding="utf-8"):
                pass
        except FileExistsError as e:
            raise LoadError(f"{path} already exists; refusing to overwrite history") from e
        except OSError as e:
            raise LoadError(f"Could not create {path}: {e}") from e

        logger.info(f"Created empty history at {path}")
        return cls(path)

    @property
    def events(self) -> tuple[AnswerEvent, ...]:
        """All answers in order."""
        return tuple(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[AnswerEvent]:
        return iter(tuple(self._events))

    def validate_against(self, lexicon: Lexicon) -> None:
        """
        Check that every record addresses a word of the lexicon.

        Raises:
            HistoryMismatchError: On the first out-of-range index
        """
        for position, event in enumerate(self._events, 1):
            if not lexicon.contains_index(event.word_index):
                raise HistoryMismatchError(
                    f"{self.path}: record {position} refers to word {event.word_index}, "
                    f"but the lexicon has only {len(lexicon)} words"
                )

    def append(self, event: AnswerEvent, lexicon: Lexicon | None = None) -> None:
        """
        Durably append one answer.

        The record is on disk (flushed and fsynced) before the in-memory
        sequence grows, so a failed write leaves both unchanged.

        Args:
            event: Answer to record
            lexicon: If given, the event index is checked against it

        Raises:
            HistoryMismatchError: If the index is outside the lexicon
            PersistenceError: If the file is gone or cannot be written
        """
        if lexicon is not None and not lexicon.contains_index(event.word_index):
            raise HistoryMismatchError(
                f"Word {event.word_index} is outside the lexicon of {len(lexicon)} words"
            )

        if not self.path.exists():
            raise PersistenceError(
                f"History file {self.path} has disappeared; refusing to start a new log"
            )

        line = dump_event(event) + "\n"
        try:
            if self._needs_separator():
                line = "\n" + line
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line)
                f.flush()
                os.fsync(f.fileno())
        except OSError as e:
            raise PersistenceError(f"Could not write history to {self.path}: {e}") from e

        self._events.append(event)
        self.num_in_current_run += 1

        logger.debug(
            f"Recorded answer for word {event.word_index}: correct={event.is_correct} "
            f"({len(self._events)} total, {self.num_in_current_run} this run)"
        )

    def _needs_separator(self) -> bool:
        """Whether the file ends without a newline (e.g. edited by hand)."""
        if self.path.stat().st_size == 0:
            return False
        with open(self.path, "rb") as f:
            f.seek(-1, os.SEEK_END)
            return f.read(1) != b"\n"

    def stats(self) -> HistoryStats:
        """Totals over the whole log."""
        result = HistoryStats()
        for event in self._events:
            result.total += 1
            result.answers_by_word[event.word_index] += 1
            if event.is_correct:
                result.correct += 1
                result.correct_by_word[event.word_index] += 1
        return result
