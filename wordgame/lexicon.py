"""
Lexicon: Bilingual Word List Loader.

Loads frequency-annotated word pairs from a JSON Lines file:

    {"a": "cat", "b": "gato", "freq": 0.5}

A word's identity is its position in the file. History records refer to
words by that index, so the order must not change once answers exist.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from loguru import logger

from .errors import LoadError, ParseError
from .records import read_json_lines, require_field

# =============================================================================
# Direction
# =============================================================================


class Direction(Enum):
    """Which language is shown as the prompt."""

    A = "A"
    B = "B"

    @property
    def other(self) -> Direction:
        """The withheld language."""
        return Direction.B if self is Direction.A else Direction.A


# =============================================================================
# Word Entry
# =============================================================================


@dataclass(frozen=True)
class WordEntry:
    """A translatable vocabulary item with its base frequency."""

    a: str
    b: str
    freq: float

    def __post_init__(self) -> None:
        if not isinstance(self.freq, (int, float)) or isinstance(self.freq, bool):
            raise TypeError(f"freq must be a number, got {type(self.freq).__name__}")
        if not math.isfinite(self.freq) or self.freq <= 0:
            raise ValueError(f"freq must be a positive finite number, got {self.freq}")

    @classmethod
    def from_dict(cls, data: dict) -> WordEntry:
        """
        Create a WordEntry from a decoded JSON record.

        Raises:
            KeyError: If a field is missing
            TypeError: If a field has the wrong type
            ValueError: If freq is not positive and finite
        """
        freq = require_field(data, "freq", (int, float))
        try:
            freq = float(freq)
        except OverflowError as e:
            raise ValueError("freq is too large to represent as a float") from e

        return cls(
            a=require_field(data, "a", str),
            b=require_field(data, "b", str),
            freq=freq,
        )

    def text(self, direction: Direction) -> str:
        """Text of this word in the given language."""
        return self.a if direction is Direction.A else self.b


# =============================================================================
# Lexicon
# =============================================================================


class Lexicon(Sequence[WordEntry]):
    """
    Ordered, read-only sequence of word entries.

    Guarantees at least one entry and a strictly positive base frequency
    for every entry.
    """

    def __init__(self, entries: Iterable[WordEntry], source: Path | None = None):
        self._entries: tuple[WordEntry, ...] = tuple(entries)
        self.source = source

        if not self._entries:
            where = f" in {source}" if source else ""
            raise LoadError(f"No words found{where}; the lexicon must not be empty")

    @classmethod
    def load(cls, path: Path) -> Lexicon:
        """
        Load a lexicon from a JSON Lines file.

        Args:
            path: Lexicon file

        Returns:
            Lexicon in file order

        Raises:
            LoadError: If the file is missing or holds no words
            ParseError: If any record is malformed
        """
        path = Path(path)
        entries: list[WordEntry] = []

        for line_number, record in read_json_lines(path):
            try:
                entries.append(WordEntry.from_dict(record))
            except KeyError as e:
                raise ParseError(path, line_number, f"missing field {e}") from e
            except (TypeError, ValueError) as e:
                raise ParseError(path, line_number, str(e)) from e

        lexicon = cls(entries, source=path)
        logger.info(f"Lexicon loaded: {len(lexicon)} words from {path}")
        return lexicon

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index):  # type: ignore[override]
        return self._entries[index]

    def __iter__(self) -> Iterator[WordEntry]:
        return iter(self._entries)

    def contains_index(self, index: int) -> bool:
        """Whether index addresses a word in this lexicon."""
        return 0 <= index < len(self._entries)

    def base_frequencies(self) -> list[float]:
        """Base frequency of every word, in lexicon order."""
        return [entry.freq for entry in self._entries]
