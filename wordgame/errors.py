"""
Error types for wordgame.

Load-time errors abort before any question is presented; runtime errors
end the current session. Front ends catch WordgameError and show the message.
"""

from __future__ import annotations

from pathlib import Path


class WordgameError(Exception):
    """Base class for all wordgame errors."""
    pass


class LoadError(WordgameError):
    """Raised when a lexicon or history file cannot be loaded."""
    pass


class ParseError(LoadError):
    """Raised when a record in a JSON Lines file is malformed."""

    def __init__(self, path: Path | str, line_number: int, reason: str):
        self.path = Path(path)
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"{self.path}:{line_number}: {reason}")


class HistoryMismatchError(LoadError):
    """Raised when a history record points outside the lexicon."""
    pass


class ConfigurationError(WordgameError):
    """Raised for missing options or an out-of-range decay."""
    pass


class PersistenceError(WordgameError):
    """Raised when an answer cannot be made durable in the history file."""
    pass


class DistributionError(WordgameError):
    """Raised when weights cannot be normalized into a distribution."""
    pass


class InvalidTransitionError(WordgameError):
    """Raised when a session operation is not valid in its current state."""
    pass
