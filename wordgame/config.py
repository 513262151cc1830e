"""
Configuration settings for wordgame.

Uses Pydantic Settings for environment variable management with .env file support.
Every option can be set as WORDGAME_<NAME>; command-line flags override them.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError, LoadError

DEFAULT_DECAY = 0.1


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="WORDGAME_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Input files
    # ========================================
    lexicon_path: Path | None = Field(
        default=None,
        description="JSON Lines file of {a, b, freq} word records",
    )
    history_path: Path | None = Field(
        default=None,
        description="JSON Lines file of {id, is_correct} answer records",
    )

    # ========================================
    # Weighting
    # ========================================
    decay: float = Field(
        default=DEFAULT_DECAY,
        gt=0.0,
        lt=1.0,
        description="Multiplicative decay/boost applied per answer",
    )
    seed: int | None = Field(
        default=None,
        description="Seed for reproducible draws",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: str = Field(
        default="WARNING",
        description="Minimum level for the stderr log sink",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional file sink for debug logs",
    )

    def require_paths(self) -> tuple[Path, Path]:
        """
        Check that both input files are configured and exist.

        Returns:
            (lexicon_path, history_path)

        Raises:
            ConfigurationError: If either option is missing
            LoadError: If either file does not exist
        """
        if self.lexicon_path is None:
            raise ConfigurationError(
                "Lexicon file was not specified (use --lexicon or WORDGAME_LEXICON_PATH)"
            )
        if self.history_path is None:
            raise ConfigurationError(
                "History file was not specified (use --history or WORDGAME_HISTORY_PATH)"
            )

        for path in (self.lexicon_path, self.history_path):
            if not path.is_file():
                raise LoadError(f"Could not open {path}")

        return self.lexicon_path, self.history_path


def load_settings(**overrides: Any) -> Settings:
    """
    Build settings from the environment plus explicit overrides.

    Overrides set to None are ignored so unset CLI flags fall back to
    the environment.

    Raises:
        ConfigurationError: If a value fails validation
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return Settings(**values)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {problems}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return load_settings()
