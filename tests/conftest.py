"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import json
import os
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from wordgame.config import get_settings  # noqa: E402


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep WORDGAME_* variables from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith("WORDGAME_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def write_lines(path: Path, records: list[dict]) -> Path:
    """Write records as JSON Lines."""
    path.write_text("".join(json.dumps(r) + "\n" for r in records), encoding="utf-8")
    return path


@pytest.fixture
def sample_words():
    """The cat/dog lexicon used throughout the tests."""
    return [
        {"a": "cat", "b": "gato", "freq": 0.5},
        {"a": "dog", "b": "perro", "freq": 0.5},
    ]


@pytest.fixture
def lexicon_file(tmp_path, sample_words):
    """Lexicon file with the sample words."""
    return write_lines(tmp_path / "words.jsonl", sample_words)


@pytest.fixture
def history_file(tmp_path):
    """Empty history file."""
    path = tmp_path / "history.jsonl"
    path.write_text("", encoding="utf-8")
    return path


@pytest.fixture
def write_jsonl():
    """Factory writing a list of records to a JSON Lines file."""
    return write_lines
