"""
Unit tests for settings loading.
"""

import pytest

from wordgame.config import DEFAULT_DECAY, Settings, get_settings, load_settings
from wordgame.errors import ConfigurationError, LoadError


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.decay == DEFAULT_DECAY == 0.1
        assert settings.lexicon_path is None
        assert settings.history_path is None
        assert settings.seed is None

    def test_environment_prefix(self, monkeypatch, tmp_path):
        monkeypatch.setenv("WORDGAME_DECAY", "0.25")
        monkeypatch.setenv("WORDGAME_LEXICON_PATH", str(tmp_path / "w.jsonl"))

        settings = load_settings()

        assert settings.decay == 0.25
        assert settings.lexicon_path == tmp_path / "w.jsonl"

    def test_overrides_beat_environment(self, monkeypatch):
        monkeypatch.setenv("WORDGAME_DECAY", "0.25")
        assert load_settings(decay=0.5).decay == 0.5

    def test_none_overrides_ignored(self, monkeypatch):
        monkeypatch.setenv("WORDGAME_DECAY", "0.3")
        assert load_settings(decay=None, seed=None).decay == 0.3

    @pytest.mark.parametrize("decay", [0.0, 1.0, -2.0, 3.0])
    def test_decay_out_of_range(self, decay):
        with pytest.raises(ConfigurationError, match="decay"):
            load_settings(decay=decay)


class TestRequirePaths:
    def test_missing_lexicon(self, history_file):
        with pytest.raises(ConfigurationError, match="Lexicon file was not specified"):
            Settings(history_path=history_file).require_paths()

    def test_missing_history(self, lexicon_file):
        with pytest.raises(ConfigurationError, match="History file was not specified"):
            Settings(lexicon_path=lexicon_file).require_paths()

    def test_nonexistent_file(self, lexicon_file, tmp_path):
        settings = Settings(lexicon_path=lexicon_file, history_path=tmp_path / "gone.jsonl")
        with pytest.raises(LoadError, match="Could not open"):
            settings.require_paths()

    def test_both_present(self, lexicon_file, history_file):
        settings = Settings(lexicon_path=lexicon_file, history_path=history_file)
        assert settings.require_paths() == (lexicon_file, history_file)


class TestGetSettings:
    def test_cached_instance(self):
        assert get_settings() is get_settings()

    def test_reads_environment_after_cache_clear(self, monkeypatch):
        assert get_settings().decay == DEFAULT_DECAY

        monkeypatch.setenv("WORDGAME_DECAY", "0.4")
        assert get_settings().decay == DEFAULT_DECAY

        get_settings.cache_clear()
        assert get_settings().decay == 0.4
