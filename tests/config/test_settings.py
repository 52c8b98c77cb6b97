"""
Tests for application settings and logging setup.
"""

import logging

import pytest
from pydantic import ValidationError

from knucklebones.config import configure_logging, get_settings
from knucklebones.config.settings import Settings
from knucklebones.engine.base import Difficulty, GamePhase
from knucklebones.engine.game import KnucklebonesGame
from knucklebones.engine.rng import SeededDiceSource


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in (
        "KNUCKLEBONES_DEBUG",
        "KNUCKLEBONES_LOG_LEVEL",
        "KNUCKLEBONES_DIFFICULTY",
        "KNUCKLEBONES_COIN_FLIP",
        "KNUCKLEBONES_RNG_SEED",
    ):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.difficulty is Difficulty.MEDIUM
        assert settings.coin_flip is True
        assert settings.rng_seed is None
        assert settings.log_level == "INFO"

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("KNUCKLEBONES_DIFFICULTY", "HARD")
        monkeypatch.setenv("KNUCKLEBONES_COIN_FLIP", "false")
        monkeypatch.setenv("KNUCKLEBONES_RNG_SEED", "99")
        monkeypatch.setenv("KNUCKLEBONES_LOG_LEVEL", "warning")

        settings = Settings(_env_file=None)

        assert settings.difficulty is Difficulty.HARD
        assert settings.coin_flip is False
        assert settings.rng_seed == 99
        assert settings.log_level == "WARNING"

    def test_invalid_difficulty(self, monkeypatch):
        monkeypatch.setenv("KNUCKLEBONES_DIFFICULTY", "nightmare")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="LOUD")

    def test_debug_forces_debug_level(self):
        assert Settings(_env_file=None, debug=True).effective_log_level == "DEBUG"

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestGameFromSettings:
    """Tests for building an engine from settings."""

    def test_uses_settings(self):
        settings = Settings(_env_file=None, difficulty="easy", coin_flip=False, rng_seed=5)
        game = KnucklebonesGame.from_settings(settings)
        assert game.difficulty is Difficulty.EASY
        assert game.phase is GamePhase.PLAYING

    def test_seed_makes_games_reproducible(self):
        settings = Settings(_env_file=None, coin_flip=False, rng_seed=1234)
        reference = SeededDiceSource(1234)

        game = KnucklebonesGame.from_settings(settings)

        assert game.roll_die().value == reference.roll_die()

    def test_defaults_to_cached_settings(self, monkeypatch):
        monkeypatch.setenv("KNUCKLEBONES_COIN_FLIP", "false")
        game = KnucklebonesGame.from_settings()
        assert game.phase is GamePhase.PLAYING


class TestConfigureLogging:
    """Tests for root logging setup."""

    @pytest.fixture(autouse=True)
    def _restore_root_logger(self):
        root = logging.getLogger()
        level, handlers = root.level, list(root.handlers)
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_explicit_level(self):
        configure_logging("debug")
        assert logging.getLogger().level == logging.DEBUG
        configure_logging("warning")
        assert logging.getLogger().level == logging.WARNING

    def test_level_from_settings(self, monkeypatch):
        monkeypatch.setenv("KNUCKLEBONES_DEBUG", "true")
        configure_logging()
        assert logging.getLogger().level == logging.DEBUG
