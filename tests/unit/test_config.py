"""
Unit tests for configuration system.

Tests:
- Config loading and initialization
- Path configuration
- Config validation
- Environment overrides
"""

import logging

import pytest

from src.config import Config, QuizConfig, config, configure_logging


class TestConfig:
    """Test suite for Config class."""

    def test_config_singleton(self):
        """Test that Config implements singleton pattern."""
        config1 = Config()
        config2 = Config()
        assert config1 is config2, "Config should be a singleton"

    def test_config_initialization(self):
        """Test that config initializes with expected values."""
        assert config.quiz.timer_seconds == {"easy": 30, "medium": 20, "hard": 15}
        assert config.quiz.default_question_count == 10
        assert config.quiz.daily_question_count == 5
        assert config.quiz.option_count == 4
        assert config.progression.xp_per_level == 150
        assert config.progression.leaderboard_size == 20

    def test_paths_configured(self):
        """Test that all required paths are configured."""
        assert config.paths.project_root.is_absolute()
        assert config.paths.profile_schema.name == "user_profile.schema.json"
        assert config.paths.results_schema.parent == config.paths.schemas_dir
        assert config.paths.leaderboard_schema.exists()

    def test_config_validation_with_valid_config(self):
        """Test that shipped defaults pass validation."""
        assert config.validate() == []

    def test_config_validation_detects_bad_timer(self):
        """Test that config validation detects a non-positive timer."""
        original = config.quiz.timer_seconds
        config.quiz.timer_seconds = {"easy": 30, "medium": 0, "hard": 15}

        errors = config.validate()

        config.quiz.timer_seconds = original

        assert any("timer_seconds[medium]" in err for err in errors)

    def test_config_validation_detects_timer_growing_with_difficulty(self):
        original = config.quiz.timer_seconds
        config.quiz.timer_seconds = {"easy": 10, "medium": 20, "hard": 30}

        errors = config.validate()

        config.quiz.timer_seconds = original

        assert any("must not grow" in err for err in errors)

    def test_config_validation_detects_bad_option_count(self):
        original = config.quiz.option_count
        config.quiz.option_count = 1

        errors = config.validate()

        config.quiz.option_count = original

        assert any("option_count" in err for err in errors)

    def test_config_validation_detects_decreasing_ceilings(self):
        original = config.quiz.magnitude_ceilings["binary_decimal"]
        config.quiz.magnitude_ceilings["binary_decimal"] = {"easy": 100, "medium": 50, "hard": 200}

        errors = config.validate()

        config.quiz.magnitude_ceilings["binary_decimal"] = original

        assert any("binary_decimal" in err for err in errors)

    def test_config_validation_detects_unknown_log_level(self):
        original = config.logging.log_level
        config.logging.log_level = "CHATTY"

        errors = config.validate()

        config.logging.log_level = original

        assert any("log level" in err.lower() for err in errors)

    def test_ceiling_lookup(self):
        assert config.quiz.ceiling_for("hex_binary", "hard") == 255


class TestEnvironment:
    """Test suite for environment-driven settings."""

    def test_random_seed_from_env(self, monkeypatch):
        monkeypatch.setenv("NEURONET_RANDOM_SEED", "99")
        assert QuizConfig().random_seed == 99

    def test_random_seed_unset(self, monkeypatch):
        monkeypatch.delenv("NEURONET_RANDOM_SEED", raising=False)
        assert QuizConfig().random_seed is None

    def test_invalid_seed_raises(self, monkeypatch):
        monkeypatch.setenv("NEURONET_RANDOM_SEED", "not-a-number")
        with pytest.raises(ValueError):
            QuizConfig()


def test_configure_logging_sets_root_level(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))
    configure_logging("debug")
    assert calls["level"] == "DEBUG"
    assert calls["format"] == config.logging.log_format
