"""
Configuration management for NeuroNet.

This module centralizes all configuration settings following 12-factor app principles:
- Overrides loaded from environment variables (and a local .env file)
- Sensible defaults for development
- Single source of truth for quiz timing, scoring and paths
- Logging setup for library consumers
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _env_int(name: str) -> Optional[int]:
    """Read an optional integer from the environment."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return int(raw)


@dataclass
class QuizConfig:
    """Quiz session and question generation settings."""

    # Countdown per question (seconds), easiest longest
    timer_seconds: Dict[str, int] = field(
        default_factory=lambda: {"easy": 30, "medium": 20, "hard": 15}
    )

    default_question_count: int = 10
    daily_question_count: int = 5
    daily_difficulty: str = "hard"

    # Multiple choice
    option_count: int = 4
    distractor_attempts: int = 50

    # Highest magnitude drawn per category and difficulty (each tier doubles)
    magnitude_ceilings: Dict[str, Dict[str, int]] = field(
        default_factory=lambda: {
            "binary_decimal": {"easy": 31, "medium": 63, "hard": 127},
            "decimal_hex": {"easy": 63, "medium": 127, "hard": 255},
            "decimal_octal": {"easy": 63, "medium": 127, "hard": 255},
            "hex_binary": {"easy": 63, "medium": 127, "hard": 255},
        }
    )

    # Reproducibility
    random_seed: Optional[int] = field(
        default_factory=lambda: _env_int("NEURONET_RANDOM_SEED")
    )

    def ceiling_for(self, category: str, difficulty: str) -> int:
        """Look up the magnitude ceiling for a numeric category."""
        return self.magnitude_ceilings[category][difficulty]


@dataclass
class ProgressionConfig:
    """XP, leveling and leaderboard settings."""

    xp_per_level: int = 150  # xp_for_next_level = level * xp_per_level
    xp_per_correct: int = 10
    daily_xp_per_correct: int = 20
    leaderboard_size: int = 20
    streak_badge_days: int = 7


@dataclass
class PathConfig:
    """File system paths - single source of truth for all directories."""

    # Base paths
    project_root: Path = field(default_factory=lambda: Path(__file__).parent.parent)
    data_dir: Path = field(
        default_factory=lambda: Path(
            os.getenv("NEURONET_DATA_DIR", str(Path(__file__).parent.parent / "data"))
        )
    )

    # Schema files
    schemas_dir: Path = field(init=False)
    profile_schema: Path = field(init=False)
    results_schema: Path = field(init=False)
    leaderboard_schema: Path = field(init=False)

    def __post_init__(self):
        """Initialize computed paths."""
        self.schemas_dir = self.project_root / "schemas"
        self.profile_schema = self.schemas_dir / "user_profile.schema.json"
        self.results_schema = self.schemas_dir / "quiz_results.schema.json"
        self.leaderboard_schema = self.schemas_dir / "leaderboard.schema.json"

    def prepare_filesystem(self):
        """
        Create directories if they don't exist.

        Separated from __post_init__ to avoid side-effects on import.
        Call this explicitly from your app entrypoint.
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)


@dataclass
class LoggingConfig:
    """Logging configuration."""

    log_level: str = field(
        default_factory=lambda: os.getenv("NEURONET_LOG_LEVEL", "INFO").upper()
    )
    log_format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Config:
    """
    Main configuration class. Singleton pattern.

    Usage:
        from src.config import config

        # Access settings
        seconds = config.quiz.timer_seconds["easy"]
        per_level = config.progression.xp_per_level

        # Prepare filesystem (call once at startup)
        config.prepare_fs()
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.paths = PathConfig()
            cls._instance.quiz = QuizConfig()
            cls._instance.progression = ProgressionConfig()
            cls._instance.logging = LoggingConfig()

        return cls._instance

    def prepare_fs(self):
        """Prepare filesystem (create directories). Call once at startup."""
        self.paths.prepare_filesystem()

    def validate(self) -> list[str]:
        """
        Validate configuration and return list of errors.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []

        # Quiz validation
        for difficulty in ("easy", "medium", "hard"):
            seconds = self.quiz.timer_seconds.get(difficulty)
            if seconds is None or seconds <= 0:
                errors.append(f"timer_seconds[{difficulty}] must be > 0, got {seconds}")

        timers = [self.quiz.timer_seconds.get(d, 0) for d in ("easy", "medium", "hard")]
        if timers != sorted(timers, reverse=True):
            errors.append(f"timer_seconds must not grow with difficulty, got {timers}")

        if self.quiz.option_count < 2:
            errors.append(f"option_count must be >= 2, got {self.quiz.option_count}")

        if self.quiz.distractor_attempts < 0:
            errors.append(
                f"distractor_attempts must be >= 0, got {self.quiz.distractor_attempts}"
            )

        if self.quiz.daily_question_count <= 0:
            errors.append(
                f"daily_question_count must be > 0, got {self.quiz.daily_question_count}"
            )

        for category, tiers in self.quiz.magnitude_ceilings.items():
            values = [tiers.get(d, 0) for d in ("easy", "medium", "hard")]
            if min(values) < 1:
                errors.append(f"magnitude ceilings for {category} must be >= 1, got {values}")
            elif values != sorted(values):
                errors.append(f"magnitude ceilings for {category} must increase, got {values}")

        # Progression validation
        if self.progression.xp_per_level <= 0:
            errors.append(f"xp_per_level must be > 0, got {self.progression.xp_per_level}")

        if self.progression.leaderboard_size < 1:
            errors.append(
                f"leaderboard_size must be >= 1, got {self.progression.leaderboard_size}"
            )

        # Path validation
        for schema in (
            self.paths.profile_schema,
            self.paths.results_schema,
            self.paths.leaderboard_schema,
        ):
            if not schema.exists():
                errors.append(f"Schema not found: {schema}")

        # Logging validation
        if not isinstance(logging.getLevelName(self.logging.log_level), int):
            errors.append(f"Unknown log level: {self.logging.log_level}")

        return errors


# Global config instance
config = Config()


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure the root logger from LoggingConfig.

    Library code only emits through module loggers; call this from the host
    application entrypoint.
    """
    logging.basicConfig(
        level=(level or config.logging.log_level).upper(),
        format=config.logging.log_format,
    )
