"""
Progress persistence with validation.

A ProgressStore keeps the player's profile, quiz history, leaderboard and
the daily challenge marker. The file-backed store writes one JSON document
per concern under the data directory and validates each against its schema.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path
from typing import Any, List, Optional

from ..config import config
from ..models.leaderboard import LeaderboardEntry
from ..models.quiz_models import QuizResult
from ..models.user_profile import UserProfile
from .clock import Clock
from .validation import (
    LeaderboardValidator,
    QuizResultsValidator,
    SchemaValidator,
    UserProfileValidator,
)

logger = logging.getLogger(__name__)


class ProgressStore(ABC):
    """Storage boundary for everything the player accumulates."""

    def __init__(self, clock: Optional[Clock] = None):
        self.clock = clock or Clock()

    @abstractmethod
    def load_profile(self) -> UserProfile:
        """Stored profile, or a fresh one if nothing usable is stored."""

    @abstractmethod
    def save_profile(self, profile: UserProfile) -> None:
        ...

    @abstractmethod
    def load_results(self) -> List[QuizResult]:
        """Quiz history, oldest first."""

    @abstractmethod
    def append_result(self, result: QuizResult) -> None:
        ...

    @abstractmethod
    def load_leaderboard(self) -> List[LeaderboardEntry]:
        ...

    @abstractmethod
    def save_leaderboard(self, board: List[LeaderboardEntry]) -> None:
        ...

    @abstractmethod
    def last_daily_challenge(self) -> Optional[date]:
        """Day the daily challenge was last completed."""

    @abstractmethod
    def _set_last_daily_challenge(self, day: date) -> None:
        ...

    @abstractmethod
    def reset_all(self) -> None:
        """Forget profile, history, leaderboard and the daily marker."""

    def is_daily_challenge_done_today(self) -> bool:
        last = self.last_daily_challenge()
        return last is not None and self.clock.is_same_day(last, self.clock.today())

    def mark_daily_challenge_done_today(self) -> None:
        self._set_last_daily_challenge(self.clock.today())


class InMemoryProgressStore(ProgressStore):
    """
    Process-local store. Nothing survives the process.

    Objects are round-tripped through their dict form on save and load so
    callers never share mutable state with the store.
    """

    def __init__(self, clock: Optional[Clock] = None):
        super().__init__(clock)
        self.reset_all()

    def load_profile(self) -> UserProfile:
        if self._profile is None:
            return UserProfile()
        return UserProfile.from_dict(self._profile)

    def save_profile(self, profile: UserProfile) -> None:
        self._profile = profile.to_dict()

    def load_results(self) -> List[QuizResult]:
        return [QuizResult.from_dict(item) for item in self._results]

    def append_result(self, result: QuizResult) -> None:
        self._results.append(result.to_dict())

    def load_leaderboard(self) -> List[LeaderboardEntry]:
        return [LeaderboardEntry.from_dict(item) for item in self._leaderboard]

    def save_leaderboard(self, board: List[LeaderboardEntry]) -> None:
        self._leaderboard = [entry.to_dict() for entry in board]

    def last_daily_challenge(self) -> Optional[date]:
        return self._daily

    def _set_last_daily_challenge(self, day: date) -> None:
        self._daily = day

    def reset_all(self) -> None:
        self._profile = None
        self._results = []
        self._leaderboard = []
        self._daily = None


class JsonFileProgressStore(ProgressStore):
    """
    JSON file store.

    Files (under ``data_dir``, default config.paths.data_dir):
    - profile.json
    - results.json
    - leaderboard.json
    - daily_challenge.json

    A missing, unreadable or invalid document loads as its default and a
    save that fails validation or I/O is dropped. Both are logged at
    WARNING; nothing is retried.
    """

    PROFILE_FILE = "profile.json"
    RESULTS_FILE = "results.json"
    LEADERBOARD_FILE = "leaderboard.json"
    DAILY_FILE = "daily_challenge.json"

    def __init__(self, data_dir: Path | str = None, clock: Optional[Clock] = None):
        """
        Initialize the store.

        Args:
            data_dir: Directory holding the JSON documents (created if missing)
            clock: Clock deciding what "today" is for the daily challenge
        """
        super().__init__(clock)
        self.data_dir = Path(data_dir) if data_dir else config.paths.data_dir
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self.profile_validator = UserProfileValidator()
        self.results_validator = QuizResultsValidator()
        self.leaderboard_validator = LeaderboardValidator()

    # ==================== Profile ====================

    def load_profile(self) -> UserProfile:
        data = self._read(self.PROFILE_FILE, self.profile_validator)
        if data is None:
            return UserProfile()
        try:
            return UserProfile.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Discarding unreadable profile: %s", e)
            return UserProfile()

    def save_profile(self, profile: UserProfile) -> None:
        self._write(self.PROFILE_FILE, profile.to_dict(), self.profile_validator)

    # ==================== Results ====================

    def load_results(self) -> List[QuizResult]:
        data = self._read(self.RESULTS_FILE, self.results_validator)
        if data is None:
            return []
        try:
            return [QuizResult.from_dict(item) for item in data]
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Discarding unreadable quiz history: %s", e)
            return []

    def append_result(self, result: QuizResult) -> None:
        history = [r.to_dict() for r in self.load_results()]
        history.append(result.to_dict())
        self._write(self.RESULTS_FILE, history, self.results_validator)

    # ==================== Leaderboard ====================

    def load_leaderboard(self) -> List[LeaderboardEntry]:
        data = self._read(self.LEADERBOARD_FILE, self.leaderboard_validator)
        if data is None:
            return []
        try:
            return [LeaderboardEntry.from_dict(item) for item in data]
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Discarding unreadable leaderboard: %s", e)
            return []

    def save_leaderboard(self, board: List[LeaderboardEntry]) -> None:
        self._write(
            self.LEADERBOARD_FILE,
            [entry.to_dict() for entry in board],
            self.leaderboard_validator,
        )

    # ==================== Daily challenge ====================

    def last_daily_challenge(self) -> Optional[date]:
        data = self._read(self.DAILY_FILE)
        if not isinstance(data, dict) or not data.get("last_completed"):
            return None
        try:
            return date.fromisoformat(data["last_completed"])
        except (TypeError, ValueError) as e:
            logger.warning("Discarding unreadable daily challenge marker: %s", e)
            return None

    def _set_last_daily_challenge(self, day: date) -> None:
        self._write(self.DAILY_FILE, {"last_completed": day.isoformat()})

    def reset_all(self) -> None:
        for name in (self.PROFILE_FILE, self.RESULTS_FILE, self.LEADERBOARD_FILE, self.DAILY_FILE):
            (self.data_dir / name).unlink(missing_ok=True)
        logger.info("Cleared stored progress in %s", self.data_dir)

    # ==================== File helpers ====================

    def _read(self, name: str, validator: Optional[SchemaValidator] = None) -> Any:
        """Load and validate one document; None when absent or unusable."""
        filepath = self.data_dir / name
        if not filepath.exists():
            return None

        try:
            with open(filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Failed to load %s: %s", filepath, e)
            return None

        if validator is not None:
            result = validator.validate(data, auto_repair=True)
            if not result.valid:
                logger.warning("Ignoring invalid %s:\n%s", filepath, result)
                return None
            for repair in result.repairs:
                logger.debug("Repaired %s: %s", filepath, repair)
            data = result.data
        return data

    def _write(self, name: str, data: Any, validator: Optional[SchemaValidator] = None) -> bool:
        """Validate and write one document. Returns False if the write was dropped."""
        filepath = self.data_dir / name

        if validator is not None:
            result = validator.validate(data)
            if not result.valid:
                logger.warning("Not saving invalid %s:\n%s", filepath, result)
                return False

        try:
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.warning("Failed to save %s: %s", filepath, e)
            return False
        return True
