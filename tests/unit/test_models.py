"""
Unit tests for quiz and profile data models.

Tests:
- Category and difficulty metadata
- Question integrity checks
- Result validation and persistence form
- Profile derived values and persistence form
"""

import json
from datetime import date, datetime, timezone

import pytest

from src.config import config
from src.models.quiz_models import (
    Difficulty,
    QuizCategory,
    QuizQuestion,
    QuizResult,
    percent_of,
)
from src.models.user_profile import AVATARS, MAX_NAME_LENGTH, Badge, UserProfile


NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


class TestEnums:
    def test_category_groups(self):
        assert QuizCategory.HEX_BINARY.is_numeric
        assert QuizCategory.PROTOCOLS.is_concept
        assert not QuizCategory.MIXED.is_numeric
        assert not QuizCategory.DAILY_CHALLENGE.is_concept
        assert QuizCategory.BINARY_DECIMAL.label == "Binary ↔ Decimal"

    def test_difficulty_multipliers(self):
        assert [d.multiplier for d in Difficulty] == [1.0, 1.5, 2.0]
        assert Difficulty.MEDIUM.label == "Medium"


class TestQuizQuestion:
    """Test suite for question integrity."""

    def question(self, options, correct="A"):
        return QuizQuestion("Pick A", correct, options, "Because", QuizCategory.PROTOCOLS)

    def test_valid_question(self):
        self.question(["A", "B", "C", "D"]).validate()

    @pytest.mark.parametrize(
        "options",
        [["A", "B", "C"], ["A", "A", "B", "C"], ["B", "C", "D", "E"]],
    )
    def test_malformed_options(self, options):
        with pytest.raises(ValueError):
            self.question(options).validate()


class TestQuizResult:
    """Test suite for results."""

    def test_accuracy(self):
        result = QuizResult(QuizCategory.SUBNETTING, 2, 3, Difficulty.EASY, NOW)
        assert result.accuracy == pytest.approx(2 / 3)
        assert result.accuracy_percent == 66
        assert result.result_id.startswith("qr-")

    def test_empty_result(self):
        result = QuizResult(QuizCategory.SUBNETTING, 0, 0, Difficulty.EASY, NOW)
        assert result.accuracy == 0.0
        assert percent_of(0, 0) == 0

    @pytest.mark.parametrize("score,total", [(4, 3), (-1, 3), (0, -1)])
    def test_invalid_counts(self, score, total):
        with pytest.raises(ValueError):
            QuizResult(QuizCategory.SUBNETTING, score, total, Difficulty.EASY, NOW)

    def test_dict_round_trip(self):
        result = QuizResult(QuizCategory.DECIMAL_OCTAL, 3, 4, Difficulty.HARD, NOW, 61.5)
        data = result.to_dict()
        assert data["category"] == "decimal_octal"
        assert data["difficulty"] == "hard"
        assert QuizResult.from_dict(data) == result


class TestUserProfile:
    """Test suite for the player profile."""

    def test_defaults(self):
        profile = UserProfile()
        assert profile.level == 1
        assert profile.xp == 0
        assert profile.xp_for_next_level == 150
        assert profile.avatar == AVATARS[0]

    def test_level_progress(self):
        assert UserProfile(level=2, xp=150).level_progress == 0.5

    def test_dict_round_trip(self):
        profile = UserProfile(
            name="Ada",
            level=4,
            xp=12,
            streak=2,
            last_active=date(2024, 3, 14),
            badges=[Badge("level_5", "Rising Star", "star.circle.fill", "Reach level 5", True, NOW)],
            completed_modules={"b", "a"},
        )
        data = profile.to_dict()
        assert data["completed_modules"] == ["a", "b"]
        assert data["last_active"] == "2024-03-14"
        assert UserProfile.from_dict(data) == profile

    def test_from_partial_dict(self):
        profile = UserProfile.from_dict({"name": "Ada"})
        assert profile.level == 1
        assert profile.badges == []
        assert profile.last_active is None

    def test_name_limit_matches_schema(self):
        schema = json.loads(config.paths.profile_schema.read_text(encoding="utf-8"))
        assert schema["properties"]["name"]["maxLength"] == MAX_NAME_LENGTH
