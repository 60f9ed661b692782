"""
Unit tests for validation utilities.

Tests:
- SchemaValidator basics and auto-repair
- Profile consistency checks
- Result history and leaderboard checks
- ValidationResult rendering
"""

import pytest

from src.utils.validation import (
    LeaderboardValidator,
    QuizResultsValidator,
    SchemaValidator,
    UserProfileValidator,
    ValidationResult,
    validate_leaderboard,
    validate_quiz_results,
    validate_user_profile,
)


def result_dict(score=3, total=5):
    return {
        "result_id": "qr-1",
        "category": "binary_decimal",
        "score": score,
        "total_questions": total,
        "difficulty": "easy",
        "completed_at": "2024-03-15T12:00:00+00:00",
        "time_taken_seconds": 30.0,
    }


def entry_dict(name, xp, level=1):
    return {
        "entry_id": f"lb-{name}",
        "name": name,
        "xp": xp,
        "level": level,
        "recorded_at": "2024-03-15T12:00:00+00:00",
    }


class TestSchemaValidator:
    """Test suite for the generic validator."""

    def test_valid_data(self, temp_schema_file):
        result = SchemaValidator(temp_schema_file).validate({"test": "ok"})
        assert result.valid
        assert bool(result)
        assert result.errors == []

    def test_missing_required_field(self, temp_schema_file):
        result = SchemaValidator(temp_schema_file).validate({})
        assert not result.valid
        assert any("'test' is a required property" in e for e in result.errors)

    def test_error_message_includes_path(self, temp_schema_file):
        result = SchemaValidator(temp_schema_file).validate({"test": 5})
        assert any(e.startswith("At 'test':") for e in result.errors)

    def test_auto_repair_strips_unknown_keys_and_coerces(self, temp_schema_file):
        data = {"test": "ok", "extra": 1, "count": "7"}
        result = SchemaValidator(temp_schema_file).validate(data, auto_repair=False)
        assert not result.valid

        validator = SchemaValidator(temp_schema_file)
        validator.INTEGER_FIELDS = ("count",)
        repaired = validator.validate(data, auto_repair=True)
        assert repaired.valid
        assert repaired.data == {"test": "ok", "count": 7}
        assert len(repaired.repairs) == 2
        # Original is untouched
        assert data["extra"] == 1

    def test_result_str(self):
        assert "passed" in str(ValidationResult(True, []))
        text = str(ValidationResult(False, ["bad thing"]))
        assert "1 error" in text and "bad thing" in text


class TestUserProfileValidator:
    """Test suite for stored profiles."""

    def test_valid_profile(self, valid_profile_dict):
        assert validate_user_profile(valid_profile_dict).valid

    def test_level_must_be_positive(self, valid_profile_dict):
        valid_profile_dict["level"] = 0
        assert not UserProfileValidator().validate(valid_profile_dict).valid

    def test_xp_beyond_threshold_rejected(self, valid_profile_dict):
        valid_profile_dict["level"] = 2
        valid_profile_dict["xp"] = 300
        result = validate_user_profile(valid_profile_dict)
        assert not result.valid
        assert any("level-up" in e for e in result.errors)

    def test_duplicate_badges_rejected(self, valid_profile_dict):
        valid_profile_dict["badges"].append(dict(valid_profile_dict["badges"][0]))
        result = validate_user_profile(valid_profile_dict)
        assert not result.valid
        assert any("first_quiz" in e for e in result.errors)

    def test_bad_last_active_date(self, valid_profile_dict):
        valid_profile_dict["last_active"] = "2024-13-40"
        assert not validate_user_profile(valid_profile_dict).valid

    def test_null_last_active_allowed(self, valid_profile_dict):
        valid_profile_dict["last_active"] = None
        assert validate_user_profile(valid_profile_dict).valid

    def test_repair_coerces_numeric_strings(self, valid_profile_dict):
        valid_profile_dict["streak"] = "4"
        result = validate_user_profile(valid_profile_dict, auto_repair=True)
        assert result.valid
        assert result.data["streak"] == 4


class TestQuizResultsValidator:
    """Test suite for result history."""

    def test_valid_history(self):
        assert validate_quiz_results([result_dict(), result_dict(5, 5)]).valid

    def test_empty_history(self):
        assert QuizResultsValidator().validate([]).valid

    def test_score_above_total(self):
        result = validate_quiz_results([result_dict(6, 5)])
        assert not result.valid
        assert "exceeds" in result.errors[0]

    def test_unknown_category(self):
        bad = result_dict()
        bad["category"] = "trigonometry"
        assert not validate_quiz_results([bad]).valid


class TestLeaderboardValidator:
    """Test suite for the leaderboard document."""

    def test_valid_board(self):
        assert validate_leaderboard([entry_dict("a", 30), entry_dict("b", 30), entry_dict("c", 1)]).valid

    def test_unsorted_board(self):
        result = LeaderboardValidator().validate([entry_dict("a", 1), entry_dict("b", 30)])
        assert not result.valid
        assert any("sorted" in e for e in result.errors)

    def test_duplicate_names(self):
        assert not validate_leaderboard([entry_dict("a", 30), entry_dict("a", 10)]).valid

    def test_too_many_entries(self):
        board = [entry_dict(f"p{i}", 100 - i) for i in range(21)]
        result = validate_leaderboard(board)
        assert not result.valid
        assert any("limit" in e for e in result.errors)

    @pytest.mark.parametrize("xp", [-1, "lots"])
    def test_bad_xp(self, xp):
        assert not validate_leaderboard([entry_dict("a", xp)]).valid
