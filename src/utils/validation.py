"""
Schema validation utilities for NeuroNet persisted documents.

Provides JSON Schema validation with clear error messages and automatic
repair for common problems in stored profile, result and leaderboard files.

Features:
- Format validation (calendar dates)
- Deep copy to prevent mutations
- Type coercion (numeric strings to integers)
- Removal of unknown keys
- Document-specific consistency checks beyond the schema
- Transparent repair tracking
"""

import json
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional

from jsonschema import Draft7Validator, FormatChecker, ValidationError

from ..config import config


class ValidationResult:
    """
    Result of a validation attempt.

    Attributes:
        valid: Whether data passed validation
        errors: List of error messages
        data: The validated data (may be modified if repair was attempted)
        repairs: List of repairs applied (for transparency)
    """

    def __init__(
        self,
        valid: bool,
        errors: list[str],
        data: Any = None,
        repairs: Optional[list[str]] = None,
    ):
        self.valid = valid
        self.errors = errors
        self.data = data
        self.repairs = repairs or []

    def __bool__(self) -> bool:
        """Allow using result in boolean context."""
        return self.valid

    def __str__(self) -> str:
        """Human-readable representation."""
        if self.valid:
            msg = "✓ Validation passed"
            if self.repairs:
                msg += f" (with {len(self.repairs)} repair(s))"
            return msg
        return f"✗ Validation failed with {len(self.errors)} error(s):\n" + "\n".join(
            f"  - {error}" for error in self.errors
        )


class SchemaValidator:
    """
    JSON Schema validator with auto-repair capabilities.

    Usage:
        validator = SchemaValidator("schemas/user_profile.schema.json")
        result = validator.validate(data)
        if result:
            print("Repairs applied:", result.repairs)
        else:
            print(result.errors)
    """

    # Integer fields that may arrive as strings from hand-edited files
    INTEGER_FIELDS = ("xp", "level", "streak", "avatar_index", "score", "total_questions")

    def __init__(self, schema_path: Path | str):
        """
        Initialize validator with a schema file.

        Args:
            schema_path: Path to JSON Schema file
        """
        self.schema_path = Path(schema_path)
        with open(self.schema_path, "r", encoding="utf-8") as f:
            self.schema = json.load(f)
        self.validator = Draft7Validator(self.schema, format_checker=FormatChecker())

    def validate(self, data: Any, auto_repair: bool = False) -> ValidationResult:
        """
        Validate data against schema.

        Args:
            data: Data to validate
            auto_repair: If True, attempt to fix common validation errors

        Returns:
            ValidationResult with validation status and any errors
        """
        errors = [self._format_error(error) for error in self.validator.iter_errors(data)]

        if errors:
            if auto_repair:
                repaired_data, repairs = self._attempt_repair(data)
                result = self.validate(repaired_data, auto_repair=False)
                result.repairs = repairs
                return result
            return ValidationResult(valid=False, errors=errors, data=data)

        return ValidationResult(valid=True, errors=[], data=data)

    def _format_error(self, error: ValidationError) -> str:
        """
        Convert ValidationError to human-readable message with details.

        Args:
            error: jsonschema ValidationError

        Returns:
            Formatted error message with validator and schema path
        """
        path = " -> ".join(str(p) for p in error.path) if error.path else "root"
        validator_name = getattr(error, "validator", "unknown")
        schema_path = "/".join(str(p) for p in error.schema_path)
        return (
            f"At '{path}': {error.message} "
            f"[validator={validator_name}, schema_path=/{schema_path}]"
        )

    def _attempt_repair(self, data: Any) -> tuple[Any, list[str]]:
        """
        Attempt to automatically fix common validation errors.

        Returns:
            Tuple of (repaired data, list of repairs applied)
        """
        # Deep copy to prevent mutation of original
        repaired = deepcopy(data)
        repairs = []

        self._strip_additional_props(repaired, self.schema, repairs)
        self._coerce_types(repaired, repairs)

        return repaired, repairs

    def _strip_additional_props(
        self, obj: Any, schema: dict, repairs: list[str], path: str = "root"
    ):
        """
        Recursively remove keys not allowed by schema (additionalProperties: false).
        Handles both objects and arrays.
        """
        if not isinstance(schema, dict):
            return

        if isinstance(obj, dict) and "properties" in schema:
            allowed = set(schema.get("properties", {}).keys())
            if schema.get("additionalProperties") is False:
                extra_keys = [k for k in list(obj.keys()) if k not in allowed]
                for k in extra_keys:
                    obj.pop(k, None)
                    repairs.append(f"Removed unknown key '{k}' at {path}")

            for k, subschema in schema.get("properties", {}).items():
                if k in obj:
                    self._strip_additional_props(obj[k], subschema, repairs, f"{path}.{k}")

        if isinstance(obj, list) and "items" in schema:
            for i, item in enumerate(obj):
                self._strip_additional_props(item, schema["items"], repairs, f"{path}[{i}]")

    def _coerce_types(self, obj: Any, repairs: list[str], path: str = "root"):
        """Coerce numeric strings (e.g. "12") to integers for known fields."""
        if isinstance(obj, list):
            for i, item in enumerate(obj):
                self._coerce_types(item, repairs, f"{path}[{i}]")
            return
        if not isinstance(obj, dict):
            return

        for key in self.INTEGER_FIELDS:
            value = obj.get(key)
            if isinstance(value, str):
                try:
                    coerced = int(float(value))
                except ValueError:
                    continue
                obj[key] = coerced
                repairs.append(f"Coerced {path}.{key}: '{value}' → {coerced}")


class UserProfileValidator(SchemaValidator):
    """
    Validator for stored user profiles.

    Adds checks beyond JSON Schema:
    - XP within the current level is below the level-up threshold
    - Badge ids are unique
    """

    def __init__(self, schema_path: Optional[Path] = None):
        super().__init__(schema_path or config.paths.profile_schema)

    def validate(self, data: Any, auto_repair: bool = False) -> ValidationResult:
        result = super().validate(data, auto_repair=auto_repair)
        if not result.valid:
            return result

        profile = result.data
        errors = []

        threshold = profile["level"] * config.progression.xp_per_level
        if profile["xp"] >= threshold:
            errors.append(
                f"xp {profile['xp']} should have triggered a level-up "
                f"(threshold {threshold} at level {profile['level']})"
            )

        badge_ids = [badge["badge_id"] for badge in profile.get("badges", [])]
        duplicates = sorted({b for b in badge_ids if badge_ids.count(b) > 1})
        if duplicates:
            errors.append(f"Duplicate badge ids: {', '.join(duplicates)}")

        return ValidationResult(
            valid=not errors, errors=errors, data=profile, repairs=result.repairs
        )


class QuizResultsValidator(SchemaValidator):
    """Validator for the stored quiz result history (score never exceeds total)."""

    def __init__(self, schema_path: Optional[Path] = None):
        super().__init__(schema_path or config.paths.results_schema)

    def validate(self, data: Any, auto_repair: bool = False) -> ValidationResult:
        result = super().validate(data, auto_repair=auto_repair)
        if not result.valid:
            return result

        errors = [
            f"Result {i}: score {item['score']} exceeds total_questions {item['total_questions']}"
            for i, item in enumerate(result.data)
            if item["score"] > item["total_questions"]
        ]
        return ValidationResult(
            valid=not errors, errors=errors, data=result.data, repairs=result.repairs
        )


class LeaderboardValidator(SchemaValidator):
    """
    Validator for the stored leaderboard.

    Checks: bounded size, descending XP order, one entry per name.
    """

    def __init__(self, schema_path: Optional[Path] = None):
        super().__init__(schema_path or config.paths.leaderboard_schema)

    def validate(self, data: Any, auto_repair: bool = False) -> ValidationResult:
        result = super().validate(data, auto_repair=auto_repair)
        if not result.valid:
            return result

        board = result.data
        errors = []
        limit = config.progression.leaderboard_size
        if len(board) > limit:
            errors.append(f"Leaderboard has {len(board)} entries, limit is {limit}")

        xps = [entry["xp"] for entry in board]
        if xps != sorted(xps, reverse=True):
            errors.append("Leaderboard is not sorted by descending xp")

        names = [entry["name"] for entry in board]
        if len(names) != len(set(names)):
            errors.append("Leaderboard has more than one entry for a name")

        return ValidationResult(
            valid=not errors, errors=errors, data=board, repairs=result.repairs
        )


# Convenience functions for quick validation
def validate_user_profile(data: dict, auto_repair: bool = False) -> ValidationResult:
    """
    Quick validation of a stored user profile.

    Example:
        result = validate_user_profile(profile.to_dict())
        if not result:
            print("Errors:", result.errors)
    """
    return UserProfileValidator().validate(data, auto_repair=auto_repair)


def validate_quiz_results(data: list, auto_repair: bool = False) -> ValidationResult:
    """Quick validation of a stored result history."""
    return QuizResultsValidator().validate(data, auto_repair=auto_repair)


def validate_leaderboard(data: list, auto_repair: bool = False) -> ValidationResult:
    """Quick validation of a stored leaderboard."""
    return LeaderboardValidator().validate(data, auto_repair=auto_repair)
