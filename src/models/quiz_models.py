"""
Quiz data models: categories, difficulties, questions and results.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List


class QuizCategory(str, Enum):
    """Quiz topics. Values are the persisted identifiers."""

    BINARY_DECIMAL = "binary_decimal"
    DECIMAL_HEX = "decimal_hex"
    DECIMAL_OCTAL = "decimal_octal"
    HEX_BINARY = "hex_binary"
    IP_ADDRESSING = "ip_addressing"
    SUBNETTING = "subnetting"
    PROTOCOLS = "protocols"
    MIXED = "mixed"
    DAILY_CHALLENGE = "daily_challenge"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]

    @property
    def is_numeric(self) -> bool:
        return self in NUMERIC_CATEGORIES

    @property
    def is_concept(self) -> bool:
        return self in CONCEPT_CATEGORIES


_CATEGORY_LABELS = {
    QuizCategory.BINARY_DECIMAL: "Binary ↔ Decimal",
    QuizCategory.DECIMAL_HEX: "Decimal ↔ Hex",
    QuizCategory.DECIMAL_OCTAL: "Decimal ↔ Octal",
    QuizCategory.HEX_BINARY: "Hex ↔ Binary",
    QuizCategory.IP_ADDRESSING: "IP Addressing",
    QuizCategory.SUBNETTING: "Subnetting",
    QuizCategory.PROTOCOLS: "Protocols",
    QuizCategory.MIXED: "Mixed Challenge",
    QuizCategory.DAILY_CHALLENGE: "Daily Challenge",
}

NUMERIC_CATEGORIES = (
    QuizCategory.BINARY_DECIMAL,
    QuizCategory.DECIMAL_HEX,
    QuizCategory.DECIMAL_OCTAL,
    QuizCategory.HEX_BINARY,
)

CONCEPT_CATEGORIES = (
    QuizCategory.IP_ADDRESSING,
    QuizCategory.SUBNETTING,
    QuizCategory.PROTOCOLS,
)

# Categories "mixed" may delegate to
CONCRETE_CATEGORIES = NUMERIC_CATEGORIES + CONCEPT_CATEGORIES


class Difficulty(str, Enum):
    """Quiz difficulty tiers."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def multiplier(self) -> float:
        """XP multiplier applied to quiz scores."""
        return {"easy": 1.0, "medium": 1.5, "hard": 2.0}[self.value]

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass
class QuizQuestion:
    """
    A single multiple-choice question.

    Attributes:
        prompt: Question text shown to the player
        correct_answer: The one correct option
        options: Four distinct options, correct answer included exactly once
        explanation: Shown after the player answers
        category: Category the question was generated for
    """
    prompt: str
    correct_answer: str
    options: List[str]
    explanation: str
    category: QuizCategory

    def validate(self, option_count: int = 4) -> None:
        """
        Validate question integrity.

        Raises:
            ValueError: If the option list is malformed
        """
        if len(self.options) != option_count:
            raise ValueError(
                f"Question '{self.prompt}' must have {option_count} options, got {len(self.options)}"
            )
        if len(set(self.options)) != len(self.options):
            raise ValueError(f"Question '{self.prompt}' has duplicate options: {self.options}")
        if self.options.count(self.correct_answer) != 1:
            raise ValueError(
                f"Question '{self.prompt}' must contain the correct answer exactly once"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "prompt": self.prompt,
            "correct_answer": self.correct_answer,
            "options": list(self.options),
            "explanation": self.explanation,
            "category": self.category.value,
        }


def accuracy_of(score: int, total: int) -> float:
    """Fraction correct, 0.0 for an empty quiz."""
    return score / total if total > 0 else 0.0


def percent_of(score: int, total: int) -> int:
    """Whole percent correct (truncated), 0 for an empty quiz."""
    return int(accuracy_of(score, total) * 100)


@dataclass
class QuizResult:
    """
    Outcome of one finished quiz run.

    Attributes:
        category: Category played
        score: Number of correct answers
        total_questions: Number of questions asked
        difficulty: Difficulty played
        completed_at: When the result was produced
        time_taken_seconds: Elapsed time since the quiz started
        result_id: Unique identifier (auto-generated)
    """
    category: QuizCategory
    score: int
    total_questions: int
    difficulty: Difficulty
    completed_at: datetime
    time_taken_seconds: float = 0.0
    result_id: str = field(default_factory=lambda: f"qr-{uuid.uuid4()}")

    def __post_init__(self):
        if self.total_questions < 0:
            raise ValueError(f"total_questions cannot be negative: {self.total_questions}")
        if not 0 <= self.score <= self.total_questions:
            raise ValueError(
                f"score must be between 0 and {self.total_questions}, got {self.score}"
            )

    @property
    def accuracy(self) -> float:
        return accuracy_of(self.score, self.total_questions)

    @property
    def accuracy_percent(self) -> int:
        return percent_of(self.score, self.total_questions)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for persistence."""
        return {
            "result_id": self.result_id,
            "category": self.category.value,
            "score": self.score,
            "total_questions": self.total_questions,
            "difficulty": self.difficulty.value,
            "completed_at": self.completed_at.isoformat(),
            "time_taken_seconds": self.time_taken_seconds,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> QuizResult:
        """Rebuild a result from its persisted form."""
        return cls(
            result_id=data["result_id"],
            category=QuizCategory(data["category"]),
            score=int(data["score"]),
            total_questions=int(data["total_questions"]),
            difficulty=Difficulty(data["difficulty"]),
            completed_at=datetime.fromisoformat(data["completed_at"]),
            time_taken_seconds=float(data.get("time_taken_seconds", 0.0)),
        )
