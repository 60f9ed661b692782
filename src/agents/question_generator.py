"""
Question Generator - Synthesizes multiple-choice questions per category and difficulty.

Numeric categories are generated procedurally from the conversion engine;
concept categories draw from curated pools; the daily challenge is
deterministic per calendar day.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from ..config import QuizConfig, config
from ..models.quiz_models import (
    CONCRETE_CATEGORIES,
    Difficulty,
    QuizCategory,
    QuizQuestion,
)
from ..utils import conversion as conv
from ..utils.clock import Clock
from ..utils.randomness import RandomSource
from .question_bank import CONCEPT_POOLS, DAILY_CHALLENGE_POOL, PoolEntry

logger = logging.getLogger(__name__)

PLACEHOLDER_PREFIX = "N/A"


def _derivation(steps: List[conv.ConversionStep]) -> str:
    """Compress a step trace into one explanation sentence."""
    return "; ".join(step.label for step in steps[:-1])


class QuestionGenerator:
    """
    Generates QuizQuestion instances.

    Features:
    - Four numeric categories with several question variants each
    - Curated pools for IP addressing, subnetting and protocols
    - "Mixed" delegates to a random concrete category
    - Daily challenge selection keyed by day of year and question position
    """

    def __init__(
        self,
        rng: Optional[RandomSource] = None,
        settings: Optional[QuizConfig] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize question generator.

        Args:
            rng: Random source (a fresh one seeded from config if None)
            settings: Quiz settings (defaults to config.quiz)
            clock: Clock used to pick the daily challenge day
        """
        self.rng = rng or RandomSource()
        self.settings = settings or config.quiz
        self.clock = clock or Clock()

        self._numeric = {
            QuizCategory.BINARY_DECIMAL: self._binary_decimal,
            QuizCategory.DECIMAL_HEX: self._decimal_hex,
            QuizCategory.DECIMAL_OCTAL: self._decimal_octal,
            QuizCategory.HEX_BINARY: self._hex_binary,
        }

    def generate(
        self,
        category: QuizCategory,
        difficulty: Difficulty,
        position: int = 0,
    ) -> QuizQuestion:
        """
        Produce one question.

        Args:
            category: Category to generate for
            difficulty: Difficulty tier (drives magnitude ceilings)
            position: Index of the question within its quiz (daily challenge only)

        Returns:
            A QuizQuestion with four distinct options
        """
        category = QuizCategory(category)
        difficulty = Difficulty(difficulty)

        if category is QuizCategory.MIXED:
            delegate = self.rng.choice(CONCRETE_CATEGORIES)
            logger.debug("Mixed question delegated to %s", delegate.value)
            return self.generate(delegate, difficulty, position)

        if category is QuizCategory.DAILY_CHALLENGE:
            return self.daily_question(position)

        if category in CONCEPT_POOLS:
            entry = self.rng.choice(CONCEPT_POOLS[category])
            return self._from_pool(entry, category, shuffle=True)

        ceiling = self.settings.ceiling_for(category.value, difficulty.value)
        return self._numeric[category](ceiling)

    def generate_batch(
        self,
        category: QuizCategory,
        difficulty: Difficulty,
        count: int,
    ) -> List[QuizQuestion]:
        """Generate ``count`` questions with positions 0..count-1."""
        return [self.generate(category, difficulty, position=i) for i in range(max(0, count))]

    def daily_question(self, position: int) -> QuizQuestion:
        """
        Deterministic question for today's challenge.

        Index is (day_of_year + position) modulo the pool size, so the
        sequence repeats yearly and neighbouring days overlap.
        """
        day_of_year = self.clock.today().timetuple().tm_yday
        index = (day_of_year + position) % len(DAILY_CHALLENGE_POOL)
        return self._from_pool(
            DAILY_CHALLENGE_POOL[index], QuizCategory.DAILY_CHALLENGE, shuffle=False
        )

    # ==================== Options ====================

    def generate_options(self, correct: str, candidate: Callable[[], str]) -> List[str]:
        """
        Build a shuffled option list containing ``correct`` and distractors.

        Calls ``candidate`` at most ``distractor_attempts`` times; if it keeps
        colliding, the remaining slots are filled with placeholders.
        """
        target = self.settings.option_count
        options = [correct]
        attempts = 0
        while len(options) < target and attempts < self.settings.distractor_attempts:
            value = candidate()
            if value not in options:
                options.append(value)
            attempts += 1

        if len(options) < target:
            logger.debug(
                "Distractor budget exhausted for %r after %d attempts, padding %d slot(s)",
                correct, attempts, target - len(options),
            )
        filler = len(options)
        while len(options) < target:
            placeholder = f"{PLACEHOLDER_PREFIX}{filler}"
            if placeholder not in options:
                options.append(placeholder)
            filler += 1

        return self.rng.shuffled(options)

    def _from_pool(self, entry: PoolEntry, category: QuizCategory, shuffle: bool) -> QuizQuestion:
        prompt, correct, explanation, options = entry
        return QuizQuestion(
            prompt=prompt,
            correct_answer=correct,
            options=self.rng.shuffled(options) if shuffle else list(options),
            explanation=explanation,
            category=category,
        )

    # ==================== Numeric Categories ====================

    def _number(self, ceiling: int) -> int:
        return self.rng.randint(1, ceiling)

    def _near(self, value: int, spread: int = 3) -> int:
        """A positive value close to ``value`` (plausible distractor)."""
        low = max(1, value - spread)
        # At least five values in the window, so three distinct distractors exist
        high = max(value + spread, low + 4)
        return self.rng.randint(low, high)

    def _binary_decimal(self, ceiling: int) -> QuizQuestion:
        variant = self.rng.choice(("to_binary", "from_binary", "bits_needed", "addition"))
        num = self._number(ceiling)
        binary = conv.to_binary(num)
        category = QuizCategory.BINARY_DECIMAL

        if variant == "to_binary":
            steps = conv.steps_to_binary(num)
            return QuizQuestion(
                prompt=f"Convert decimal {num} to binary",
                correct_answer=binary,
                options=self.generate_options(
                    binary, lambda: conv.to_binary(self._number(ceiling))
                ),
                explanation=(
                    f"{num} in binary is {binary}. Each bit represents a power of 2: "
                    f"{_derivation(steps)}."
                ),
                category=category,
            )

        if variant == "from_binary":
            steps = conv.steps_from_binary(binary)
            return QuizQuestion(
                prompt=f"Convert binary {binary} to decimal",
                correct_answer=str(num),
                options=self.generate_options(str(num), lambda: str(self._number(ceiling))),
                explanation=f"Binary {binary} = {num} in decimal: {_derivation(steps)}.",
                category=category,
            )

        if variant == "bits_needed":
            bits = conv.digits_needed(num, 2)
            return QuizQuestion(
                prompt=f"How many bits are needed to write decimal {num} in binary?",
                correct_answer=str(bits),
                options=self.generate_options(str(bits), lambda: str(self._near(bits, 2))),
                explanation=f"{num} = {binary} in binary, which is {bits} bits long.",
                category=category,
            )

        a = self._number(max(1, ceiling // 2))
        b = self._number(max(1, ceiling // 2))
        total = conv.to_binary(a + b)
        return QuizQuestion(
            prompt=f"What is {conv.to_binary(a)} + {conv.to_binary(b)} in binary?",
            correct_answer=total,
            options=self.generate_options(total, lambda: conv.to_binary(self._near(a + b))),
            explanation=(
                f"{conv.to_binary(a)} is {a} and {conv.to_binary(b)} is {b}; "
                f"{a} + {b} = {a + b}, which is {total} in binary."
            ),
            category=category,
        )

    def _decimal_hex(self, ceiling: int) -> QuizQuestion:
        variant = self.rng.choice(("to_hex", "from_hex", "digits_needed", "addition"))
        num = self._number(ceiling)
        hex_value = conv.to_hex(num)
        category = QuizCategory.DECIMAL_HEX

        if variant == "to_hex":
            steps = conv.steps_to_hex(num)
            return QuizQuestion(
                prompt=f"Convert decimal {num} to hexadecimal",
                correct_answer=hex_value,
                options=self.generate_options(
                    hex_value, lambda: conv.to_hex(self._number(ceiling))
                ),
                explanation=f"{num} in hex is {hex_value}: {_derivation(steps)}.",
                category=category,
            )

        if variant == "from_hex":
            steps = conv.steps_from_hex(hex_value)
            return QuizQuestion(
                prompt=f"Convert hex {hex_value} to decimal",
                correct_answer=str(num),
                options=self.generate_options(str(num), lambda: str(self._number(ceiling))),
                explanation=f"Hex {hex_value} = {num} in decimal: {_derivation(steps)}.",
                category=category,
            )

        if variant == "digits_needed":
            digits = conv.digits_needed(num, 16)
            return QuizQuestion(
                prompt=f"How many hex digits are needed to write decimal {num}?",
                correct_answer=str(digits),
                options=self.generate_options(str(digits), lambda: str(self._near(digits, 2))),
                explanation=(
                    f"{num} = {hex_value} in hex, which is {digits} digit(s). "
                    "Each hex digit covers 4 bits."
                ),
                category=category,
            )

        a = self._number(max(1, ceiling // 2))
        b = self._number(max(1, ceiling // 2))
        total = conv.to_hex(a + b)
        return QuizQuestion(
            prompt=f"What is {conv.to_hex(a)} + {conv.to_hex(b)} in hexadecimal?",
            correct_answer=total,
            options=self.generate_options(total, lambda: conv.to_hex(self._near(a + b))),
            explanation=(
                f"{conv.to_hex(a)} is {a} and {conv.to_hex(b)} is {b}; "
                f"{a} + {b} = {a + b}, which is {total} in hex."
            ),
            category=category,
        )

    def _decimal_octal(self, ceiling: int) -> QuizQuestion:
        variant = self.rng.choice(("to_octal", "from_octal", "digits_needed"))
        num = self._number(ceiling)
        octal = conv.to_octal(num)
        category = QuizCategory.DECIMAL_OCTAL

        if variant == "to_octal":
            steps = conv.steps_to_octal(num)
            return QuizQuestion(
                prompt=f"Convert decimal {num} to octal",
                correct_answer=octal,
                options=self.generate_options(
                    octal, lambda: conv.to_octal(self._number(ceiling))
                ),
                explanation=f"{num} in octal is {octal}: {_derivation(steps)}.",
                category=category,
            )

        if variant == "from_octal":
            steps = conv.steps_from_octal(octal)
            return QuizQuestion(
                prompt=f"Convert octal {octal} to decimal",
                correct_answer=str(num),
                options=self.generate_options(str(num), lambda: str(self._number(ceiling))),
                explanation=f"Octal {octal} = {num} in decimal: {_derivation(steps)}.",
                category=category,
            )

        digits = conv.digits_needed(num, 8)
        return QuizQuestion(
            prompt=f"How many octal digits are needed to write decimal {num}?",
            correct_answer=str(digits),
            options=self.generate_options(str(digits), lambda: str(self._near(digits, 2))),
            explanation=(
                f"{num} = {octal} in octal, which is {digits} digit(s). "
                "Each octal digit covers 3 bits."
            ),
            category=category,
        )

    def _hex_binary(self, ceiling: int) -> QuizQuestion:
        num = self._number(ceiling)
        hex_value = conv.to_hex(num)
        binary = conv.to_binary(num)
        category = QuizCategory.HEX_BINARY

        if self.rng.coin():
            steps = conv.steps_hex_to_binary(hex_value)
            return QuizQuestion(
                prompt=f"Convert hex {hex_value} to binary",
                correct_answer=binary,
                options=self.generate_options(
                    binary, lambda: conv.to_binary(self._number(ceiling))
                ),
                explanation=(
                    f"Hex {hex_value} → decimal {num} → binary {binary}. "
                    f"Digit by digit: {_derivation(steps)}."
                ),
                category=category,
            )

        steps = conv.steps_binary_to_hex(binary)
        return QuizQuestion(
            prompt=f"Convert binary {binary} to hex",
            correct_answer=hex_value,
            options=self.generate_options(
                hex_value, lambda: conv.to_hex(self._number(ceiling))
            ),
            explanation=(
                f"Binary {binary} → decimal {num} → hex {hex_value}. "
                f"{'; '.join(step.label for step in steps)}."
            ),
            category=category,
        )
