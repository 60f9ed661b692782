"""
Quiz Session - State machine for a single timed quiz run.

Drives question sequencing, the per-question countdown, answer evaluation
and scoring. The host calls ``tick()`` once per second while a question is
on screen (directly, from its own scheduler, or via CountdownTicker).
"""

from __future__ import annotations

import logging
import uuid
from enum import Enum
from typing import Any, Dict, List, Optional

from ..agents.question_generator import QuestionGenerator
from ..config import QuizConfig, config
from ..utils.clock import Clock
from ..utils.progress import xp_for_daily_challenge, xp_for_score
from .quiz_models import (
    Difficulty,
    QuizCategory,
    QuizQuestion,
    QuizResult,
    accuracy_of,
    percent_of,
)

logger = logging.getLogger(__name__)

# Submitted when the countdown runs out; never matches a real option
TIMEOUT_ANSWER = ""


class SessionState(str, Enum):
    """Lifecycle of a quiz session."""

    NOT_STARTED = "not_started"
    AWAITING_ANSWER = "awaiting_answer"
    SHOWING_EXPLANATION = "showing_explanation"
    FINISHED = "finished"
    ABANDONED = "abandoned"


class QuizSession:
    """
    One quiz run: NOT_STARTED → AWAITING_ANSWER ⇄ SHOWING_EXPLANATION → FINISHED.

    Commands that are not valid in the current state are no-ops and return
    False rather than raising.
    """

    def __init__(
        self,
        generator: Optional[QuestionGenerator] = None,
        clock: Optional[Clock] = None,
        settings: Optional[QuizConfig] = None,
        session_id: Optional[str] = None,
    ):
        """
        Initialize quiz session.

        Args:
            generator: Question source (shares its random source for shuffling)
            clock: Clock used for start/finish timestamps
            settings: Quiz settings (defaults to config.quiz)
            session_id: Session ID (auto-generated if None)
        """
        self.clock = clock or Clock()
        self.settings = settings or config.quiz
        self.generator = generator or QuestionGenerator(settings=self.settings, clock=self.clock)
        self.session_id = session_id or f"qs-{uuid.uuid4()}"

        self.state = SessionState.NOT_STARTED
        self.category = QuizCategory.BINARY_DECIMAL
        self.difficulty = Difficulty.EASY
        self.questions: List[QuizQuestion] = []
        self.current_index = 0
        self.score = 0
        self.selected_answer: Optional[str] = None
        self.is_correct: Optional[bool] = None
        self.time_remaining = 0
        self.timer_armed = False
        self.started_at = None

    # ==================== Commands ====================

    def start(
        self,
        category: QuizCategory,
        difficulty: Difficulty,
        question_count: Optional[int] = None,
    ) -> None:
        """
        Generate questions and begin the run.

        Args:
            category: Category to play
            difficulty: Difficulty tier (drives magnitudes and countdown)
            question_count: Number of questions (config default if None)
        """
        self.category = QuizCategory(category)
        self.difficulty = Difficulty(difficulty)
        if question_count is None:
            question_count = self.settings.default_question_count

        questions = self.generator.generate_batch(self.category, self.difficulty, question_count)
        # Daily challenge order is fixed per day
        if self.category is not QuizCategory.DAILY_CHALLENGE:
            questions = self.generator.rng.shuffled(questions)

        self.questions = questions
        self.score = 0
        self.current_index = 0
        self._clear_answer()
        self.started_at = self.clock.now()

        if not self.questions:
            self.timer_armed = False
            self.time_remaining = 0
            self.state = SessionState.FINISHED
            logger.info("Session %s started with no questions, finished at 0/0", self.session_id)
            return

        self.state = SessionState.AWAITING_ANSWER
        self._arm_timer()
        logger.info(
            "Session %s started: %s/%s, %d question(s)",
            self.session_id, self.category.value, self.difficulty.value, len(self.questions),
        )

    def tick(self) -> bool:
        """
        Advance the countdown by one time unit.

        Returns:
            True if the countdown expired on this tick and auto-submitted
        """
        if not self.timer_armed or self.state is not SessionState.AWAITING_ANSWER:
            return False

        self.time_remaining = max(0, self.time_remaining - 1)
        if self.time_remaining > 0:
            return False

        logger.debug("Session %s: time up on question %d", self.session_id, self.current_index)
        self._submit(TIMEOUT_ANSWER)
        return True

    def select_answer(self, answer: str) -> bool:
        """
        Submit an answer for the current question.

        Returns:
            True if the answer was recorded, False if the call was a no-op
        """
        if self.state is not SessionState.AWAITING_ANSWER or self.selected_answer is not None:
            return False
        self._submit(answer)
        return True

    def advance(self) -> bool:
        """
        Move past the explanation to the next question (or finish).

        Returns:
            True if the session moved, False if no answer has been given yet
        """
        if self.state is not SessionState.SHOWING_EXPLANATION:
            return False

        self.current_index += 1
        self._clear_answer()
        if self.current_index < len(self.questions):
            self.state = SessionState.AWAITING_ANSWER
            self._arm_timer()
        else:
            self.state = SessionState.FINISHED
            self.timer_armed = False
            logger.info(
                "Session %s finished: %d/%d", self.session_id, self.score, len(self.questions)
            )
        return True

    def finalize(self) -> Optional[QuizResult]:
        """
        Snapshot the finished run as a QuizResult.

        Returns:
            The result, or None if the session has not finished
        """
        if self.state is not SessionState.FINISHED:
            return None

        now = self.clock.now()
        elapsed = (now - self.started_at).total_seconds() if self.started_at else 0.0
        return QuizResult(
            category=self.category,
            score=self.score,
            total_questions=len(self.questions),
            difficulty=self.difficulty,
            completed_at=now,
            time_taken_seconds=max(0.0, elapsed),
        )

    def abandon(self) -> None:
        """Leave the session; the countdown is disarmed so no stray tick can fire."""
        if self.state in (SessionState.FINISHED, SessionState.ABANDONED):
            return
        self.timer_armed = False
        self.state = SessionState.ABANDONED
        logger.info("Session %s abandoned at question %d", self.session_id, self.current_index)

    # ==================== Queries ====================

    @property
    def current_question(self) -> Optional[QuizQuestion]:
        if self.state in (SessionState.AWAITING_ANSWER, SessionState.SHOWING_EXPLANATION):
            return self.questions[self.current_index]
        return None

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def is_finished(self) -> bool:
        return self.state is SessionState.FINISHED

    @property
    def is_over(self) -> bool:
        """Finished or abandoned; no further commands have any effect."""
        return self.state in (SessionState.FINISHED, SessionState.ABANDONED)

    @property
    def show_explanation(self) -> bool:
        return self.state is SessionState.SHOWING_EXPLANATION

    @property
    def progress_fraction(self) -> float:
        return accuracy_of(self.current_index, len(self.questions))

    @property
    def accuracy(self) -> float:
        return accuracy_of(self.score, len(self.questions))

    @property
    def accuracy_percent(self) -> int:
        return percent_of(self.score, len(self.questions))

    @property
    def xp_preview(self) -> int:
        """XP the current score would earn if recorded now."""
        if self.category is QuizCategory.DAILY_CHALLENGE:
            return xp_for_daily_challenge(self.score)
        return xp_for_score(self.score, self.difficulty)

    def snapshot(self) -> Dict[str, Any]:
        """Plain-data view of the session for a rendering layer."""
        question = self.current_question
        return {
            "session_id": self.session_id,
            "state": self.state.value,
            "category": self.category.value,
            "difficulty": self.difficulty.value,
            "question_number": min(self.current_index + 1, len(self.questions)),
            "total_questions": len(self.questions),
            "question": question.to_dict() if question else None,
            "selected_answer": self.selected_answer,
            "is_correct": self.is_correct,
            "time_remaining": self.time_remaining,
            "score": self.score,
            "accuracy_percent": self.accuracy_percent,
        }

    # ==================== Internals ====================

    def _submit(self, answer: str) -> None:
        question = self.questions[self.current_index]
        self.selected_answer = answer
        self.is_correct = answer == question.correct_answer
        if self.is_correct:
            self.score += 1
        self.timer_armed = False
        self.state = SessionState.SHOWING_EXPLANATION
        logger.debug(
            "Session %s: question %d answered %s",
            self.session_id, self.current_index, "correctly" if self.is_correct else "incorrectly",
        )

    def _arm_timer(self) -> None:
        # Re-arming replaces the previous countdown; there is only ever one
        self.time_remaining = self.settings.timer_seconds[self.difficulty.value]
        self.timer_armed = True

    def _clear_answer(self) -> None:
        self.selected_answer = None
        self.is_correct = None
