"""
Learning Service - ties quiz sessions to the player's persistent progress.

Orchestrates the complete play loop:
1. Daily check-in (streak bookkeeping)
2. Quiz session creation with shared generator and clock
3. Result recording: XP, level-ups, streak, badges, leaderboard
4. Once-per-day daily challenge
5. Learning module completion and identity updates
6. Progress reset

The host application owns one LearningService per player and re-renders
from its return values.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .agents.question_generator import QuestionGenerator
from .config import config
from .errors import DailyChallengeAlreadyCompletedError
from .models.leaderboard import LeaderboardEntry, entry_for_profile, rank_of, upsert
from .models.quiz_models import Difficulty, QuizCategory, QuizResult
from .models.quiz_session import QuizSession
from .models.user_profile import AVATARS, MAX_NAME_LENGTH, Badge, UserProfile
from .utils import progress
from .utils.clock import Clock
from .utils.persistence import ProgressStore
from .utils.randomness import RandomSource

logger = logging.getLogger(__name__)


@dataclass
class RecordOutcome:
    """
    What recording one result changed.

    Attributes:
        xp_earned: XP awarded for the result
        levels_gained: Number of level-ups it caused
        new_badges: Badges unlocked by it, in definition order
        rank: Player's 1-based leaderboard rank afterwards (None if off the board)
    """
    xp_earned: int
    levels_gained: int
    new_badges: List[Badge] = field(default_factory=list)
    rank: Optional[int] = None

    @property
    def leveled_up(self) -> bool:
        return self.levels_gained > 0


class LearningService:
    """
    Player-facing facade over the quiz core and a ProgressStore.

    Usage:
        service = LearningService(JsonFileProgressStore())
        service.check_in()
        session = service.new_session()
        session.start(QuizCategory.BINARY_DECIMAL, Difficulty.EASY)
        ...
        outcome = service.record_quiz(session.finalize())
    """

    def __init__(
        self,
        store: ProgressStore,
        clock: Optional[Clock] = None,
        rng: Optional[RandomSource] = None,
    ):
        """
        Initialize the service and load stored progress.

        Args:
            store: Where profile, history and leaderboard live
            clock: Clock for timestamps and calendar days (store's clock if None)
            rng: Random source shared by every session this service creates
        """
        self.store = store
        self.clock = clock or store.clock
        self.generator = QuestionGenerator(rng=rng, clock=self.clock)

        self.profile: UserProfile = store.load_profile()
        self.results: List[QuizResult] = store.load_results()
        self.leaderboard: List[LeaderboardEntry] = store.load_leaderboard()

    # ==================== Sessions ====================

    def check_in(self) -> bool:
        """
        Record today's visit for the streak.

        Returns:
            True if the streak changed
        """
        changed = progress.update_streak(self.profile, self.clock.today())
        if changed:
            self.store.save_profile(self.profile)
            logger.info("%s checked in, streak %d", self.profile.name, self.profile.streak)
        return changed

    def new_session(self) -> QuizSession:
        """A fresh, not-yet-started session wired to this service's generator and clock."""
        return QuizSession(generator=self.generator, clock=self.clock)

    def record_quiz(self, result: QuizResult) -> RecordOutcome:
        """
        Store a finished quiz and award its XP.

        Daily challenge results are routed to ``record_daily_challenge``.
        """
        if result.category is QuizCategory.DAILY_CHALLENGE:
            return self.record_daily_challenge(result)

        self._append_result(result)
        return self._award_xp(progress.xp_for_result(result))

    # ==================== Daily challenge ====================

    def is_daily_challenge_available(self) -> bool:
        return not self.store.is_daily_challenge_done_today()

    def start_daily_challenge(self) -> QuizSession:
        """
        Start today's daily challenge.

        Raises:
            DailyChallengeAlreadyCompletedError: If it was already completed today
        """
        if not self.is_daily_challenge_available():
            raise DailyChallengeAlreadyCompletedError(
                f"Daily challenge already completed on {self.clock.today().isoformat()}"
            )

        session = self.new_session()
        session.start(
            QuizCategory.DAILY_CHALLENGE,
            Difficulty(config.quiz.daily_difficulty),
            config.quiz.daily_question_count,
        )
        return session

    def record_daily_challenge(self, result: QuizResult) -> RecordOutcome:
        """Store a daily challenge result, award the flat daily XP and mark today done."""
        self._append_result(result)
        outcome = self._award_xp(progress.xp_for_daily_challenge(result.score))
        self.store.mark_daily_challenge_done_today()
        logger.info(
            "%s completed the daily challenge: %d/%d",
            self.profile.name, result.score, result.total_questions,
        )
        return outcome

    # ==================== Profile ====================

    def complete_module(self, module_id: str) -> bool:
        """
        Mark a learning module as completed.

        Returns:
            True if the module was not completed before
        """
        if not module_id:
            raise ValueError("module_id cannot be empty")
        if module_id in self.profile.completed_modules:
            return False
        self.profile.completed_modules.add(module_id)
        self.store.save_profile(self.profile)
        logger.info("%s completed module '%s'", self.profile.name, module_id)
        return True

    def update_identity(self, name: Optional[str] = None, avatar_index: Optional[int] = None) -> None:
        """
        Change display name and/or avatar.

        Both values are checked before either is applied.

        Raises:
            ValueError: If the name is blank or longer than MAX_NAME_LENGTH,
                or the avatar index is out of range
        """
        if name is not None:
            name = name.strip()
            if not name:
                raise ValueError("Name cannot be blank")
            if len(name) > MAX_NAME_LENGTH:
                raise ValueError(
                    f"Name must be at most {MAX_NAME_LENGTH} characters, got {len(name)}"
                )
        if avatar_index is not None and not 0 <= avatar_index < len(AVATARS):
            raise ValueError(
                f"avatar_index must be between 0 and {len(AVATARS) - 1}, got {avatar_index}"
            )

        if name is not None:
            self.profile.name = name
        if avatar_index is not None:
            self.profile.avatar_index = avatar_index
        self.store.save_profile(self.profile)

    def reset_progress(self) -> None:
        """Wipe stored progress and start over with a fresh profile."""
        self.store.reset_all()
        self.profile = UserProfile()
        self.results = []
        self.leaderboard = []
        logger.info("Progress reset")

    # ==================== Statistics ====================

    @property
    def quizzes_taken(self) -> int:
        return progress.quizzes_taken(self.results)

    def total_accuracy(self) -> float:
        return progress.total_accuracy(self.results)

    def accuracy_for_category(self, category: QuizCategory) -> float:
        return progress.accuracy_for_category(self.results, category)

    def category_breakdown(self) -> Dict[str, Dict[str, float]]:
        return progress.category_breakdown(self.results)

    def rank(self) -> Optional[int]:
        return rank_of(self.leaderboard, self.profile.name)

    def get_player_summary(self) -> Dict[str, object]:
        """Dashboard view of the player's progress."""
        return {
            "name": self.profile.name,
            "avatar": self.profile.avatar,
            "level": self.profile.level,
            "xp": self.profile.xp,
            "xp_for_next_level": self.profile.xp_for_next_level,
            "total_xp": progress.absolute_xp(self.profile),
            "streak": self.profile.streak,
            "badges": sorted(self.profile.unlocked_badge_ids),
            "completed_modules": sorted(self.profile.completed_modules),
            "quizzes_taken": self.quizzes_taken,
            "total_accuracy": round(self.total_accuracy(), 4),
            "rank": self.rank(),
            "daily_challenge_available": self.is_daily_challenge_available(),
        }

    # ==================== Internals ====================

    def _append_result(self, result: QuizResult) -> None:
        self.results.append(result)
        self.store.append_result(result)

    def _award_xp(self, amount: int) -> RecordOutcome:
        """Apply XP and every follow-on effect, then persist profile and leaderboard."""
        now = self.clock.now()
        levels_gained = progress.apply_xp(self.profile, amount)
        progress.update_streak(self.profile, self.clock.start_of_day(now))
        new_badges = progress.evaluate_badges(self.profile, self.results, now)
        self.store.save_profile(self.profile)

        self.leaderboard = upsert(self.leaderboard, entry_for_profile(self.profile, now))
        self.store.save_leaderboard(self.leaderboard)

        logger.info("%s earned %d XP", self.profile.name, amount)
        return RecordOutcome(
            xp_earned=amount,
            levels_gained=levels_gained,
            new_badges=new_badges,
            rank=self.rank(),
        )
