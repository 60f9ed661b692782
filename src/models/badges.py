"""
Badge definitions and their unlock predicates.

Predicates are pure: they read the profile and result history and never
mutate either. Evaluation order is the order of BADGE_DEFINITIONS.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Sequence

from ..config import config
from .quiz_models import QuizCategory, QuizResult
from .user_profile import UserProfile, absolute_xp

Predicate = Callable[[UserProfile, Sequence[QuizResult]], bool]


@dataclass(frozen=True)
class BadgeDefinition:
    """An achievement the player can unlock."""

    badge_id: str
    title: str
    description: str
    icon: str
    requirement: Predicate

    def is_met(self, profile: UserProfile, results: Sequence[QuizResult]) -> bool:
        return bool(self.requirement(profile, results))


def _all_categories_tried(_: UserProfile, results: Sequence[QuizResult]) -> bool:
    tried = {result.category for result in results}
    return len(tried) >= len(QuizCategory)


BADGE_DEFINITIONS: List[BadgeDefinition] = [
    BadgeDefinition(
        "first_quiz", "First Steps", "Complete your first quiz", "star.fill",
        lambda _, results: len(results) >= 1,
    ),
    BadgeDefinition(
        "ten_quizzes", "Quiz Master", "Complete 10 quizzes", "rosette",
        lambda _, results: len(results) >= 10,
    ),
    BadgeDefinition(
        "perfect_score", "Perfectionist", "Get 100% on any quiz", "crown.fill",
        lambda _, results: any(r.total_questions > 0 and r.accuracy >= 1.0 for r in results),
    ),
    BadgeDefinition(
        "level_5", "Rising Star", "Reach level 5", "star.circle.fill",
        lambda profile, _: profile.level >= 5,
    ),
    BadgeDefinition(
        "level_10", "Network Ninja", "Reach level 10", "bolt.circle.fill",
        lambda profile, _: profile.level >= 10,
    ),
    BadgeDefinition(
        "streak_7", "Week Warrior", "7-day streak", "flame.fill",
        lambda profile, _: profile.streak >= config.progression.streak_badge_days,
    ),
    BadgeDefinition(
        "xp_1000", "XP Hunter", "Earn 1000+ total XP", "sparkles",
        lambda profile, _: absolute_xp(profile) >= 1000,
    ),
    BadgeDefinition(
        "all_categories", "Well Rounded", "Try every quiz category", "circle.grid.cross.fill",
        _all_categories_tried,
    ),
]
