"""
Progression engine and progress analytics.

Pure functions over a UserProfile and its quiz history:
- XP awards, leveling (multi-level jumps), absolute XP
- Daily streak bookkeeping
- Badge evaluation
- Accuracy statistics for dashboards
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Dict, List, Optional, Sequence

from ..config import config
from ..models.badges import BADGE_DEFINITIONS, BadgeDefinition
from ..models.quiz_models import Difficulty, QuizCategory, QuizResult
from ..models.user_profile import Badge, UserProfile, absolute_xp

logger = logging.getLogger(__name__)

__all__ = [
    "absolute_xp",
    "accuracy_for_category",
    "apply_xp",
    "best_result",
    "category_breakdown",
    "evaluate_badges",
    "quizzes_taken",
    "total_accuracy",
    "update_streak",
    "xp_for_daily_challenge",
    "xp_for_level",
    "xp_for_result",
    "xp_for_score",
]


# ==================== XP & Levels ====================


def xp_for_level(level: int) -> int:
    """XP needed to leave ``level``."""
    return level * config.progression.xp_per_level


def apply_xp(profile: UserProfile, amount: int) -> int:
    """
    Add XP and level up as many times as it covers.

    Args:
        profile: Profile to mutate
        amount: Non-negative XP to add

    Returns:
        Number of levels gained

    Example:
        >>> p = UserProfile(level=1, xp=140)
        >>> apply_xp(p, 20), p.level, p.xp
        (1, 2, 10)
    """
    if amount < 0:
        raise ValueError(f"XP amount cannot be negative: {amount}")

    profile.xp += amount
    levels_gained = 0
    while profile.xp >= xp_for_level(profile.level):
        profile.xp -= xp_for_level(profile.level)
        profile.level += 1
        levels_gained += 1

    if levels_gained:
        logger.info("%s reached level %d (+%d)", profile.name, profile.level, levels_gained)
    return levels_gained


def xp_for_score(score: int, difficulty: Difficulty) -> int:
    """round(score × 10 × difficulty multiplier)."""
    return int(round(score * config.progression.xp_per_correct * Difficulty(difficulty).multiplier))


def xp_for_result(result: QuizResult) -> int:
    """XP earned by a regular (non-daily) quiz result."""
    return xp_for_score(result.score, result.difficulty)


def xp_for_daily_challenge(score: int) -> int:
    """Daily challenge XP: flat bonus per correct answer, no difficulty multiplier."""
    return score * config.progression.daily_xp_per_correct


# ==================== Streak ====================


def update_streak(profile: UserProfile, today: date) -> bool:
    """
    Record activity on ``today``.

    - First activity ever: streak = 1
    - Already active today: no change
    - Active yesterday: streak + 1
    - Any other gap: streak resets to 1

    Returns:
        True if the profile changed
    """
    last = profile.last_active
    if last is not None and last == today:
        return False

    if last is not None and (today - last).days == 1:
        profile.streak += 1
    else:
        profile.streak = 1
    profile.last_active = today
    return True


# ==================== Badges ====================


def evaluate_badges(
    profile: UserProfile,
    results: Sequence[QuizResult],
    now: datetime,
    definitions: Optional[Sequence[BadgeDefinition]] = None,
) -> List[Badge]:
    """
    Unlock every badge whose requirement is newly met.

    Args:
        profile: Profile to append unlocked badges to
        results: Full quiz history
        now: Unlock timestamp
        definitions: Badge definitions (defaults to BADGE_DEFINITIONS)

    Returns:
        Badges unlocked by this call, in definition order
    """
    unlocked = profile.unlocked_badge_ids
    new_badges = []
    for definition in definitions if definitions is not None else BADGE_DEFINITIONS:
        if definition.badge_id in unlocked:
            continue
        if definition.is_met(profile, results):
            new_badges.append(
                Badge(
                    badge_id=definition.badge_id,
                    name=definition.title,
                    icon=definition.icon,
                    description=definition.description,
                    is_unlocked=True,
                    unlocked_at=now,
                )
            )

    # Appended after the loop so predicates see the profile unchanged
    profile.badges.extend(new_badges)
    for badge in new_badges:
        logger.info("%s unlocked badge '%s'", profile.name, badge.badge_id)
    return new_badges


# ==================== Analytics ====================


def quizzes_taken(results: Sequence[QuizResult]) -> int:
    return len(results)


def total_accuracy(results: Sequence[QuizResult]) -> float:
    """Mean accuracy across results (0.0 with no history)."""
    if not results:
        return 0.0
    return sum(r.accuracy for r in results) / len(results)


def accuracy_for_category(results: Sequence[QuizResult], category: QuizCategory) -> float:
    """Mean accuracy for one category (0.0 if never played)."""
    category = QuizCategory(category)
    return total_accuracy([r for r in results if r.category is category])


def category_breakdown(results: Sequence[QuizResult]) -> Dict[str, Dict[str, float]]:
    """
    Attempts and mean accuracy for every category.

    Example:
        >>> category_breakdown(results)["binary_decimal"]
        {'attempts': 3, 'accuracy': 0.8}
    """
    breakdown = {}
    for category in QuizCategory:
        played = [r for r in results if r.category is category]
        breakdown[category.value] = {
            "attempts": len(played),
            "accuracy": round(total_accuracy(played), 4),
        }
    return breakdown


def best_result(results: Sequence[QuizResult]) -> Optional[QuizResult]:
    """Highest-accuracy result; ties go to the higher score, then the earlier one."""
    if not results:
        return None
    return max(results, key=lambda r: (r.accuracy, r.score))
