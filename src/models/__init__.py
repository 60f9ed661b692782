"""
Data models for NeuroNet.

This module contains core data models:
- QuizQuestion / QuizResult: Questions and finished quiz runs
- UserProfile / Badge: Player identity, XP, level, streak and achievements
- BadgeDefinition: Unlockable achievements and their predicates
- LeaderboardEntry: Ranked player snapshots

QuizSession lives in ``src.models.quiz_session`` and is imported from there
directly, since it depends on the question generator.
"""

from .quiz_models import (
    CONCEPT_CATEGORIES,
    CONCRETE_CATEGORIES,
    NUMERIC_CATEGORIES,
    Difficulty,
    QuizCategory,
    QuizQuestion,
    QuizResult,
)
from .user_profile import AVATARS, Badge, UserProfile, absolute_xp
from .badges import BADGE_DEFINITIONS, BadgeDefinition
from .leaderboard import LeaderboardEntry, entry_for_profile, rank_of, upsert

__all__ = [
    # Quiz
    "QuizCategory",
    "Difficulty",
    "QuizQuestion",
    "QuizResult",
    "NUMERIC_CATEGORIES",
    "CONCEPT_CATEGORIES",
    "CONCRETE_CATEGORIES",
    # Profile
    "AVATARS",
    "Badge",
    "UserProfile",
    "absolute_xp",
    "BADGE_DEFINITIONS",
    "BadgeDefinition",
    # Leaderboard
    "LeaderboardEntry",
    "entry_for_profile",
    "upsert",
    "rank_of",
]
