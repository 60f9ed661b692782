"""
Utility modules for NeuroNet.

This module contains utility functions:
- conversion: Number-system and IPv4 conversions with step traces
- clock / randomness: Injectable time and random sources
- progress: XP, leveling, streaks, badges and accuracy statistics
- validation: JSON Schema validation with auto-repair
- persistence: Progress stores (in-memory and JSON files)
- countdown: Asyncio driver for a session's question timer
"""

from .conversion import (
    ConversionMode,
    ConversionOutcome,
    ConversionStep,
    SubnetSummary,
    cidr_to_mask,
    convert,
    ip_to_binary_dotted,
    subnet_summary,
)
from .clock import Clock, SystemClock
from .randomness import RandomSource
from .progress import (
    apply_xp,
    evaluate_badges,
    total_accuracy,
    accuracy_for_category,
    update_streak,
)
from .validation import (
    LeaderboardValidator,
    QuizResultsValidator,
    UserProfileValidator,
    validate_leaderboard,
    validate_quiz_results,
    validate_user_profile,
)
from .persistence import (
    InMemoryProgressStore,
    JsonFileProgressStore,
    ProgressStore,
)
from .countdown import CountdownTicker

__all__ = [
    # Conversion
    "ConversionMode",
    "ConversionOutcome",
    "ConversionStep",
    "SubnetSummary",
    "cidr_to_mask",
    "convert",
    "ip_to_binary_dotted",
    "subnet_summary",
    # Collaborators
    "Clock",
    "SystemClock",
    "RandomSource",
    # Progression
    "apply_xp",
    "evaluate_badges",
    "total_accuracy",
    "accuracy_for_category",
    "update_streak",
    # Validation
    "UserProfileValidator",
    "QuizResultsValidator",
    "LeaderboardValidator",
    "validate_user_profile",
    "validate_quiz_results",
    "validate_leaderboard",
    # Persistence
    "ProgressStore",
    "InMemoryProgressStore",
    "JsonFileProgressStore",
    # Countdown
    "CountdownTicker",
]
