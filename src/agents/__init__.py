"""
Question sources for NeuroNet quizzes.

This module contains:
- QuestionGenerator: Procedural numeric questions, curated concept pools,
  mixed delegation and the deterministic daily challenge
- question_bank: Curated networking question pools

Note: QuizSession is in src/models (state machine, not a question source)
"""

from .question_bank import (
    CONCEPT_POOLS,
    DAILY_CHALLENGE_POOL,
    IP_ADDRESSING_POOL,
    PROTOCOLS_POOL,
    SUBNETTING_POOL,
)
from .question_generator import QuestionGenerator

__all__ = [
    "QuestionGenerator",
    "CONCEPT_POOLS",
    "DAILY_CHALLENGE_POOL",
    "IP_ADDRESSING_POOL",
    "PROTOCOLS_POOL",
    "SUBNETTING_POOL",
]
