"""
Grading Package

Answer key storage, answer comparison and score aggregation.
"""

from .answer_key import AnswerKey
from .comparator import AnswerComparator
from .presets import example_answer_key
from .score_calculator import ScoreCalculator

__all__ = [
    "AnswerKey",
    "AnswerComparator",
    "ScoreCalculator",
    "example_answer_key",
]
