"""
Core Models Package

Immutable, validated data models shared by detection, extraction and grading.

**DESIGN RATIONALE:**

All models in this package are frozen dataclasses. This ensures:
1. An answer cannot change between extraction and grading
2. A finished ExamScore is safe to hand to reporting code
3. Grading the same answers twice yields equal results
"""

from .answers import Answer, AnswerType, NO_SELECTION
from .results import ExamScore, QuestionResult

__all__ = [
    "Answer",
    "AnswerType",
    "NO_SELECTION",
    "ExamScore",
    "QuestionResult",
]
