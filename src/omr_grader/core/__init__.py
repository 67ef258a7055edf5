"""
OMR Grader Core Package

Shared data models: answers coming off a sheet or out of an answer key, and
the results produced by grading them.
"""

from .models import Answer, AnswerType, ExamScore, NO_SELECTION, QuestionResult

__all__ = [
    "Answer",
    "AnswerType",
    "ExamScore",
    "NO_SELECTION",
    "QuestionResult",
]
