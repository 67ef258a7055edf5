"""
Module: results

Purpose:
    Provides QuestionResult and ExamScore - the immutable outcome of one
    grading run. ExamScore is built once by ScoreCalculator and is
    read-only afterwards.

Key Functions:
    - QuestionResult.is_partial: Partially credited but not correct
    - ExamScore.answered: Questions with a student answer
    - ExamScore.to_dict(): JSON-friendly export for reporting code

Dependencies:
    - dataclasses (std)
    - .answers.Answer

Used By:
    - grading.score_calculator.ScoreCalculator
    - cli
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from .answers import Answer


@dataclass(frozen=True, slots=True)
class QuestionResult:
    """
    Grading outcome for one question.

    Attributes:
        question_number: Graded question
        is_correct: Student answer matched the key exactly
        student_answer: Answer the student gave, None if unanswered
        correct_answer: Canonical answer from the key
        partial_credit: Fraction of the question's points earned (0.0-1.0)

    Invariants:
        - is_correct implies partial_credit == 1.0
        - 0.0 <= partial_credit <= 1.0
    """

    question_number: int
    is_correct: bool
    student_answer: Optional[Answer]
    correct_answer: Answer
    partial_credit: float = 0.0

    def __post_init__(self) -> None:
        """Validate credit bounds."""
        if not 0.0 <= self.partial_credit <= 1.0:
            raise ValueError(f"partial_credit must be within [0, 1]: {self.partial_credit}")
        if self.is_correct and self.partial_credit != 1.0:
            raise ValueError(
                f"Correct answer for question {self.question_number} "
                f"must earn full credit, got {self.partial_credit}"
            )

    @property
    def is_answered(self) -> bool:
        return self.student_answer is not None

    @property
    def is_partial(self) -> bool:
        """Earned some credit without being fully correct."""
        return not self.is_correct and self.partial_credit > 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "question": self.question_number,
            "correct": self.is_correct,
            "partial_credit": self.partial_credit,
            "student_answer": self.student_answer.to_dict() if self.student_answer else None,
            "correct_answer": self.correct_answer.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class ExamScore:
    """
    Aggregate result of grading one exam sheet.

    Partially credited answers are counted in neither correct_answers nor
    incorrect_answers, so the three counters may sum to less than
    total_questions. raw_score and percentage_score still include them.

    Attributes:
        total_questions: Questions in the answer key
        correct_answers: Questions answered exactly right
        incorrect_answers: Answered questions that earned no credit
        unanswered: Questions with no student answer
        raw_score: Sum of weight * partial credit
        percentage_score: raw_score over the total weight, 0-100
        question_results: Per-question outcomes, ascending question number

    Example:
        >>> score.correct_answers + score.incorrect_answers + score.unanswered <= score.total_questions
        True
    """

    total_questions: int = 0
    correct_answers: int = 0
    incorrect_answers: int = 0
    unanswered: int = 0
    raw_score: float = 0.0
    percentage_score: float = 0.0
    question_results: Tuple[QuestionResult, ...] = field(default_factory=tuple)

    @property
    def answered(self) -> int:
        """Questions the student gave any answer for."""
        return self.total_questions - self.unanswered

    @property
    def partially_credited(self) -> int:
        """Questions counted neither correct nor incorrect."""
        return sum(1 for result in self.question_results if result.is_partial)

    def result_for(self, question_number: int) -> Optional[QuestionResult]:
        """Find the result for a question, or None if it was not graded."""
        for result in self.question_results:
            if result.question_number == question_number:
                return result
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_questions": self.total_questions,
            "correct_answers": self.correct_answers,
            "incorrect_answers": self.incorrect_answers,
            "unanswered": self.unanswered,
            "raw_score": self.raw_score,
            "percentage_score": self.percentage_score,
            "question_results": [result.to_dict() for result in self.question_results],
        }
