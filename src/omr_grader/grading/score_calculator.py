"""
Module: grading.score_calculator

Purpose:
    Grades one sheet's answers against an AnswerKey and aggregates the
    outcome into an ExamScore, applying per-question weights and partial
    credit for near-miss fill-in-the-blank answers.

Key Classes:
    - ScoreCalculator: Weighted grading with partial credit

Dependencies:
    - grading.answer_key.AnswerKey
    - grading.comparator.AnswerComparator
    - core.models

Used By:
    - config.GradingConfig.build_score_calculator
    - cli

Counting quirk:
    A partially credited answer is counted in neither correct_answers nor
    incorrect_answers. Its credit still goes into raw_score and
    percentage_score. Reports built on these counters rely on this.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List

from ..common.thresholds import GRADING_THRESHOLDS
from ..core.models.answers import Answer, AnswerType
from ..core.models.results import ExamScore, QuestionResult
from .answer_key import AnswerKey
from .comparator import AnswerComparator

logger = logging.getLogger(__name__)

STATISTIC_NAMES = (
    "Total Questions",
    "Correct Answers",
    "Incorrect Answers",
    "Unanswered",
    "Raw Score",
    "Percentage",
    "Accuracy Rate",
)


class ScoreCalculator:
    """
    Grades student answers against a key.

    The key and comparator are held by reference and read during
    calculate_score(); they must not be mutated while a run is in flight.

    Numeric setters ignore out-of-range values and keep the previous
    setting (weights must be > 0, the threshold within [0, 1]). With
    strict=True they raise ValueError instead.

    Example:
        >>> calculator = ScoreCalculator(key, AnswerComparator())
        >>> calculator.set_question_points(5, 2.0)
        >>> score = calculator.calculate_score(answers)
        >>> score.percentage_score
        75.0
    """

    def __init__(
        self,
        answer_key: AnswerKey,
        comparator: AnswerComparator,
        *,
        strict: bool = False,
    ):
        self.answer_key = answer_key
        self.comparator = comparator
        self.strict = strict
        self._points_per_question = GRADING_THRESHOLDS.points_per_question
        self._question_points: Dict[int, float] = {}
        self._partial_credit_enabled = True
        self._partial_credit_threshold = GRADING_THRESHOLDS.partial_credit_threshold

    # ─────────────────────────────────────────────────────────────────────────
    # Configuration
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def points_per_question(self) -> float:
        return self._points_per_question

    @property
    def partial_credit_enabled(self) -> bool:
        return self._partial_credit_enabled

    @property
    def partial_credit_threshold(self) -> float:
        return self._partial_credit_threshold

    def set_points_per_question(self, points: float) -> None:
        if points > 0.0:
            self._points_per_question = points
        else:
            self._reject(f"points per question must be positive: {points}")

    def set_question_points(self, question_num: int, points: float) -> None:
        if points > 0.0:
            self._question_points[question_num] = points
        else:
            self._reject(f"points for question {question_num} must be positive: {points}")

    def set_partial_credit_enabled(self, enable: bool) -> None:
        self._partial_credit_enabled = enable

    def set_partial_credit_threshold(self, threshold: float) -> None:
        if 0.0 <= threshold <= 1.0:
            self._partial_credit_threshold = threshold
        else:
            self._reject(f"partial credit threshold must be within [0, 1]: {threshold}")

    def _reject(self, message: str) -> None:
        if self.strict:
            raise ValueError(message)
        logger.debug(f"Ignored setting: {message}")

    def question_points(self, question_num: int) -> float:
        """Weight of a question: its override if set, else the default."""
        return self._question_points.get(question_num, self._points_per_question)

    # ─────────────────────────────────────────────────────────────────────────
    # Grading
    # ─────────────────────────────────────────────────────────────────────────

    def calculate_score(self, student_answers: Iterable[Answer]) -> ExamScore:
        """
        Grade a sheet.

        Questions 1..N are visited in order, where N is the number of
        questions in the key; numbers the key lacks are skipped. A later
        student answer for the same question replaces an earlier one.

        Args:
            student_answers: Answers extracted from the sheet

        Returns:
            ExamScore with one QuestionResult per graded question
        """
        by_question = {answer.question_number: answer for answer in student_answers}
        total_questions = self.answer_key.get_total_questions()

        correct = incorrect = unanswered = 0
        raw_score = 0.0
        max_score = 0.0
        results: List[QuestionResult] = []

        for question_num in range(1, total_questions + 1):
            if not self.answer_key.has_answer(question_num):
                continue

            correct_answer = self.answer_key.get_answer(question_num)
            student_answer = by_question.get(question_num)

            if student_answer is None:
                is_correct = False
                credit = 0.0
                unanswered += 1
            else:
                is_correct = self.comparator.compare_answer(student_answer, correct_answer)
                if is_correct:
                    credit = 1.0
                    correct += 1
                else:
                    credit = self._partial_credit(student_answer, correct_answer)
                    if credit == 0.0:
                        incorrect += 1

            logger.debug(
                f"Question {question_num}: correct={is_correct} credit={credit:.4f} "
                f"answered={student_answer is not None}"
            )
            results.append(QuestionResult(
                question_number=question_num,
                is_correct=is_correct,
                student_answer=student_answer,
                correct_answer=correct_answer,
                partial_credit=credit,
            ))

            points = self.question_points(question_num)
            raw_score += points * credit
            max_score += points

        percentage = raw_score / max_score * 100.0 if max_score > 0.0 else 0.0

        return ExamScore(
            total_questions=total_questions,
            correct_answers=correct,
            incorrect_answers=incorrect,
            unanswered=unanswered,
            raw_score=raw_score,
            percentage_score=percentage,
            question_results=tuple(results),
        )

    def _partial_credit(self, student_answer: Answer, correct_answer: Answer) -> float:
        """Similarity as credit for near-miss fill-in answers, else 0.0."""
        if not self._partial_credit_enabled:
            return 0.0
        if (student_answer.type is not AnswerType.FILL_IN_BLANK
                or correct_answer.type is not AnswerType.FILL_IN_BLANK):
            return 0.0

        similarity = self.comparator.calculate_text_similarity(
            student_answer.text_answer, correct_answer.text_answer
        )
        if similarity >= self._partial_credit_threshold:
            return similarity
        return 0.0

    def get_statistics(self, score: ExamScore) -> Dict[str, float]:
        """
        Summary figures for a finished score.

        Accuracy Rate is correct answers over answered questions, as a
        percentage (0 when nothing was answered).
        """
        answered = score.total_questions - score.unanswered
        accuracy = score.correct_answers / answered * 100.0 if answered > 0 else 0.0

        return {
            "Total Questions": float(score.total_questions),
            "Correct Answers": float(score.correct_answers),
            "Incorrect Answers": float(score.incorrect_answers),
            "Unanswered": float(score.unanswered),
            "Raw Score": score.raw_score,
            "Percentage": score.percentage_score,
            "Accuracy Rate": accuracy,
        }
