"""
Module: grading.comparator

Purpose:
    Compares a student answer against the key answer and scores how
    close two text answers are. compare_answer() is the single entry
    point the score calculator uses; calculate_text_similarity() feeds
    partial-credit decisions.

Key Functions:
    - AnswerComparator.compare_answer(): Type-dispatched equality
    - AnswerComparator.calculate_text_similarity(): Normalized Levenshtein similarity

Dependencies:
    - Levenshtein: Exact unit-cost edit distance
    - core.models.answers

Used By:
    - grading.score_calculator.ScoreCalculator
"""

from __future__ import annotations

import logging

import Levenshtein

from ..core.models.answers import Answer, AnswerType

logger = logging.getLogger(__name__)


class AnswerComparator:
    """
    Normalizes and compares answers.

    Text is normalized by trimming surrounding whitespace and, unless the
    comparator is case-sensitive, lowercasing.

    Attributes:
        case_sensitive: Whether text comparison keeps letter case

    Example:
        >>> comparator = AnswerComparator()
        >>> comparator.compare_fill_in_blank("  Istanbul ", "istanbul")
        True
        >>> round(comparator.calculate_text_similarity("kitten", "sitting"), 4)
        0.5714
    """

    def __init__(self, case_sensitive: bool = False):
        self.case_sensitive = case_sensitive

    def set_case_sensitive(self, sensitive: bool) -> None:
        self.case_sensitive = sensitive

    def normalize_text(self, text: str) -> str:
        normalized = text.strip()
        if not self.case_sensitive:
            normalized = normalized.lower()
        return normalized

    # ─────────────────────────────────────────────────────────────────────────
    # Type-specific comparison
    # ─────────────────────────────────────────────────────────────────────────

    def compare_multiple_choice(self, student_option: int, correct_option: int) -> bool:
        return student_option == correct_option

    def compare_true_false(self, student_option: int, correct_option: int) -> bool:
        return student_option == correct_option

    def compare_fill_in_blank(self, student_text: str, correct_text: str) -> bool:
        return self.normalize_text(student_text) == self.normalize_text(correct_text)

    def compare_answer(self, student_answer: Answer, correct_answer: Answer) -> bool:
        """
        Compare a student answer against the key answer.

        Answers for different questions or of different types never match.

        Args:
            student_answer: Answer read from the sheet
            correct_answer: Canonical answer from the key

        Returns:
            True if the answers match under the type's comparison rule
        """
        if (student_answer.question_number != correct_answer.question_number
                or student_answer.type is not correct_answer.type):
            return False

        if correct_answer.type is AnswerType.FILL_IN_BLANK:
            return self.compare_fill_in_blank(
                student_answer.text_answer, correct_answer.text_answer
            )
        if correct_answer.type is AnswerType.TRUE_FALSE:
            return self.compare_true_false(
                student_answer.selected_option, correct_answer.selected_option
            )
        return self.compare_multiple_choice(
            student_answer.selected_option, correct_answer.selected_option
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Similarity
    # ─────────────────────────────────────────────────────────────────────────

    def calculate_text_similarity(self, text1: str, text2: str) -> float:
        """
        Normalized Levenshtein similarity of two answers.

        similarity = 1 - distance / max(len1, len2), never below 0.
        Both texts empty after normalization score 1.0; exactly one empty
        scores 0.0.

        Args:
            text1: First text (student or key, order does not matter)
            text2: Second text

        Returns:
            Similarity in [0.0, 1.0]
        """
        norm1 = self.normalize_text(text1)
        norm2 = self.normalize_text(text2)

        if not norm1 and not norm2:
            return 1.0
        if not norm1 or not norm2:
            return 0.0

        distance = Levenshtein.distance(norm1, norm2)
        similarity = 1.0 - distance / max(len(norm1), len(norm2))
        logger.debug(f"Similarity {norm1!r} vs {norm2!r}: distance={distance} similarity={similarity:.4f}")
        return max(0.0, similarity)
