"""
Unit Tests for AnswerComparator

Tests for normalization, type-dispatched comparison and normalized
Levenshtein similarity.
"""

import pytest

from omr_grader.core.models.answers import Answer
from omr_grader.grading.comparator import AnswerComparator


class TestEditDistanceSimilarity:
    """Spot checks for similarity derived from the exact edit distance."""

    @pytest.mark.parametrize("first, second, distance", [
        ("kitten", "sitting", 3),
        ("flaw", "lawn", 2),
        ("ankar", "ankara", 1),
        ("abc", "cba", 2),
        ("same", "same", 0),
    ])
    def test_similarity_when_pair_then_one_minus_distance_over_longest(self, comparator, first, second, distance):
        expected = 1.0 - distance / max(len(first), len(second))
        assert comparator.calculate_text_similarity(first, second) == pytest.approx(expected)


class TestCompare:
    """Tests for the compare_* methods."""

    def test_compare_fill_in_blank_when_whitespace_and_case_differ_then_equal(self, comparator):
        assert comparator.compare_fill_in_blank("  Istanbul\t", "istanbul")

    def test_compare_fill_in_blank_when_case_sensitive_then_case_matters(self):
        comparator = AnswerComparator(case_sensitive=True)
        assert not comparator.compare_fill_in_blank("Istanbul", "istanbul")
        assert comparator.compare_fill_in_blank(" Istanbul ", "Istanbul")

    def test_compare_fill_in_blank_when_inner_whitespace_differs_then_not_equal(self, comparator):
        assert not comparator.compare_fill_in_blank("Mustafa  Kemal", "Mustafa Kemal")

    def test_compare_multiple_choice_when_equal_options_then_true(self, comparator):
        assert comparator.compare_multiple_choice(2, 2)
        assert not comparator.compare_multiple_choice(-1, 2)
        assert comparator.compare_true_false(0, 0)
        assert not comparator.compare_true_false(1, 0)

    def test_compare_answer_when_question_numbers_differ_then_false(self, comparator):
        assert not comparator.compare_answer(Answer.multiple_choice(1, 2), Answer.multiple_choice(2, 2))

    def test_compare_answer_when_types_differ_then_false(self, comparator):
        assert not comparator.compare_answer(Answer.true_false(1, True), Answer.multiple_choice(1, 0))

    @pytest.mark.parametrize("student, correct, expected", [
        (Answer.multiple_choice(1, 2), Answer.multiple_choice(1, 2), True),
        (Answer.multiple_choice(1, -1), Answer.multiple_choice(1, 2), False),
        (Answer.true_false(3, True), Answer.true_false(3, True), True),
        (Answer.true_false(3, False), Answer.true_false(3, True), False),
        (Answer.fill_in_blank(2, " ANKARA "), Answer.fill_in_blank(2, "Ankara"), True),
        (Answer.fill_in_blank(2, "ankar"), Answer.fill_in_blank(2, "Ankara"), False),
    ])
    def test_compare_answer_when_same_question_then_dispatches_by_type(self, comparator, student, correct, expected):
        assert comparator.compare_answer(student, correct) is expected

    def test_set_case_sensitive_when_toggled_then_applies(self, comparator):
        comparator.set_case_sensitive(True)
        assert not comparator.compare_fill_in_blank("A", "a")


class TestTextSimilarity:
    """Tests for calculate_text_similarity."""

    def test_similarity_when_both_empty_then_one(self, comparator):
        assert comparator.calculate_text_similarity("", "") == 1.0

    def test_similarity_when_both_whitespace_then_one(self, comparator):
        assert comparator.calculate_text_similarity("   ", "\t") == 1.0

    def test_similarity_when_one_empty_then_zero(self, comparator):
        assert comparator.calculate_text_similarity("", "x") == 0.0
        assert comparator.calculate_text_similarity("x", "") == 0.0

    def test_similarity_when_case_differs_then_one(self, comparator):
        assert comparator.calculate_text_similarity("Istanbul", "istanbul") == 1.0

    def test_similarity_when_case_sensitive_then_case_counts(self):
        comparator = AnswerComparator(case_sensitive=True)
        assert comparator.calculate_text_similarity("Istanbul", "istanbul") == pytest.approx(1 - 1 / 8)

    def test_similarity_when_kitten_sitting_then_levenshtein_ratio(self, comparator):
        assert comparator.calculate_text_similarity("kitten", "sitting") == pytest.approx(1 - 3 / 7)
        assert comparator.calculate_text_similarity("kitten", "sitting") == pytest.approx(0.5714, abs=1e-4)

    def test_similarity_when_nothing_shared_then_zero(self, comparator):
        assert comparator.calculate_text_similarity("abc", "xyz") == 0.0

    @pytest.mark.parametrize("a, b", [
        ("kitten", "sitting"),
        ("ankar", "Ankara"),
        ("1923", "1932"),
        ("Mustafa Kemal", "mustafa"),
        ("a", "abcdefgh"),
        ("", "Cumhuriyet"),
    ])
    def test_similarity_when_pair_then_symmetric_and_bounded(self, comparator, a, b):
        forward = comparator.calculate_text_similarity(a, b)
        backward = comparator.calculate_text_similarity(b, a)
        assert forward == backward
        assert 0.0 <= forward <= 1.0
        assert comparator.calculate_text_similarity(a, a) == 1.0
